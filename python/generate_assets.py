#!/usr/bin/env python3
"""
Icon Asset Generator - builds desktop icons, web favicons, PNG sizes and an
optional SVG trace from a single source image.

Usage:
    python generate_assets.py [--input <file>] [--name <app name>] [--out <dir>]

Short aliases: --i, --n, --o. Output layout under the output root:
    electron/   <name>.ico, <name>.icns
    web/        favicon images, manifest files, favicons.html
    png/        <name>-<size>.png
    vector/     <name>.svg (only when tracing succeeds in time)
"""

import shutil
import sys
import traceback
from contextlib import contextmanager
from pathlib import Path

from asset_constants import (
    BASE_RASTER_SIZE,
    ELECTRON_SUBDIR,
    PNG_SUBDIR,
    TMP_SUBDIR,
    TRACE_TIMEOUT_SECONDS,
    VECTOR_SUBDIR,
    WEB_SUBDIR,
)
from asset_errors import UserInputError
from base_raster import ensure_base_png
from desktop_icons import generate_desktop_icons
from raster_export import export_png_sizes
from run_config import parse_args, resolve_run_config, validate_run_config
from svg_trace import generate_traced_svg
from web_favicons import generate_favicons

USAGE = "Usage: generate_assets.py [--input <file>] [--name <app name>] [--out <dir>]"


@contextmanager
def temporary_workspace(tmp_dir):
    """Yield tmp_dir and remove it afterwards, whatever happened inside."""
    tmp_path = Path(tmp_dir)
    try:
        yield tmp_path
    finally:
        shutil.rmtree(tmp_path, ignore_errors=True)


def trace_vector(input_file, out_dir, app_name, timeout):
    """Run the optional SVG trace; any failure is reported as a warning only."""
    print("Tracing SVG from source...")
    try:
        svg_path = generate_traced_svg(input_file, out_dir, app_name, timeout=timeout)
    except Exception as e:
        print(f"Warning: SVG tracing failed or timed out; continuing without vector: {e}", file=sys.stderr)
        return None

    if svg_path:
        print(f"SVG traced -> {svg_path}")
    else:
        print("SVG tracing skipped.")
    return svg_path


def run_pipeline(config, trace_timeout=TRACE_TIMEOUT_SECONDS):
    """
    Generate every asset for a resolved run configuration.

    Args:
        config: RunConfig with input_path, app_name and out_dir
        trace_timeout: Seconds to wait for the SVG trace before giving up on it

    Returns:
        The output root directory

    Raises:
        UserInputError: the input image does not exist (nothing is created)
    """
    validate_run_config(config)

    out_dir = Path(config.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    with temporary_workspace(out_dir / TMP_SUBDIR) as tmp_dir:
        base_png = ensure_base_png(config.input_path, tmp_dir, BASE_RASTER_SIZE)

        electron_out = out_dir / ELECTRON_SUBDIR
        print("Generating desktop icons (.ico, .icns)...")
        generate_desktop_icons(base_png, electron_out, config.app_name)
        print(f"Desktop icons done -> {electron_out}")

        web_out = out_dir / WEB_SUBDIR
        print("Generating website favicons...")
        generate_favicons(base_png, web_out, config.app_name)
        print(f"Favicons done -> {web_out}")

        # PNG sizes come before tracing so a slow trace never holds them back
        png_out = out_dir / PNG_SUBDIR
        export_png_sizes(config.input_path, png_out, config.app_name)
        print(f"Exported common PNG sizes -> {png_out}")

        trace_vector(config.input_path, out_dir / VECTOR_SUBDIR, config.app_name, trace_timeout)

    print(f"All done. Output in: {out_dir}")
    return out_dir


def main(argv=None):
    args = parse_args(sys.argv if argv is None else argv)

    if args.get("help") or args.get("h"):
        print(USAGE)
        return 0

    try:
        config = resolve_run_config(args)
        run_pipeline(config)
    except UserInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
