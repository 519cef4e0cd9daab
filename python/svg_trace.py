#!/usr/bin/env python3
"""
Best-effort bitmap-to-SVG tracing.

Tracing needs the optional potrace bindings (pip install potracer numpy).
When they are missing the trace step is skipped and the rest of the
pipeline is unaffected.
"""

import sys
import threading
from pathlib import Path

from PIL import Image, ImageColor

from asset_constants import (
    TRACE_BACKGROUND,
    TRACE_COLOR,
    TRACE_OPT_TOLERANCE,
    TRACE_THRESHOLD,
    TRACE_TIMEOUT_SECONDS,
    TRACE_TURD_SIZE,
)
from asset_errors import RecoverableTraceError, TraceTimeoutError

try:
    import numpy
    import potrace
except ImportError:
    numpy = None
    potrace = None


def tracer_available():
    """Return True when the potrace bindings could be imported."""
    return potrace is not None and numpy is not None


def threshold_bitmap(image, threshold=TRACE_THRESHOLD):
    """
    Flatten onto white and threshold luminance.

    Returns a boolean array where True marks light pixels (luminance at or
    above threshold). potrace inverts it, so darker pixels become the traced
    foreground.
    """
    image = image.convert("RGBA")
    flattened = Image.new("RGBA", image.size, (255, 255, 255, 255))
    flattened.alpha_composite(image)
    luminance = flattened.convert("L")
    return numpy.asarray(luminance) >= threshold


def _point(point):
    return f"{point.x:.3f},{point.y:.3f}"


def path_data(path_list):
    """Convert a traced path list into SVG path data."""
    parts = []
    for curve in path_list:
        parts.append(f"M{_point(curve.start_point)}")
        for segment in curve.segments:
            if segment.is_corner:
                parts.append(f"L{_point(segment.c)}L{_point(segment.end_point)}")
            else:
                parts.append(f"C{_point(segment.c1)} {_point(segment.c2)} {_point(segment.end_point)}")
        parts.append("Z")
    return "".join(parts)


def render_svg(path_list, width, height, color=TRACE_COLOR, background=TRACE_BACKGROUND):
    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}" version="1.1">'
    ]

    # A background with zero alpha is left out entirely
    if ImageColor.getrgb(background)[3:] != (0,):
        lines.append(f'  <rect x="0" y="0" width="100%" height="100%" fill="{background}"/>')

    lines.append(f'  <path d="{path_data(path_list)}" stroke="none" fill="{color}" fill-rule="evenodd"/>')
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def trace_svg(input_file):
    """
    Trace input_file into SVG markup.

    Runs in two phases: load and threshold the bitmap, then trace it and
    render the markup.
    """
    with Image.open(input_file) as image:
        bitmap = threshold_bitmap(image)
        width, height = image.size

    path_list = potrace.Bitmap(bitmap).trace(
        turdsize=TRACE_TURD_SIZE,
        opttolerance=TRACE_OPT_TOLERANCE,
    )
    return render_svg(path_list, width, height)


def run_with_timeout(func, timeout, *args):
    """
    Run func(*args) on a daemon thread and wait at most `timeout` seconds.

    The worker is not cancelled when the deadline passes. It keeps running in
    the background and whatever it produces afterwards is discarded.
    """
    outcome = {}

    def worker():
        try:
            outcome["result"] = func(*args)
        except BaseException as exc:
            outcome["error"] = exc

    thread = threading.Thread(target=worker, name=f"{getattr(func, '__name__', 'trace')}-worker", daemon=True)
    thread.start()
    thread.join(timeout)

    if thread.is_alive():
        raise TraceTimeoutError(f"Trace timeout after {timeout}s")
    error = outcome.get("error")
    if isinstance(error, Exception):
        raise error
    if "result" not in outcome:
        raise RecoverableTraceError(f"Trace worker stopped without a result: {error!r}") from error
    return outcome["result"]


def generate_traced_svg(input_file, out_dir, app_name, timeout=TRACE_TIMEOUT_SECONDS):
    """
    Trace input_file into <out_dir>/<app_name>.svg.

    Returns:
        Path to the SVG, or None when the tracer is unavailable

    Raises:
        TraceTimeoutError: tracing did not finish within timeout seconds
    """
    if not tracer_available():
        print("Warning: potrace module not available; skipping SVG tracing", file=sys.stderr)
        return None

    markup = run_with_timeout(trace_svg, timeout, input_file)

    output_dir = Path(out_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    svg_path = output_dir / f"{app_name}.svg"
    svg_path.write_text(markup, encoding="utf-8")
    return svg_path
