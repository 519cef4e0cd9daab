#!/usr/bin/env python3
"""Export plain PNG sizes straight from the source image."""

import concurrent.futures
from pathlib import Path

from asset_constants import PNG_SIZES
from asset_errors import FatalPipelineError
from base_raster import write_contained_png


def export_png_sizes(input_file, out_dir, app_name, sizes=PNG_SIZES):
    """
    Write <app_name>-<size>.png for every size, concurrently.

    Every size is attempted. Sizes that succeed stay on disk even when
    another size fails; the batch then raises FatalPipelineError.

    Returns:
        List of written paths, in the order of `sizes`
    """
    output_dir = Path(out_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    with concurrent.futures.ThreadPoolExecutor(max_workers=len(sizes) or 1) as executor:
        futures = {
            size: executor.submit(
                write_contained_png, input_file, output_dir / f"{app_name}-{size}.png", size
            )
            for size in sizes
        }

    written = []
    failures = []
    for size, future in futures.items():
        error = future.exception()
        if error is None:
            written.append(future.result())
        else:
            failures.append((size, error))

    if failures:
        details = "; ".join(f"{size}px: {error}" for size, error in failures)
        raise FatalPipelineError(
            f"PNG export failed for {len(failures)} of {len(sizes)} sizes ({details})"
        ) from failures[0][1]

    return written
