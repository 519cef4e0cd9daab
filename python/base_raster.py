#!/usr/bin/env python3
"""Prepare the canonical square PNG shared by the desktop and web icon generators."""

from pathlib import Path

from PIL import Image

from asset_constants import BASE_RASTER_SIZE

TRANSPARENT = (0, 0, 0, 0)


def contain_fit(image, size, resample=Image.Resampling.LANCZOS, background=TRANSPARENT):
    """
    Scale an image to fit inside a size x size square without cropping.

    The scaled image is centred and the remaining area is filled with
    `background` (fully transparent by default).
    """
    image = image.convert("RGBA")
    scale = min(size / image.width, size / image.height)
    fitted_width = max(1, round(image.width * scale))
    fitted_height = max(1, round(image.height * scale))

    if (fitted_width, fitted_height) != image.size:
        image = image.resize((fitted_width, fitted_height), resample)

    canvas = Image.new("RGBA", (size, size), background)
    offset = ((size - fitted_width) // 2, (size - fitted_height) // 2)
    if background[3] == 0:
        canvas.paste(image, offset)
    else:
        canvas.alpha_composite(image, offset)
    return canvas


def write_contained_png(input_file, output_file, size):
    """Contain-fit input_file into a size x size PNG at output_file."""
    output_path = Path(output_file)
    with Image.open(input_file) as image:
        canvas = contain_fit(image, size)
    canvas.save(output_path, format="PNG")
    return output_path


def ensure_base_png(input_file, tmp_dir, size=BASE_RASTER_SIZE):
    """
    Write the base raster for this run.

    Args:
        input_file: Source image path
        tmp_dir: Temporary directory for the run (created if missing)
        size: Edge length of the square output

    Returns:
        Path to base-<size>.png inside tmp_dir
    """
    tmp_path = Path(tmp_dir)
    tmp_path.mkdir(parents=True, exist_ok=True)
    return write_contained_png(input_file, tmp_path / f"base-{size}.png", size)
