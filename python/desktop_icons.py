#!/usr/bin/env python3
"""Package the base raster into Windows ICO and macOS ICNS icon containers."""

from pathlib import Path

from PIL import Image

from asset_constants import ICO_SIZES

DESKTOP_FORMATS = ("ICO", "ICNS")


def generate_desktop_icons(base_png, out_dir, base_name):
    """
    Write <base_name>.ico and <base_name>.icns into out_dir.

    Returns:
        List of created icon paths, one per container format
    """
    output_dir = Path(out_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    created = []
    with Image.open(base_png) as image:
        image = image.convert("RGBA")
        for icon_format in DESKTOP_FORMATS:
            output_path = output_dir / f"{base_name}.{icon_format.lower()}"
            if icon_format == "ICO":
                image.save(output_path, format="ICO", sizes=ICO_SIZES)
            else:
                image.save(output_path, format="ICNS")
            print(f"Created icon: {output_path}")
            created.append(output_path)

    return created
