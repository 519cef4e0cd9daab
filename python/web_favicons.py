#!/usr/bin/env python3
"""Generate the website favicon bundle and its HTML include snippet."""

from pathlib import Path

from asset_constants import FAVICONS_HTML_FILE
from favicon_engine import favicons


def build_favicon_configuration(app_name):
    """Fixed favicon configuration for an application name."""
    return {
        "path": "/",
        "app_name": app_name,
        "app_short_name": app_name,
        "app_description": f"{app_name} application",
        "developer_name": "",
        "developer_url": None,
        "dir": "auto",
        "lang": "en-US",
        "background": "#ffffff",
        "theme_color": "#ffffff",
        "display": "standalone",
        "orientation": "any",
        "scope": "/",
        "start_url": "/",
        "version": "1.0",
        "pixel_art": False,
        "load_manifest_with_credentials": False,
        "icons": {
            "android": True,
            "apple_icon": True,
            "apple_startup": False,
            "coast": False,
            "favicons": True,
            "windows": True,
            "yandex": False,
        },
    }


def write_favicon_response(response, out_dir):
    """Write engine output into out_dir; returns the favicons.html path."""
    output_dir = Path(out_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for image in response.images:
        (output_dir / image.name).write_bytes(image.contents)

    for file in response.files:
        if isinstance(file.contents, bytes):
            (output_dir / file.name).write_bytes(file.contents)
        else:
            (output_dir / file.name).write_text(file.contents, encoding="utf-8")

    html_path = output_dir / FAVICONS_HTML_FILE
    html_path.write_bytes("\n".join(response.html).encode("utf-8"))
    return html_path


def generate_favicons(base_png, out_dir, app_name):
    """
    Render the favicon bundle for app_name from the base raster.

    Args:
        base_png: Path to the base raster PNG
        out_dir: Output directory for favicon images, manifest files and favicons.html
        app_name: Application display name

    Returns:
        Path to the written favicons.html
    """
    source = Path(base_png).read_bytes()
    response = favicons(source, build_favicon_configuration(app_name))
    return write_favicon_response(response, out_dir)
