#!/usr/bin/env python3
"""
Favicon engine - renders favicon images, manifest files and HTML tags.

Usage:
    response = favicons(source_bytes, configuration)

The configuration is a plain dictionary (see web_favicons.build_favicon_configuration).
Its "icons" entry selects which icon families are produced:

    android        android-chrome-*.png + manifest.webmanifest
    apple_icon     apple-touch-icon*.png
    apple_startup  apple-touch-startup-image-*.png
    coast          coast-228x228.png
    favicons       favicon-*.png + favicon.ico
    windows        mstile-*.png + browserconfig.xml
    yandex         yandex-browser-50x50.png + yandex-browser-manifest.json
"""

import json
from collections import namedtuple
from html import escape
from io import BytesIO

from PIL import Image, ImageColor

from base_raster import contain_fit

FaviconArtifact = namedtuple("FaviconArtifact", ["name", "contents"])
FaviconResponse = namedtuple("FaviconResponse", ["images", "files", "html"])

# name, width, height, share of the shorter edge covered by the icon, flatten on background
IconSpec = namedtuple("IconSpec", ["name", "width", "height", "scale", "flatten"])

ANDROID_ICONS = [
    IconSpec(f"android-chrome-{size}x{size}.png", size, size, 1.0, False)
    for size in (36, 48, 72, 96, 144, 192, 256, 384, 512)
]

APPLE_TOUCH_SIZES = (57, 60, 72, 76, 114, 120, 144, 152, 167, 180)
APPLE_ICONS = [
    IconSpec(f"apple-touch-icon-{size}x{size}.png", size, size, 1.0, True)
    for size in APPLE_TOUCH_SIZES
] + [
    IconSpec("apple-touch-icon-precomposed.png", 180, 180, 1.0, True),
    IconSpec("apple-touch-icon.png", 180, 180, 1.0, True),
]

# width, height, device pixel ratio (portrait)
APPLE_STARTUP_SCREENS = [
    (640, 1136, 2),
    (750, 1334, 2),
    (828, 1792, 2),
    (1125, 2436, 3),
    (1242, 2208, 3),
    (1242, 2688, 3),
    (1536, 2048, 2),
    (1668, 2224, 2),
    (1668, 2388, 2),
    (2048, 2732, 2),
]
APPLE_STARTUP_ICONS = [
    IconSpec(f"apple-touch-startup-image-{width}x{height}.png", width, height, 0.4, True)
    for width, height, _ in APPLE_STARTUP_SCREENS
]

COAST_ICONS = [IconSpec("coast-228x228.png", 228, 228, 1.0, True)]

FAVICON_PNG_SIZES = (16, 32, 48)
FAVICON_ICONS = [
    IconSpec(f"favicon-{size}x{size}.png", size, size, 1.0, False)
    for size in FAVICON_PNG_SIZES
]
FAVICON_ICO_SIZES = [(16, 16), (24, 24), (32, 32), (48, 48), (64, 64)]

WINDOWS_ICONS = [
    IconSpec("mstile-70x70.png", 70, 70, 1.0, False),
    IconSpec("mstile-144x144.png", 144, 144, 1.0, False),
    IconSpec("mstile-150x150.png", 150, 150, 1.0, False),
    IconSpec("mstile-310x150.png", 310, 150, 1.0, False),
    IconSpec("mstile-310x310.png", 310, 310, 1.0, False),
]

YANDEX_ICONS = [IconSpec("yandex-browser-50x50.png", 50, 50, 1.0, True)]

MANIFEST_FILE = "manifest.webmanifest"
BROWSERCONFIG_FILE = "browserconfig.xml"
YANDEX_MANIFEST_FILE = "yandex-browser-manifest.json"

DEFAULT_ICON_SELECTION = {
    "android": True,
    "apple_icon": True,
    "apple_startup": True,
    "coast": True,
    "favicons": True,
    "windows": True,
    "yandex": True,
}


def _url_prefix(configuration):
    prefix = configuration.get("path") or "/"
    if not prefix.endswith("/"):
        prefix += "/"
    return prefix


def _background_rgba(configuration):
    red, green, blue = ImageColor.getrgb(configuration.get("background", "#ffffff"))[:3]
    return (red, green, blue, 255)


def _encode_png(image):
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def render_icon(source, icon_spec, background, resample):
    """Render one icon: the source contain-fit and centred on the icon's canvas."""
    side = max(1, round(min(icon_spec.width, icon_spec.height) * icon_spec.scale))
    icon = contain_fit(source, side, resample=resample)
    fill = background if icon_spec.flatten else (0, 0, 0, 0)
    canvas = Image.new("RGBA", (icon_spec.width, icon_spec.height), fill)
    offset = ((icon_spec.width - side) // 2, (icon_spec.height - side) // 2)
    if icon_spec.flatten:
        canvas.alpha_composite(icon, offset)
    else:
        canvas.paste(icon, offset)
    return canvas


def _render_images(source, specs, configuration, resample):
    background = _background_rgba(configuration)
    return [
        FaviconArtifact(icon_spec.name, _encode_png(render_icon(source, icon_spec, background, resample)))
        for icon_spec in specs
    ]


def build_manifest(configuration):
    """Build the web app manifest as a JSON string."""
    prefix = _url_prefix(configuration)
    manifest = {
        "name": configuration.get("app_name") or "",
        "short_name": configuration.get("app_short_name") or configuration.get("app_name") or "",
        "description": configuration.get("app_description") or "",
        "dir": configuration.get("dir", "auto"),
        "lang": configuration.get("lang", "en-US"),
        "display": configuration.get("display", "standalone"),
        "orientation": configuration.get("orientation", "any"),
        "scope": configuration.get("scope", "/"),
        "start_url": configuration.get("start_url", "/"),
        "background_color": configuration.get("background", "#ffffff"),
        "theme_color": configuration.get("theme_color", "#ffffff"),
        "icons": [
            {
                "src": f"{prefix}{icon_spec.name}",
                "sizes": f"{icon_spec.width}x{icon_spec.height}",
                "type": "image/png",
                "purpose": "any",
            }
            for icon_spec in ANDROID_ICONS
        ],
    }
    return json.dumps(manifest, indent=2, ensure_ascii=False)


def build_browserconfig(configuration):
    prefix = escape(_url_prefix(configuration))
    tile_color = escape(configuration.get("background", "#ffffff"))
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        "<browserconfig>\n"
        "  <msapplication>\n"
        "    <tile>\n"
        f'      <square70x70logo src="{prefix}mstile-70x70.png"/>\n'
        f'      <square150x150logo src="{prefix}mstile-150x150.png"/>\n'
        f'      <wide310x150logo src="{prefix}mstile-310x150.png"/>\n'
        f'      <square310x310logo src="{prefix}mstile-310x310.png"/>\n'
        f"      <TileColor>{tile_color}</TileColor>\n"
        "    </tile>\n"
        "  </msapplication>\n"
        "</browserconfig>\n"
    )


def build_yandex_manifest(configuration):
    prefix = _url_prefix(configuration)
    manifest = {
        "version": configuration.get("version", "1.0"),
        "api_version": 1,
        "layout": {
            "logo": f"{prefix}yandex-browser-50x50.png",
            "color": configuration.get("background", "#ffffff"),
            "show_title": True,
        },
    }
    return json.dumps(manifest, indent=2, ensure_ascii=False)


def _android_html(configuration, prefix):
    crossorigin = ' crossorigin="use-credentials"' if configuration.get("load_manifest_with_credentials") else ""
    return [
        f'<link rel="manifest" href="{escape(prefix)}{MANIFEST_FILE}"{crossorigin}>',
        '<meta name="mobile-web-app-capable" content="yes">',
        f'<meta name="theme-color" content="{escape(configuration.get("theme_color", "#ffffff"))}">',
        f'<meta name="application-name" content="{escape(configuration.get("app_name") or "")}">',
    ]


def _apple_icon_html(configuration, prefix):
    lines = [
        f'<link rel="apple-touch-icon" sizes="{size}x{size}" href="{escape(prefix)}apple-touch-icon-{size}x{size}.png">'
        for size in APPLE_TOUCH_SIZES
    ]
    title = configuration.get("app_short_name") or configuration.get("app_name") or ""
    lines.extend([
        '<meta name="apple-mobile-web-app-capable" content="yes">',
        '<meta name="apple-mobile-web-app-status-bar-style" content="black-translucent">',
        f'<meta name="apple-mobile-web-app-title" content="{escape(title)}">',
    ])
    return lines


def _apple_startup_html(configuration, prefix):
    lines = []
    for width, height, ratio in APPLE_STARTUP_SCREENS:
        media = (
            f"(device-width: {width // ratio}px) and (device-height: {height // ratio}px) "
            f"and (-webkit-device-pixel-ratio: {ratio}) and (orientation: portrait)"
        )
        lines.append(
            f'<link rel="apple-touch-startup-image" media="{media}" '
            f'href="{escape(prefix)}apple-touch-startup-image-{width}x{height}.png">'
        )
    return lines


def _coast_html(configuration, prefix):
    return [f'<link rel="icon" type="image/png" sizes="228x228" href="{escape(prefix)}coast-228x228.png">']


def _favicons_html(configuration, prefix):
    lines = [f'<link rel="icon" type="image/x-icon" href="{escape(prefix)}favicon.ico">']
    lines.extend(
        f'<link rel="icon" type="image/png" sizes="{size}x{size}" href="{escape(prefix)}favicon-{size}x{size}.png">'
        for size in FAVICON_PNG_SIZES
    )
    return lines


def _windows_html(configuration, prefix):
    return [
        f'<meta name="msapplication-TileColor" content="{escape(configuration.get("background", "#ffffff"))}">',
        f'<meta name="msapplication-TileImage" content="{escape(prefix)}mstile-144x144.png">',
        f'<meta name="msapplication-config" content="{escape(prefix)}{BROWSERCONFIG_FILE}">',
    ]


def _yandex_html(configuration, prefix):
    return [f'<link rel="yandex-tableau-widget" href="{escape(prefix)}{YANDEX_MANIFEST_FILE}">']


# family -> (icon specs, file builders, html builder)
ICON_FAMILIES = {
    "android": (ANDROID_ICONS, [(MANIFEST_FILE, build_manifest)], _android_html),
    "apple_icon": (APPLE_ICONS, [], _apple_icon_html),
    "apple_startup": (APPLE_STARTUP_ICONS, [], _apple_startup_html),
    "coast": (COAST_ICONS, [], _coast_html),
    "favicons": (FAVICON_ICONS, [], _favicons_html),
    "windows": (WINDOWS_ICONS, [(BROWSERCONFIG_FILE, build_browserconfig)], _windows_html),
    "yandex": (YANDEX_ICONS, [(YANDEX_MANIFEST_FILE, build_yandex_manifest)], _yandex_html),
}


def favicons(source, configuration):
    """
    Render the favicon bundle for a source image.

    Args:
        source: Encoded source image bytes
        configuration: Favicon configuration dictionary

    Returns:
        FaviconResponse with image artifacts (bytes), file artifacts (text)
        and a list of HTML lines
    """
    with Image.open(BytesIO(source)) as image:
        image.load()
        source_image = image.convert("RGBA")

    resample = Image.Resampling.NEAREST if configuration.get("pixel_art") else Image.Resampling.LANCZOS
    selection = dict(DEFAULT_ICON_SELECTION)
    selection.update(configuration.get("icons") or {})
    prefix = _url_prefix(configuration)

    images = []
    files = []
    html = []

    for family, (specs, file_builders, html_builder) in ICON_FAMILIES.items():
        if not selection.get(family):
            continue

        images.extend(_render_images(source_image, specs, configuration, resample))

        if family == "favicons":
            buffer = BytesIO()
            source_image.save(buffer, format="ICO", sizes=FAVICON_ICO_SIZES)
            images.append(FaviconArtifact("favicon.ico", buffer.getvalue()))

        for name, builder in file_builders:
            files.append(FaviconArtifact(name, builder(configuration)))

        html.extend(html_builder(configuration, prefix))

    return FaviconResponse(images=images, files=files, html=html)
