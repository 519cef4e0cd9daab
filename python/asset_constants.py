#!/usr/bin/env python3
"""Shared constants for the icon asset generator."""

DEFAULT_INPUT_FILE = "whispra.png"
DEFAULT_OUTPUT_DIR = "dist"

BASE_RASTER_SIZE = 1024

# Plain PNG exports, taken straight from the input image
PNG_SIZES = (16, 32, 48, 64, 128, 256, 512, 1024)

ICO_SIZES = [(16, 16), (24, 24), (32, 32), (48, 48), (64, 64), (128, 128), (256, 256)]

# Output layout, relative to the output root
TMP_SUBDIR = ".tmp"
ELECTRON_SUBDIR = "electron"
WEB_SUBDIR = "web"
PNG_SUBDIR = "png"
VECTOR_SUBDIR = "vector"

FAVICONS_HTML_FILE = "favicons.html"

# Vector trace parameters
TRACE_THRESHOLD = 180
TRACE_TURD_SIZE = 50
TRACE_OPT_TOLERANCE = 0.4
TRACE_COLOR = "#000000"
TRACE_BACKGROUND = "#00000000"
TRACE_TIMEOUT_SECONDS = 15
