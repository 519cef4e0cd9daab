#!/usr/bin/env python3
"""
Command-line parsing and run configuration for the icon asset generator.

Flags are long-form only:
    --input / --i   source image path (default: whispra.png)
    --name  / --n   application name (default: input file's base name)
    --out   / --o   output root directory (default: dist)
"""

from collections import namedtuple
from pathlib import Path

from asset_constants import DEFAULT_INPUT_FILE, DEFAULT_OUTPUT_DIR
from asset_errors import UserInputError

KEY_MARKER = "--"

RunConfig = namedtuple("RunConfig", ["input_path", "app_name", "out_dir"])


def parse_args(argv):
    """
    Turn a raw argument list into a mapping of key -> value.

    Scanning starts at argv[1]. A token starting with "--" is a key; the next
    token becomes its value unless it is missing or is itself a key, in which
    case the key maps to True. Any other token is ignored.

    Args:
        argv: Full process argument list (argv[0] is the program name)

    Returns:
        Dictionary mapping key names to a string value or True
    """
    args = {}
    index = 1
    while index < len(argv):
        token = argv[index]
        if token.startswith(KEY_MARKER):
            key = token[len(KEY_MARKER):]
            following = argv[index + 1] if index + 1 < len(argv) else None
            if following is not None and not following.startswith(KEY_MARKER):
                args[key] = following
                index += 1
            else:
                args[key] = True
        index += 1
    return args


def _lookup(args, *keys):
    """Return the first string value among keys; bare flags count as absent."""
    for key in keys:
        value = args.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def resolve_run_config(args, cwd=None):
    """Derive the immutable run configuration from parsed arguments and defaults."""
    base_dir = Path(cwd) if cwd is not None else Path.cwd()

    input_path = (base_dir / (_lookup(args, "input", "i") or DEFAULT_INPUT_FILE)).resolve()
    app_name = _lookup(args, "name", "n") or input_path.stem
    out_dir = (base_dir / (_lookup(args, "out", "o") or DEFAULT_OUTPUT_DIR)).resolve()

    return RunConfig(input_path=input_path, app_name=app_name, out_dir=out_dir)


def validate_run_config(config):
    """Raise UserInputError when the configured input image does not exist."""
    if not config.input_path.is_file():
        raise UserInputError(f"Input image not found: {config.input_path}")
