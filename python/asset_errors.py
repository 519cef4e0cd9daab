#!/usr/bin/env python3
"""Error types raised by the icon asset pipeline."""


class AssetGenerationError(Exception):
    """Base class for pipeline errors."""


class UserInputError(AssetGenerationError, ValueError):
    """The run was started with unusable input, e.g. a missing image."""


class FatalPipelineError(AssetGenerationError):
    """A required pipeline step failed; the run cannot continue."""


class RecoverableTraceError(AssetGenerationError):
    """The optional vector trace failed; the run continues without it."""


class TraceTimeoutError(RecoverableTraceError):
    """The vector trace did not finish before its deadline."""
