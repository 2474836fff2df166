"""Exception types raised by the conversion pipeline."""


class AsciiGridError(Exception):
    """Base class for pipeline errors."""


class InputError(AsciiGridError):
    """The source image is missing, unreadable or cannot be decoded."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to open image at {path}: {reason}")


class OutputError(AsciiGridError):
    """An output file could not be created or written."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to write output {path}: {reason}")


class InvariantError(AsciiGridError, AssertionError):
    """A luminance sample or grid cell broke an internal invariant.

    This signals a bug, not bad user input, and is never handled by the CLI.
    """
