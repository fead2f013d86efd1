"""Error kinds raised by Codeweave.

Only InvalidInputPathError aborts a run, and only the run for that
directory. Every other error is recoverable: it is logged, recorded on the
batch result and processing continues with the next file.
"""

from pathlib import Path


class CodeweaveError(Exception):
    """Base class for all Codeweave errors."""


class InvalidInputPathError(CodeweaveError):
    """Raised when an input path is missing or is not a directory."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class NoSupportedFilesError(CodeweaveError):
    """Raised when a directory holds no file with a supported extension."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"No supported files in directory: {path}")


class InvalidPatternError(CodeweaveError):
    """Raised when a search term cannot be compiled as a regular expression."""

    def __init__(self, pattern: str, detail: str | None = None) -> None:
        self.pattern = pattern
        self.detail = detail
        message = f"Invalid regex pattern: {pattern}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


class OutputWriteError(CodeweaveError):
    """Raised when an output, report or log file cannot be written."""

    def __init__(self, path: Path | str, detail: str) -> None:
        self.path = Path(path)
        self.detail = detail
        super().__init__(f"Failed to write {path}: {detail}")
