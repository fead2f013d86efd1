"""Source unit entity representing one input file.

A SourceUnit is the immutable input to the pipeline: a name, the dialect
whose rules apply to it and its raw text.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Dialect(Enum):
    """Supported source dialects."""

    JAVA = "java"
    PYTHON = "python"
    CPP = "cpp"
    JAVASCRIPT = "javascript"

    @property
    def extension(self) -> str:
        """File extension used for reports and output naming."""
        return DIALECT_EXTENSIONS[self]

    @classmethod
    def from_extension(cls, extension: str) -> "Dialect | None":
        """Look up the dialect for a file extension (case-insensitive).

        Args:
            extension: Extension with leading dot (e.g., ".java")

        Returns:
            Matching Dialect or None if unsupported
        """
        return EXTENSION_TO_DIALECT.get(extension.lower())


DIALECT_EXTENSIONS: dict[Dialect, str] = {
    Dialect.JAVA: ".java",
    Dialect.PYTHON: ".py",
    Dialect.CPP: ".cpp",
    Dialect.JAVASCRIPT: ".js",
}

# Reverse mapping: extension to dialect
EXTENSION_TO_DIALECT: dict[str, Dialect] = {
    ext: dialect for dialect, ext in DIALECT_EXTENSIONS.items()
}

SUPPORTED_EXTENSIONS: tuple[str, ...] = tuple(DIALECT_EXTENSIONS.values())


def count_lines(text: str) -> int:
    """Count newline-delimited lines, ignoring trailing empty segments.

    Empty text counts as a single line.
    """
    parts = text.split("\n")
    while len(parts) > 1 and parts[-1] == "":
        parts.pop()
    return len(parts)


@dataclass(frozen=True)
class SourceUnit:
    """One input file handed to the pipeline.

    Attributes:
        name: File name used in reports and output naming
        dialect: Dialect whose rules apply to this file
        raw_text: Unmodified file content
    """

    name: str
    dialect: Dialect
    raw_text: str

    @property
    def line_count(self) -> int:
        """Total line count of the raw text."""
        return count_lines(self.raw_text)

    @classmethod
    def from_path(cls, path: Path | str) -> "SourceUnit":
        """Create a SourceUnit by reading a file.

        Args:
            path: Path to a file with a supported extension

        Returns:
            SourceUnit instance

        Raises:
            ValueError: If the extension is not supported
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        path = Path(path)
        dialect = Dialect.from_extension(path.suffix)
        if dialect is None:
            raise ValueError(f"Unsupported file extension: {path.suffix}")

        return cls(
            name=path.name,
            dialect=dialect,
            raw_text=path.read_text(encoding="utf-8"),
        )
