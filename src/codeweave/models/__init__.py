"""Codeweave data models.

This module exports all core entities used throughout the application:
- Dialect: Supported source dialects
- SourceUnit: One input file (name, dialect, raw text)
- CodeStructure: Extracted spans and derived side tables for one file
- ProcessingError: Recoverable errors encountered during a run
- FileResult: Edited text and report for one file
- BatchResult: Aggregated outputs of one run
"""

from codeweave.models.results import (
    BatchResult,
    BatchStatus,
    FileResult,
    ProcessingError,
)
from codeweave.models.source import Dialect, SourceUnit
from codeweave.models.structure import CodeStructure

__all__ = [
    "Dialect",
    "SourceUnit",
    "CodeStructure",
    "ProcessingError",
    "FileResult",
    "BatchResult",
    "BatchStatus",
]
