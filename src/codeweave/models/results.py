"""Processing result entities.

This module contains entities related to processing results:
- ProcessingError: Recoverable errors encountered while processing a batch
- FileResult: Edited text and report for one accepted file
- BatchResult: Aggregated outputs of one run
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from codeweave.models.source import Dialect
from codeweave.models.structure import CodeStructure


class BatchStatus(Enum):
    """Status of a processing run."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ProcessingError:
    """Error encountered during processing.

    Attributes:
        component: Stage that failed (search, extract, dedup, analyze, filter, edit, report, write)
        message: Error description
        file_name: File that caused the error (if applicable)
        recoverable: Whether processing continued after this error
    """

    component: str
    message: str
    file_name: str | None = None
    recoverable: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "component": self.component,
            "message": self.message,
            "file_name": self.file_name,
            "recoverable": self.recoverable,
        }


@dataclass
class FileResult:
    """Outputs for one accepted source file.

    Attributes:
        name: Source file name
        dialect: Source dialect
        structure: Post-filter code structure
        edited_text: Restructured and edited text
        report: Rendered metrics block
        warnings: Structure validation warnings
    """

    name: str
    dialect: Dialect
    structure: CodeStructure
    edited_text: str
    report: str
    warnings: list[str] = field(default_factory=list)

    @property
    def output_name(self) -> str:
        """File name used when the edited text is persisted."""
        return f"processed_{self.name}"


@dataclass
class BatchResult:
    """Aggregated outputs of one processing run.

    Attributes:
        timestamp: Run start timestamp (UTC)
        status: Current run status
        files: Results for every accepted file, in input order
        excluded: Names of files rejected by the search gate
        errors: Recoverable errors encountered during the run
        report: Run report (header plus one block per accepted file)
        concatenated_output: Joined output when concatenation was requested
    """

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    status: BatchStatus = BatchStatus.PENDING
    files: list[FileResult] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    errors: list[ProcessingError] = field(default_factory=list)
    report: str = ""
    concatenated_output: str | None = None

    def add_error(self, error: ProcessingError) -> None:
        """Add a processing error."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Check if any errors were recorded."""
        return len(self.errors) > 0

    def get_errors_by_component(self, component: str) -> list[ProcessingError]:
        """Get errors for a specific component."""
        return [e for e in self.errors if e.component == component]

    @property
    def outputs(self) -> list[str]:
        """Edited texts of the accepted files, in input order."""
        return [f.edited_text for f in self.files]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "status": self.status.value,
            "files": [f.name for f in self.files],
            "excluded": list(self.excluded),
            "errors": [e.to_dict() for e in self.errors],
        }
