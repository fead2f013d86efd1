"""Code structure entity derived from a single source unit.

The CodeStructure holds the spans found by the extractor and the side
tables computed by the analyzer. Side tables are keyed by signature, never
by position, so reordering or filtering spans does not invalidate them.
"""

from dataclasses import dataclass, field
from typing import Any

from codeweave.models.source import Dialect, count_lines


@dataclass
class CodeStructure:
    """Structural view of one file, mutated through dedup, analysis and filtering.

    Attributes:
        dialect: Dialect of the source (fixed at construction)
        text: Canonical text (raw text until line deduplication replaces it)
        total_lines: Line count of the raw text at construction
        imports: Import spans in encounter order
        classes: Class/struct spans in encounter order
        callables: Callable spans (signature and body) in encounter order
        variables: Variable declaration spans in encounter order
        callable_line_count: Signature -> line count
        callable_signature: Raw callable span -> signature
        callable_parameters: Signature -> raw parameter-list text
        callable_return_type: Signature -> return type or "unknown"
        variable_usage: Variable name -> whole-word occurrence count

    Validation Rules:
        - dialect cannot be reassigned after construction
        - signatures are unique after callable deduplication
    """

    dialect: Dialect
    text: str
    total_lines: int = 0
    imports: list[str] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)
    callables: list[str] = field(default_factory=list)
    variables: list[str] = field(default_factory=list)
    callable_line_count: dict[str, int] = field(default_factory=dict)
    callable_signature: dict[str, str] = field(default_factory=dict)
    callable_parameters: dict[str, str] = field(default_factory=dict)
    callable_return_type: dict[str, str] = field(default_factory=dict)
    variable_usage: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Derive the total line count from the raw text."""
        if not self.total_lines:
            self.total_lines = count_lines(self.text)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "dialect" and "dialect" in self.__dict__ and value != self.dialect:
            raise AttributeError("CodeStructure dialect cannot be changed")
        super().__setattr__(name, value)

    @property
    def extension(self) -> str:
        """File extension of the structure's dialect."""
        return self.dialect.extension

    def signature_for(self, span: str) -> str | None:
        """Get the recorded signature of a callable span."""
        return self.callable_signature.get(span)

    def line_count_for(self, span: str) -> int:
        """Get the line count of a callable span (0 when unknown)."""
        signature = self.signature_for(span)
        if signature is None:
            return 0
        return self.callable_line_count.get(signature, 0)

    def category_counts(self) -> dict[str, int]:
        """Get span counts per category."""
        return {
            "imports": len(self.imports),
            "classes": len(self.classes),
            "callables": len(self.callables),
            "variables": len(self.variables),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "dialect": self.dialect.value,
            "total_lines": self.total_lines,
            "imports": list(self.imports),
            "classes": list(self.classes),
            "callables": list(self.callables),
            "variables": list(self.variables),
            "callable_line_count": dict(self.callable_line_count),
            "callable_parameters": dict(self.callable_parameters),
            "callable_return_type": dict(self.callable_return_type),
            "variable_usage": dict(self.variable_usage),
        }
