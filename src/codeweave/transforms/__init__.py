"""Codeweave transforms - text emitted from an analyzed structure.

- Restructure: Reorders surviving spans into a deterministic layout
- Editor: Literal replacement, documentation stubs, reindentation, case transform
"""

from codeweave.transforms.editor import (
    CaseMode,
    edit,
    inject_documentation,
    reindent,
    replace_literal,
    transform_case,
)
from codeweave.transforms.restructure import restructure

__all__ = [
    "CaseMode",
    "edit",
    "inject_documentation",
    "reindent",
    "replace_literal",
    "restructure",
    "transform_case",
]
