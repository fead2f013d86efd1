"""Codeweave analyzers - pattern-based structural analysis.

Analyzers run in a fixed order on one file at a time:
- Extractor: Collects import, class, callable and variable spans per dialect rules
- Deduplicator: Removes repeated lines and callables with repeated signatures
- Metrics: Line counts, parameters, return types, variable usage, complexity
- Filtering: Narrows a structure to one category or value
- Validation: Warns about unbalanced or malformed blocks
"""

from codeweave.analyzers.dedup import dedup, dedup_callables, dedup_lines
from codeweave.analyzers.extractor import extract
from codeweave.analyzers.filtering import FilterType, filter_structure
from codeweave.analyzers.metrics import (
    analyze,
    complexity_estimate,
    compute_callable_details,
    compute_line_counts,
    compute_variable_usage,
    count_non_blank_lines,
)
from codeweave.analyzers.rules import DialectRules, get_rules
from codeweave.analyzers.validation import validate_structure

__all__ = [
    "DialectRules",
    "FilterType",
    "analyze",
    "complexity_estimate",
    "compute_callable_details",
    "compute_line_counts",
    "compute_variable_usage",
    "count_non_blank_lines",
    "dedup",
    "dedup_callables",
    "dedup_lines",
    "extract",
    "filter_structure",
    "get_rules",
    "validate_structure",
]
