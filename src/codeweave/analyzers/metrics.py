"""Callable, variable and complexity metrics.

All callable tables are keyed by normalized signature so that later
reordering or filtering of spans leaves them valid.
"""

import logging
import re

from codeweave.analyzers.rules import get_rules
from codeweave.models.source import count_lines
from codeweave.models.structure import CodeStructure

logger = logging.getLogger(__name__)

BRANCH_KEYWORDS = ("if", "else", "while", "for", "switch", "case", "try", "catch")

_BRANCH_PATTERN = re.compile(r"\b(?:" + "|".join(BRANCH_KEYWORDS) + r")\b")


def _signature(structure: CodeStructure, span: str) -> str:
    signature = structure.signature_for(span)
    if signature is None:
        signature = get_rules(structure.dialect).normalize_signature(span)
        structure.callable_signature[span] = signature
    return signature


def compute_line_counts(structure: CodeStructure) -> dict[str, int]:
    """Record the line count of every surviving callable.

    Args:
        structure: Structure whose callables were deduplicated

    Returns:
        The updated signature -> line count table
    """
    for span in structure.callables:
        structure.callable_line_count[_signature(structure, span)] = count_lines(span)
    return structure.callable_line_count


def compute_callable_details(structure: CodeStructure) -> None:
    """Record parameter text and return type of every surviving callable."""
    rules = get_rules(structure.dialect)
    for span in structure.callables:
        signature = _signature(structure, span)
        structure.callable_parameters[signature] = rules.callable_parameters(span)
        structure.callable_return_type[signature] = rules.callable_return_type(span)


def compute_variable_usage(structure: CodeStructure) -> dict[str, int]:
    """Count whole-word occurrences of every declared variable name.

    Occurrences are counted case-sensitively in the canonical text, which
    includes the declaration itself.

    Args:
        structure: Structure whose canonical text was deduplicated

    Returns:
        The updated variable name -> occurrence count table
    """
    rules = get_rules(structure.dialect)
    for span in structure.variables:
        name = rules.variable_name(span)
        if not name:
            continue
        pattern = re.compile(r"\b" + re.escape(name) + r"\b")
        structure.variable_usage[name] = len(pattern.findall(structure.text))
    return structure.variable_usage


def complexity_estimate(text: str) -> int:
    """Estimate cyclomatic complexity as 1 plus the number of branch keywords."""
    return 1 + len(_BRANCH_PATTERN.findall(text))


def count_non_blank_lines(text: str) -> int:
    """Count lines containing at least one non-whitespace character."""
    return sum(1 for line in text.split("\n") if line.strip())


def analyze(structure: CodeStructure) -> CodeStructure:
    """Run line counts, callable details and variable usage in order.

    Args:
        structure: Deduplicated structure

    Returns:
        The same structure with its side tables populated
    """
    compute_line_counts(structure)
    compute_callable_details(structure)
    compute_variable_usage(structure)

    logger.debug(
        "Analyzed %d callables and %d variables",
        len(structure.callable_line_count),
        len(structure.variable_usage),
    )
    return structure
