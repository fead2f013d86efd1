"""Pattern-based structural extraction.

Applies a dialect's rule table to raw text and collects the spans of every
category into a fresh CodeStructure. Categories are matched independently
and may overlap, with one exception: a variable match that starts inside an
already matched class or callable span is discarded. Variables are only the
declarations left outside those blocks.
"""

import logging
import re

from codeweave.analyzers.rules import DialectRules, get_rules
from codeweave.models.source import Dialect
from codeweave.models.structure import CodeStructure

logger = logging.getLogger(__name__)


def _find_spans(pattern: re.Pattern[str], text: str) -> list[tuple[int, int, str]]:
    """Find all non-empty matches of a pattern.

    Returns:
        (start, end, stripped span) tuples in encounter order
    """
    spans: list[tuple[int, int, str]] = []
    for match in pattern.finditer(text):
        span = match.group(0).strip()
        if span:
            spans.append((match.start(), match.end(), span))
    return spans


def _inside_any(position: int, ranges: list[tuple[int, int]]) -> bool:
    return any(start <= position < end for start, end in ranges)


def extract_with_rules(raw_text: str, rules: DialectRules) -> CodeStructure:
    """Extract spans from raw text using an explicit rule table.

    Args:
        raw_text: Unmodified source text
        rules: Dialect rules to apply

    Returns:
        New CodeStructure populated with spans (side tables empty)
    """
    structure = CodeStructure(dialect=rules.dialect, text=raw_text)

    structure.imports = [span for _, _, span in _find_spans(rules.import_pattern, raw_text)]

    class_matches = _find_spans(rules.class_pattern, raw_text)
    structure.classes = [span for _, _, span in class_matches]

    callable_matches = _find_spans(rules.callable_pattern, raw_text)
    structure.callables = [span for _, _, span in callable_matches]

    consumed = [(start, end) for start, end, _ in class_matches + callable_matches]
    structure.variables = [
        span
        for start, _, span in _find_spans(rules.variable_pattern, raw_text)
        if not _inside_any(start, consumed)
    ]

    logger.debug(
        "Extracted %d imports, %d classes, %d callables, %d variables (%s)",
        len(structure.imports),
        len(structure.classes),
        len(structure.callables),
        len(structure.variables),
        rules.dialect.value,
    )

    return structure


def extract(raw_text: str, dialect: Dialect) -> CodeStructure:
    """Extract the code structure of raw text for a dialect.

    Args:
        raw_text: Unmodified source text
        dialect: Dialect whose rules apply

    Returns:
        New CodeStructure populated with spans
    """
    return extract_with_rules(raw_text, get_rules(dialect))
