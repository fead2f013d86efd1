"""Line and callable deduplication."""

import logging

from codeweave.analyzers.rules import get_rules
from codeweave.models.structure import CodeStructure

logger = logging.getLogger(__name__)


def dedup_lines(text: str) -> str:
    """Remove blank and repeated lines.

    Every line is trimmed; blank lines are dropped and only the first
    occurrence of each remaining line is kept, in encounter order.

    Args:
        text: Text to deduplicate

    Returns:
        Newline-joined unique lines
    """
    seen: set[str] = set()
    unique: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped or stripped in seen:
            continue
        seen.add(stripped)
        unique.append(stripped)
    return "\n".join(unique)


def dedup_callables(structure: CodeStructure) -> list[str]:
    """Keep the first callable per normalized signature.

    Updates structure.callables in place and records the signature of every
    surviving span in structure.callable_signature.

    Args:
        structure: Structure whose callables are deduplicated

    Returns:
        Surviving callable spans in encounter order
    """
    rules = get_rules(structure.dialect)
    seen: set[str] = set()
    survivors: list[str] = []

    for span in structure.callables:
        signature = rules.normalize_signature(span)
        if signature in seen:
            logger.debug("Dropping duplicate callable: %s", signature)
            continue
        seen.add(signature)
        survivors.append(span)
        structure.callable_signature[span] = signature

    structure.callables = survivors
    return survivors


def dedup(structure: CodeStructure) -> CodeStructure:
    """Replace the canonical text with its deduplicated lines and dedup callables."""
    structure.text = dedup_lines(structure.text)
    dedup_callables(structure)
    return structure
