"""Deterministic reordering of surviving spans."""

from codeweave.models.structure import CodeStructure


def _by_length(spans: list[str]) -> list[str]:
    return sorted(spans, key=len, reverse=True)


def restructure(structure: CodeStructure) -> str:
    """Lay out spans as imports, variables, classes, then callables.

    Imports, variables and classes are ordered longest span first; callables
    by descending line count (unknown signatures count as 0). Sorting is
    stable, so ties keep encounter order. Empty categories are omitted.

    Args:
        structure: Analyzed and filtered structure

    Returns:
        Newline-joined restructured text
    """
    blocks = [
        _by_length(structure.imports),
        _by_length(structure.variables),
        _by_length(structure.classes),
        sorted(structure.callables, key=structure.line_count_for, reverse=True),
    ]
    return "\n".join("\n".join(block) for block in blocks if block)
