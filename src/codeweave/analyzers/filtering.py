"""Category and value filtering of a code structure.

Filtering only removes spans. The signature-keyed side tables are left as
they are and may keep entries for removed callables; readers look entries
up by signature with defaults.
"""

import logging
from enum import Enum

from codeweave.analyzers.rules import get_rules
from codeweave.models.structure import CodeStructure

logger = logging.getLogger(__name__)


class FilterType(str, Enum):
    """Categories a structure can be narrowed to."""

    ALL = "all"
    IMPORTS = "imports"
    CLASSES = "classes"
    METHODS = "methods"
    VARIABLES = "variables"
    METHOD_NAME = "method_name"
    VARIABLE_TYPE = "variable_type"
    PARAMETER_TYPE = "parameter_type"
    RETURN_TYPE = "return_type"

    @classmethod
    def parse(cls, value: "str | FilterType | None") -> "FilterType":
        """Parse a filter type, treating empty or missing values as ALL.

        Raises:
            ValueError: If the value names no known filter type
        """
        if isinstance(value, FilterType):
            return value
        if not value:
            return cls.ALL
        return cls(value.strip().lower())


_KEEP_ONLY = {
    FilterType.IMPORTS: "imports",
    FilterType.CLASSES: "classes",
    FilterType.METHODS: "callables",
    FilterType.VARIABLES: "variables",
    FilterType.METHOD_NAME: "callables",
    FilterType.VARIABLE_TYPE: "variables",
    FilterType.PARAMETER_TYPE: "callables",
    FilterType.RETURN_TYPE: "callables",
}


def _clear_except(structure: CodeStructure, keep: str) -> None:
    for category in ("imports", "classes", "callables", "variables"):
        if category != keep:
            setattr(structure, category, [])


def filter_structure(
    structure: CodeStructure,
    filter_type: "str | FilterType | None",
    value: str = "",
) -> CodeStructure:
    """Narrow a structure to one category, optionally by value.

    Args:
        structure: Structure to filter in place
        filter_type: Category to keep (empty or "all" keeps everything)
        value: Narrowing value; empty keeps the whole category

    Returns:
        The same structure, filtered

    Raises:
        ValueError: If filter_type is not a known filter type
    """
    selected = FilterType.parse(filter_type)
    if selected is FilterType.ALL:
        return structure

    _clear_except(structure, _KEEP_ONLY[selected])
    if not value:
        return structure

    rules = get_rules(structure.dialect)

    if selected is FilterType.METHODS:
        structure.callables = [c for c in structure.callables if value in c]
    elif selected is FilterType.VARIABLES:
        structure.variables = [v for v in structure.variables if value in v]
    elif selected is FilterType.METHOD_NAME:
        structure.callables = [c for c in structure.callables if rules.callable_name(c) == value]
    elif selected is FilterType.VARIABLE_TYPE:
        structure.variables = [v for v in structure.variables if rules.variable_type(v) == value]
    elif selected is FilterType.PARAMETER_TYPE:
        structure.callables = [
            c for c in structure.callables if value in rules.callable_parameters(c)
        ]
    elif selected is FilterType.RETURN_TYPE:
        structure.callables = [
            c for c in structure.callables if rules.callable_return_type(c) == value
        ]

    logger.debug("Filter %s=%r kept %s", selected.value, value, structure.category_counts())
    return structure
