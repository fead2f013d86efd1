"""Text editing applied to restructured code.

Edits run in a fixed order: literal replacement, documentation injection,
reindentation, then case transform. Each step is a pure function of its
input text.
"""

import logging
import re
from enum import Enum

from codeweave.analyzers.rules import CommentStyle, DialectRules, get_rules
from codeweave.models.source import Dialect

logger = logging.getLogger(__name__)

_TOKEN = re.compile(r"\w+", re.ASCII)


class CaseMode(str, Enum):
    """Identifier case transformation."""

    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    NONE = "none"

    @classmethod
    def parse(cls, value: "str | CaseMode | None") -> "CaseMode":
        """Parse a case mode, treating empty or missing values as NONE.

        Raises:
            ValueError: If the value names no known case mode
        """
        if isinstance(value, CaseMode):
            return value
        if not value:
            return cls.NONE
        return cls(value.strip().lower())


def replace_literal(text: str, replace_from: str, replace_to: str) -> str:
    """Replace every literal occurrence of replace_from (no-op when empty)."""
    if not replace_from:
        return text
    return text.replace(replace_from, replace_to)


def _doc_lines(style: CommentStyle, name: str) -> list[str]:
    if style is CommentStyle.JAVADOC:
        return [
            "/**",
            f" * Method: {name}",
            " * Description: Auto-generated method documentation",
            " * Parameters: Auto-detected",
            " * Returns: Auto-detected",
            " */",
        ]
    if style is CommentStyle.DOCSTRING:
        return [
            '"""',
            f"Function: {name}",
            "Description: Auto-generated function documentation",
            "Args: Auto-detected",
            "Returns: Auto-detected",
            '"""',
        ]
    return [
        f"// {name} - Auto-generated documentation",
        "// Parameters: Auto-detected",
        "// Returns: Auto-detected",
    ]


def _matched_name(match: re.Match[str]) -> str:
    groups = match.groupdict()
    return groups.get("name") or groups.get("arrow") or ""


def inject_documentation(text: str, rules: DialectRules) -> str:
    """Insert a generated documentation block before every callable header.

    The block takes the indentation of the line holding the header. The
    header and the body that follows it are left untouched.

    Args:
        text: Text to document
        rules: Dialect rules providing the header pattern and comment style

    Returns:
        Text with documentation blocks inserted
    """

    def insert(match: re.Match[str]) -> str:
        line_start = text.rfind("\n", 0, match.start()) + 1
        prefix = text[line_start : match.start()]
        indent = prefix[: len(prefix) - len(prefix.lstrip())]
        separator = "\n" + indent
        block = separator.join(_doc_lines(rules.comment_style, _matched_name(match)))
        return block + separator + match.group(0)

    documented, count = rules.doc_pattern.subn(insert, text)
    logger.debug("Injected %d documentation blocks", count)
    return documented


def reindent(text: str, rules: DialectRules) -> str:
    """Reindent text by tracking block open and close markers line by line.

    Blank lines are dropped. A line ending in a close marker lowers the level
    (never below zero) before it is emitted; a line ending in an open marker
    raises it after. Markers inside strings or comments are not recognized.

    Args:
        text: Text to reindent
        rules: Dialect rules providing the markers and indent unit

    Returns:
        Reindented text
    """
    level = 0
    lines: list[str] = []
    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        if line.endswith(rules.close_markers):
            level = max(0, level - 1)
        lines.append(rules.indent_unit * level + line)
        if line.endswith(rules.open_markers):
            level += 1
    return "\n".join(lines)


def transform_case(text: str, case_mode: "str | CaseMode | None") -> str:
    """Rewrite every identifier-like token to upper or lower case.

    Language keywords are tokens too and are rewritten along with names.
    """
    mode = CaseMode.parse(case_mode)
    if mode is CaseMode.UPPERCASE:
        return _TOKEN.sub(lambda m: m.group(0).upper(), text)
    if mode is CaseMode.LOWERCASE:
        return _TOKEN.sub(lambda m: m.group(0).lower(), text)
    return text


def edit(
    text: str,
    dialect: Dialect,
    replace_from: str = "",
    replace_to: str = "",
    format_indent: bool = False,
    case_mode: "str | CaseMode | None" = CaseMode.NONE,
) -> str:
    """Apply all edits to restructured text.

    Args:
        text: Restructured text
        dialect: Dialect of the text
        replace_from: Literal text to replace (empty disables replacement)
        replace_to: Replacement text
        format_indent: Whether to reindent
        case_mode: Case transform to apply

    Returns:
        Edited text
    """
    rules = get_rules(dialect)

    edited = replace_literal(text, replace_from, replace_to)
    edited = inject_documentation(edited, rules)
    if format_indent:
        edited = reindent(edited, rules)
    return transform_case(edited, case_mode)
