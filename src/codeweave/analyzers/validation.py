"""Lightweight structural sanity checks.

These checks only produce warnings. They never alter the text that flows
through the rest of the pipeline.
"""

import re

from codeweave.models.source import Dialect

_PY_HEADER_LINE = re.compile(r"^(?:async\s+def|def|class)\b.*$", re.MULTILINE)


def _brace_warnings(text: str) -> list[str]:
    opened = text.count("{")
    closed = text.count("}")
    if opened == closed:
        return []
    return [f"Unbalanced braces: {opened} opening vs {closed} closing"]


def _python_warnings(text: str) -> list[str]:
    warnings = []
    for match in _PY_HEADER_LINE.finditer(text):
        line = match.group(0).rstrip()
        # Strip a trailing comment before checking for the suite colon
        code = line.split("#", 1)[0].rstrip()
        if not code.endswith(":"):
            line_number = text.count("\n", 0, match.start()) + 1
            warnings.append(f"Line {line_number}: definition header missing ':': {code}")
    return warnings


def validate_structure(text: str, dialect: Dialect) -> list[str]:
    """Check raw text for obvious structural problems.

    Args:
        text: Raw source text
        dialect: Dialect of the source

    Returns:
        Warning messages (empty when nothing looks wrong)
    """
    if dialect == Dialect.PYTHON:
        return _python_warnings(text)
    return _brace_warnings(text)
