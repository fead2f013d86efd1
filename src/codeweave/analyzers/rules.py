"""Per-dialect recognition rules.

Each dialect is described by one DialectRules entry: a compiled pattern per
category (imports, classes, callables, variables), the pattern used to
place generated documentation, and the extractors that derive names,
types, parameters and return types from matched spans.

These are region matchers, not a grammar. Brace bodies end at the FIRST
closing brace, so a block containing another block closes early at the
inner block's end. Python suites end at the next line that starts with a
non-blank character in column zero.
"""

import re
from dataclasses import dataclass
from enum import Enum

from codeweave.models.source import Dialect

UNKNOWN = "unknown"

# Words that can precede a parenthesis in statements but never name a callable
CONTROL_KEYWORDS = (
    "if",
    "else",
    "for",
    "while",
    "do",
    "switch",
    "case",
    "try",
    "catch",
    "return",
    "new",
    "throw",
    "delete",
    "sizeof",
    "typeof",
    "await",
    "yield",
    "synchronized",
)

# Words that can start a statement of the form "word word;" without declaring anything
STATEMENT_KEYWORDS = CONTROL_KEYWORDS + (
    "goto",
    "break",
    "continue",
    "using",
    "namespace",
    "typedef",
    "package",
    "import",
    "extern",
)

_NOT_CONTROL = r"(?!(?:" + "|".join(CONTROL_KEYWORDS) + r")\b)"
_NOT_STATEMENT = r"(?!(?:" + "|".join(STATEMENT_KEYWORDS) + r")\b)"

# Body up to the first closing brace
_BRACE_BODY = r"\s*\{[^}]*\}"

# Python suite: everything up to the next unindented line or end of text
_SUITE = r"[\s\S]*?(?=^\S|\Z)"


class CommentStyle(Enum):
    """Comment syntax used for generated documentation blocks."""

    JAVADOC = "javadoc"  # /** ... */
    DOCSTRING = "docstring"  # """..."""
    LINE = "line"  # // ...


@dataclass(frozen=True)
class DialectRules:
    """Recognition and editing rules for one dialect.

    Attributes:
        dialect: Dialect these rules apply to
        import_pattern: Matches import statements
        class_pattern: Matches class/struct declarations with their block
        callable_pattern: Matches callable definitions with their body
        variable_pattern: Matches variable declarations (groups: name, optional type)
        signature_patterns: Match a signature (groups: name, params, optional return_type)
        doc_pattern: Matches a callable header where documentation is inserted (group: name)
        header_pattern: Matches the signature prefix of a suite-based callable span
        comment_style: Comment syntax for generated documentation
        indent_unit: Indentation unit for reindenting
        open_markers: Line endings that open a block
        close_markers: Line endings that close a block
        typed_returns: Whether signatures carry a recoverable return type
    """

    dialect: Dialect
    import_pattern: re.Pattern[str]
    class_pattern: re.Pattern[str]
    callable_pattern: re.Pattern[str]
    variable_pattern: re.Pattern[str]
    signature_patterns: tuple[re.Pattern[str], ...]
    doc_pattern: re.Pattern[str]
    comment_style: CommentStyle
    indent_unit: str
    open_markers: tuple[str, ...]
    close_markers: tuple[str, ...] = ("}",)
    header_pattern: re.Pattern[str] | None = None
    typed_returns: bool = False

    # =========================================================================
    # Callable extractors
    # =========================================================================

    def normalize_signature(self, span: str) -> str:
        """Strip the body or suite from a callable span.

        Args:
            span: Callable span as extracted

        Returns:
            Trimmed signature text used as the dedup and lookup key
        """
        if self.header_pattern is not None:
            match = self.header_pattern.match(span)
            if match:
                return match.group(0).strip()
            return span.split(":", 1)[0].strip()

        brace = span.find("{")
        if brace == -1:
            return span.strip()
        return span[:brace].strip()

    def _signature_match(self, span: str) -> re.Match[str] | None:
        signature = self.normalize_signature(span)
        for pattern in self.signature_patterns:
            match = pattern.search(signature)
            if match:
                return match
        return None

    def callable_name(self, span: str) -> str:
        """Get the declared name of a callable span ("" if not found)."""
        match = self._signature_match(span)
        if match is None:
            return ""
        return (match.group("name") or "").strip()

    def callable_parameters(self, span: str) -> str:
        """Get the raw parameter-list text of a callable span ("" if not found)."""
        match = self._signature_match(span)
        if match is None:
            return ""
        return (match.group("params") or "").strip()

    def callable_return_type(self, span: str) -> str:
        """Get the return type of a callable span.

        Dialects without static return types always yield "unknown".
        """
        if not self.typed_returns:
            return UNKNOWN
        match = self._signature_match(span)
        if match is None or "return_type" not in match.groupdict():
            return UNKNOWN
        return (match.group("return_type") or UNKNOWN).strip()

    # =========================================================================
    # Variable extractors
    # =========================================================================

    def variable_name(self, span: str) -> str:
        """Get the declared name of a variable span ("" if not found)."""
        match = self.variable_pattern.search(span)
        if match is None:
            return ""
        return match.group("name").strip()

    def variable_type(self, span: str) -> str:
        """Get the declared type of a variable span.

        Java/C++ yield the declared type, JavaScript the declaring keyword,
        Python "unknown".
        """
        match = self.variable_pattern.search(span)
        if match is None or "type" not in match.groupdict():
            return UNKNOWN
        return (match.group("type") or UNKNOWN).strip()


# =============================================================================
# Java
# =============================================================================

_JAVA_SIGNATURE = (
    r"\b(?:(?:public|private|protected)\s+)?(?:static\s+)?(?:final\s+)?"
    rf"(?P<return_type>{_NOT_CONTROL}\w+(?:<[^(){{}};]*?>)?(?:\[\])*)\s+"
    rf"(?P<name>{_NOT_CONTROL}\w+)\s*\((?P<params>[^)]*)\)"
)
_JAVA_THROWS = r"(?:\s+throws\s+[\w.]+(?:\s*,\s*[\w.]+)*)?"

JAVA_RULES = DialectRules(
    dialect=Dialect.JAVA,
    import_pattern=re.compile(r"\bimport\s+[^;\n]+;?"),
    class_pattern=re.compile(r"\bclass\s+\w+[^{;()]*\{[^}]*\}"),
    callable_pattern=re.compile(_JAVA_SIGNATURE + _JAVA_THROWS + _BRACE_BODY),
    variable_pattern=re.compile(
        r"\b(?:(?:public|private|protected)\s+)?(?:static\s+)?(?:final\s+)?"
        rf"(?P<type>{_NOT_STATEMENT}\w+(?:<[^(){{}};=]*?>)?(?:\[\])*)\s+"
        r"(?P<name>\w+)\s*(?:=\s*[^;]+)?;"
    ),
    signature_patterns=(re.compile(_JAVA_SIGNATURE),),
    doc_pattern=re.compile(_JAVA_SIGNATURE + _JAVA_THROWS + r"\s*\{"),
    comment_style=CommentStyle.JAVADOC,
    indent_unit="\t",
    open_markers=("{",),
    typed_returns=True,
)

# =============================================================================
# Python
# =============================================================================

_NOT_PY_KEYWORD = r"(?!(?:if|elif|else|try|except|finally|while|for|with|lambda)\b)"
_PY_HEADER = r"^(?:async\s+)?def\s+(?P<name>\w+)\s*\((?P<params>[^)]*)\)(?:\s*->\s*[^:\n]+)?"

PYTHON_RULES = DialectRules(
    dialect=Dialect.PYTHON,
    import_pattern=re.compile(r"^(?:import|from)\s+.*$", re.MULTILINE),
    class_pattern=re.compile(r"^class\s+\w+.*?:" + _SUITE, re.MULTILINE),
    callable_pattern=re.compile(_PY_HEADER + r"\s*:" + _SUITE, re.MULTILINE),
    variable_pattern=re.compile(
        rf"^{_NOT_PY_KEYWORD}(?P<name>\w+)[ \t]*(?::[^=\n]+)?=(?!=)[ \t]*[^\n]+",
        re.MULTILINE,
    ),
    signature_patterns=(re.compile(_PY_HEADER),),
    doc_pattern=re.compile(_PY_HEADER + r"\s*:", re.MULTILINE),
    header_pattern=re.compile(_PY_HEADER),
    comment_style=CommentStyle.DOCSTRING,
    indent_unit="    ",
    open_markers=("{", ":"),
)

# =============================================================================
# C++
# =============================================================================

_CPP_SIGNATURE = (
    rf"\b(?P<return_type>{_NOT_CONTROL}(?:\w+::)*\w+(?:<[^<>(){{}};]*>)?(?:\s*[*&]+)?)"
    rf"\s*(?<=[\s*&])(?P<name>(?:\w+::)*{_NOT_CONTROL}\w+)\s*\((?P<params>[^)]*)\)"
)

CPP_RULES = DialectRules(
    dialect=Dialect.CPP,
    import_pattern=re.compile(r'#include\s*[<"][^>"\n]+[>"]'),
    class_pattern=re.compile(r"\b(?:class|struct)\s+\w+[^{;()]*\{[^}]*\}\s*;"),
    callable_pattern=re.compile(_CPP_SIGNATURE + r"(?:\s*const)?" + _BRACE_BODY),
    variable_pattern=re.compile(
        r"\b(?:(?:static|const|constexpr|unsigned|signed)\s+)*"
        rf"(?P<type>{_NOT_STATEMENT}(?:\w+::)*\w+(?:<[^<>(){{}};=]*>)?)\s*[*&]*\s*(?<=[\s*&])"
        r"(?P<name>\w+)\s*(?:=\s*[^;]+)?;"
    ),
    signature_patterns=(re.compile(_CPP_SIGNATURE),),
    doc_pattern=re.compile(_CPP_SIGNATURE + r"(?:\s*const)?\s*\{"),
    comment_style=CommentStyle.LINE,
    indent_unit="\t",
    open_markers=("{",),
    typed_returns=True,
)

# =============================================================================
# JavaScript
# =============================================================================

_JS_FUNCTION = r"\b(?:async\s+)?function\s*\*?\s*(?P<name>\w+)\s*\((?P<params>[^)]*)\)"
_JS_ARROW = (
    r"\b(?:const|let|var)\s+(?P<name>\w+)\s*=\s*(?:async\s*)?"
    r"\(?(?P<params>[^()=]*?)\)?\s*=>"
)

JAVASCRIPT_RULES = DialectRules(
    dialect=Dialect.JAVASCRIPT,
    import_pattern=re.compile(r"\bimport\s+[^;\n]+;?|\brequire\s*\([^)]*\)\s*;?"),
    class_pattern=re.compile(r"\bclass\s+\w+[^{;()]*\{[^}]*\}"),
    callable_pattern=re.compile(
        r"(?:\b(?:async\s+)?function\s*\*?\s*\w+\s*\([^)]*\)"
        r"|\b(?:const|let|var)\s+\w+\s*=\s*(?:async\s*)?(?:\([^)]*\)|\w+)\s*=>)"
        + _BRACE_BODY
    ),
    variable_pattern=re.compile(
        r"\b(?P<type>let|const|var)\s+(?P<name>\w+)\s*(?:=[^;\n]+)?(?:;|$)",
        re.MULTILINE,
    ),
    signature_patterns=(re.compile(_JS_FUNCTION), re.compile(_JS_ARROW)),
    doc_pattern=re.compile(
        r"\b(?:async\s+)?function\s*\*?\s*(?P<name>\w+)\s*\([^)]*\)"
        r"|\b(?:const|let|var)\s+(?P<arrow>\w+)\s*=\s*(?:async\s*)?(?:\([^)]*\)|\w+)\s*=>"
    ),
    comment_style=CommentStyle.LINE,
    indent_unit="\t",
    open_markers=("{",),
)


DIALECT_RULES: dict[Dialect, DialectRules] = {
    Dialect.JAVA: JAVA_RULES,
    Dialect.PYTHON: PYTHON_RULES,
    Dialect.CPP: CPP_RULES,
    Dialect.JAVASCRIPT: JAVASCRIPT_RULES,
}


def get_rules(dialect: Dialect) -> DialectRules:
    """Get the rule table for a dialect.

    Args:
        dialect: Source dialect

    Returns:
        DialectRules for the dialect

    Raises:
        ValueError: If no rules are registered for the dialect
    """
    try:
        return DIALECT_RULES[dialect]
    except KeyError:
        raise ValueError(f"No rules registered for dialect: {dialect}") from None
