"""Unit tests for callable, variable and complexity metrics."""

from codeweave.analyzers.dedup import dedup
from codeweave.analyzers.extractor import extract
from codeweave.analyzers.metrics import (
    analyze,
    complexity_estimate,
    compute_callable_details,
    compute_line_counts,
    compute_variable_usage,
    count_non_blank_lines,
)
from codeweave.models import Dialect
from codeweave.models.structure import CodeStructure
from tests.fixtures import build_structure, read_sample_source


class TestJavaAddScenario:
    """The single-line Java add method end to end through analysis."""

    def test_signature_parameters_return_type_lines(self, java_add_source: str) -> None:
        """Test every side table entry for the add method."""
        structure = build_structure(java_add_source, Dialect.JAVA)
        signature = "public int add(int a, int b)"

        assert structure.callable_signature[java_add_source] == signature
        assert structure.callable_parameters[signature] == "int a, int b"
        assert structure.callable_return_type[signature] == "int"
        assert structure.callable_line_count[signature] == 1


class TestComputeLineCounts:
    """Tests for callable line counts."""

    def test_counts_span_lines(self, java_structure: CodeStructure) -> None:
        """Test line counts keyed by signature."""
        assert java_structure.callable_line_count == {
            "public int increment(int step)": 4,
            "public String describe()": 1,
        }

    def test_records_missing_signature(self) -> None:
        """Test that a callable without a recorded signature still gets one."""
        structure = CodeStructure(dialect=Dialect.JAVA, text="")
        structure.callables = ["void f() {\n}"]

        counts = compute_line_counts(structure)

        assert counts == {"void f()": 2}
        assert structure.callable_signature["void f() {\n}"] == "void f()"


class TestComputeCallableDetails:
    """Tests for parameters and return types."""

    def test_every_callable_has_entries(self) -> None:
        """Test that all surviving callables appear in all three tables."""
        structure = extract(read_sample_source("geometry.cpp"), Dialect.CPP)
        dedup(structure)

        compute_line_counts(structure)
        compute_callable_details(structure)

        for span in structure.callables:
            signature = structure.callable_signature[span]
            assert signature in structure.callable_line_count
            assert signature in structure.callable_parameters
            assert signature in structure.callable_return_type

    def test_cpp_details(self) -> None:
        """Test C++ parameters and return types."""
        structure = build_structure(read_sample_source("geometry.cpp"), Dialect.CPP)

        assert structure.callable_parameters["int scale(int value, int factor)"] == (
            "int value, int factor"
        )
        assert structure.callable_return_type["double area(double radius)"] == "double"

    def test_untyped_dialects_return_unknown(self) -> None:
        """Test that Python and JavaScript return types are unknown."""
        python = build_structure(read_sample_source("inventory.py"), Dialect.PYTHON)
        javascript = build_structure(read_sample_source("cart.js"), Dialect.JAVASCRIPT)

        assert set(python.callable_return_type.values()) == {"unknown"}
        assert set(javascript.callable_return_type.values()) == {"unknown"}


class TestComputeVariableUsage:
    """Tests for variable usage counts."""

    def test_counts_whole_words_in_deduplicated_text(self) -> None:
        """Test usage counts include the declaration."""
        structure = build_structure(read_sample_source("geometry.cpp"), Dialect.CPP)

        assert structure.variable_usage == {"PI": 2, "shapeCount": 2}

    def test_class_fields_have_no_usage(self, java_structure: CodeStructure) -> None:
        """Test that fields inside a class block get no usage entry."""
        assert java_structure.variable_usage == {}

    def test_case_sensitive_whole_word(self) -> None:
        """Test that partial and differently cased words do not count."""
        structure = CodeStructure(dialect=Dialect.PYTHON, text="total = 1\nTotal\ntotals\ntotal")
        structure.variables = ["total = 1"]

        usage = compute_variable_usage(structure)

        assert usage == {"total": 2}

    def test_python_sample(self) -> None:
        """Test usage counts on the inventory sample."""
        structure = build_structure(read_sample_source("inventory.py"), Dialect.PYTHON)

        assert structure.variable_usage == {"DEFAULT_STOCK": 3, "registry": 3}


class TestComplexity:
    """Tests for the complexity estimate."""

    def test_straight_line_code(self) -> None:
        """Test that code without branches has complexity 1."""
        assert complexity_estimate("return a + b;") == 1

    def test_counts_branch_keywords(self) -> None:
        """Test that each branch keyword adds one."""
        text = "if (a) { } else { }\nfor (;;) { }\nwhile (x) { }\ntry { } catch (E e) { }"

        assert complexity_estimate(text) == 7

    def test_ignores_keywords_inside_words(self) -> None:
        """Test that identifiers containing keywords do not count."""
        assert complexity_estimate("format(iffy, forward, elsewhere)") == 1

    def test_switch_case(self) -> None:
        """Test switch and case keywords."""
        assert complexity_estimate("switch (x) { case 1: case 2: }") == 4


class TestCountNonBlankLines:
    """Tests for non-blank line counting."""

    def test_counts_lines_with_content(self) -> None:
        """Test that blank and whitespace-only lines are skipped."""
        assert count_non_blank_lines("a\n\n  \nb\n") == 2

    def test_empty_text(self) -> None:
        """Test that empty text has no non-blank lines."""
        assert count_non_blank_lines("") == 0


class TestAnalyze:
    """Tests for the combined analysis."""

    def test_returns_same_structure(self, java_add_source: str) -> None:
        """Test that analyze mutates and returns the given structure."""
        structure = extract(java_add_source, Dialect.JAVA)
        dedup(structure)

        assert analyze(structure) is structure
        assert structure.callable_line_count
