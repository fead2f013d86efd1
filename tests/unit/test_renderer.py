"""Unit tests for report rendering."""

from datetime import UTC, datetime

import pytest

from codeweave.models import Dialect
from codeweave.models.structure import CodeStructure
from codeweave.templates import ReportRenderer, format_datetime
from tests.fixtures import build_structure, read_sample_source

SEPARATOR = "-" * 40


@pytest.fixture
def renderer() -> ReportRenderer:
    """Return a report renderer."""
    return ReportRenderer()


class TestFormatDatetime:
    """Tests for the datetime filter."""

    def test_formats_utc(self) -> None:
        """Test the report timestamp format."""
        dt = datetime(2024, 3, 5, 14, 7, 9, tzinfo=UTC)

        assert format_datetime(dt) == "2024-03-05 14:07:09 UTC"

    def test_naive_datetime_treated_as_utc(self) -> None:
        """Test that naive datetimes are formatted as UTC."""
        assert format_datetime(datetime(2024, 1, 1)) == "2024-01-01 00:00:00 UTC"

    def test_iso_string(self) -> None:
        """Test that ISO strings are parsed."""
        assert format_datetime("2024-01-02T03:04:05+00:00") == "2024-01-02 03:04:05 UTC"

    def test_none(self) -> None:
        """Test that None renders as N/A."""
        assert format_datetime(None) == "N/A"


class TestFileReport:
    """Tests for the per-file metrics block."""

    def test_java_add_block(self, renderer: ReportRenderer, java_add_source: str) -> None:
        """Test the complete block for a one-method Java file."""
        structure = build_structure(java_add_source, Dialect.JAVA)

        block = renderer.render_file_report("Add.java", structure)

        assert block == (
            "File: Add.java\n"
            "Extension: .java\n"
            "Total Lines: 1\n"
            "Non-blank Lines: 1\n"
            "Complexity: Cyclomatic Complexity: 1\n"
            "Imports: 0\n"
            "Classes: 0\n"
            "Methods: 1\n"
            "Variables: 0\n"
            "Method Details:\n"
            "  - public int add(int a, int b)\n"
            "    Lines: 1\n"
            "    Parameters: int a, int b\n"
            "    Return Type: int\n"
            "Variable Usage:\n"
            f"{SEPARATOR}\n"
        )

    def test_variable_usage_lines(self, renderer: ReportRenderer) -> None:
        """Test that variable usage is listed per name."""
        structure = build_structure(read_sample_source("geometry.cpp"), Dialect.CPP)

        block = renderer.render_file_report("geometry.cpp", structure)

        assert "Variables: 2\n" in block
        assert "  - PI: 2 uses\n" in block
        assert "  - shapeCount: 2 uses\n" in block

    def test_missing_side_table_entries_use_defaults(self, renderer: ReportRenderer) -> None:
        """Test defaults when a callable has no recorded details."""
        structure = CodeStructure(dialect=Dialect.CPP, text="void f() { }")
        structure.callables = ["void f() { }"]

        block = renderer.render_file_report("f.cpp", structure)

        assert "  - Unknown\n" in block
        assert "    Lines: 0\n" in block
        assert "    Parameters: None\n" in block
        assert "    Return Type: Unknown\n" in block

    def test_generic_types_not_escaped(self, renderer: ReportRenderer) -> None:
        """Test that angle brackets in types render literally."""
        structure = build_structure(
            "public List<String> names(Map<String, Integer> index) { return null; }", Dialect.JAVA
        )

        block = renderer.render_file_report("Names.java", structure)

        assert "&lt;" not in block
        assert "    Return Type: List<String>\n" in block
        assert "    Parameters: Map<String, Integer> index\n" in block

    def test_counts_reflect_filtered_structure(self, renderer: ReportRenderer) -> None:
        """Test that counts are taken from the surviving spans."""
        structure = build_structure(read_sample_source("Calculator.java"), Dialect.JAVA)
        structure.imports = []

        block = renderer.render_file_report("Calculator.java", structure)

        assert "Imports: 0\n" in block
        assert "Methods: 3\n" in block


class TestRunReport:
    """Tests for the run report."""

    def test_header_and_blocks(self, renderer: ReportRenderer) -> None:
        """Test that blocks follow the timestamped header in order."""
        timestamp = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)

        report = renderer.render_run_report(timestamp, ["A\n", "B\n"])

        assert report == "Processing Report - 2024-06-01 12:00:00 UTC\nA\nB\n"

    def test_no_blocks(self, renderer: ReportRenderer) -> None:
        """Test a run report without accepted files."""
        timestamp = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)

        report = renderer.render_run_report(timestamp, [])

        assert report == "Processing Report - 2024-06-01 12:00:00 UTC\n"
