"""Shared pytest fixtures for Codeweave tests.

This module provides common fixtures used across unit and integration
tests. Fixtures are organized by category:
- Path fixtures: Sample source locations and scratch directories
- Source fixtures: Small in-memory sources per dialect
- Structure fixtures: Analyzed structures for testing filters and renderers
- Configuration fixtures: Config dictionaries for various scenarios
"""

import logging
import shutil
from pathlib import Path
from typing import Any

import pytest

from codeweave.models import Dialect, SourceUnit
from codeweave.models.structure import CodeStructure
from tests.fixtures import SAMPLE_SOURCES_DIR, build_structure

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_sources_dir() -> Path:
    """Return the path to the sample source files."""
    return SAMPLE_SOURCES_DIR


@pytest.fixture
def sources_copy(tmp_path: Path) -> Path:
    """Copy the sample sources into a scratch directory."""
    target = tmp_path / "sources"
    shutil.copytree(SAMPLE_SOURCES_DIR, target)
    return target


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Return a not-yet-created output directory."""
    return tmp_path / "processed_code"


# =============================================================================
# Source Fixtures
# =============================================================================


@pytest.fixture
def java_add_source() -> str:
    """Return a one-line Java method."""
    return "public int add(int a, int b) { return a+b; }"


@pytest.fixture
def java_source() -> str:
    """Return a small Java class with fields and two methods."""
    return """import java.util.Map;

public class Counter {
    private int count = 0;
    private String label = "hits";

    public int increment(int step) {
        count = count + step;
        return count;
    }

    public String describe() { return label; }
}
"""


@pytest.fixture
def python_source() -> str:
    """Return a small Python module."""
    return '''import sys

LIMIT = 3


def greet(name: str) -> str:
    message = "hi " + name
    return message


def shout(name):
    return greet(name).upper()
'''


@pytest.fixture
def cpp_source() -> str:
    """Return a small C++ translation unit."""
    return """#include <vector>

static int counter = 0;

int add(int a, int b) {
    counter++;
    return a + b;
}

std::vector<int> range(int n) const {
    return std::vector<int>(n);
}
"""


@pytest.fixture
def javascript_source() -> str:
    """Return a small JavaScript module."""
    return """const fs = require('fs');

let total = 0;

function add(a, b) {
    return a + b;
}

const double = (x) => {
    return x * 2;
};
"""


@pytest.fixture
def java_unit(java_source: str) -> SourceUnit:
    """Return the Java source as a SourceUnit."""
    return SourceUnit(name="Counter.java", dialect=Dialect.JAVA, raw_text=java_source)


@pytest.fixture
def python_unit(python_source: str) -> SourceUnit:
    """Return the Python source as a SourceUnit."""
    return SourceUnit(name="greeter.py", dialect=Dialect.PYTHON, raw_text=python_source)


# =============================================================================
# Structure Fixtures
# =============================================================================


@pytest.fixture
def java_structure(java_source: str) -> CodeStructure:
    """Return the analyzed Java structure."""
    return build_structure(java_source, Dialect.JAVA)


@pytest.fixture
def add_sub_structure() -> CodeStructure:
    """Return an analyzed Java structure with callables add and sub."""
    text = (
        "public int add(int a, int b) { return a + b; }\n"
        "public long sub(long a, long b) { return a - b; }\n"
    )
    return build_structure(text, Dialect.JAVA)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid Codeweave configuration."""
    return {
        "output": {
            "directory": "out",
        }
    }


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete Codeweave configuration with all options."""
    return {
        "search": {"term": "class"},
        "filter": {"type": "methods", "value": "add"},
        "edit": {
            "replace_from": "foo",
            "replace_to": "bar",
            "format_indent": True,
            "case": "uppercase",
        },
        "output": {
            "directory": "build/processed",
            "concatenate": True,
            "report_file": "report.txt",
            "error_log": "errors.txt",
        },
        "ci": {
            "fail_on_warning": True,
            "json_output": False,
        },
    }


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_codeweave_logging():
    """Restore the codeweave logger after each test."""
    yield
    logger = logging.getLogger("codeweave")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
