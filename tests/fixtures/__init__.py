"""Test fixtures for Codeweave.

Sample Sources (one file per dialect, plus one unsupported file):
- sample_sources/Calculator.java
- sample_sources/inventory.py
- sample_sources/geometry.cpp
- sample_sources/cart.js
"""

from pathlib import Path

from codeweave.analyzers import analyze, dedup, extract
from codeweave.models import Dialect
from codeweave.models.structure import CodeStructure

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Path to sample sources
SAMPLE_SOURCES_DIR = FIXTURES_DIR / "sample_sources"

# Sample file names in discovery (name) order
SAMPLE_FILE_NAMES = ["Calculator.java", "cart.js", "geometry.cpp", "inventory.py"]


def get_sample_source(name: str) -> Path:
    """Get path to a sample source file.

    Args:
        name: File name of the sample

    Returns:
        Path to the sample file

    Raises:
        ValueError: If the sample doesn't exist
    """
    path = SAMPLE_SOURCES_DIR / name
    if not path.exists():
        raise ValueError(f"Sample source not found: {name}")
    return path


def read_sample_source(name: str) -> str:
    """Read a sample source file as UTF-8 text."""
    return get_sample_source(name).read_text(encoding="utf-8")


def build_structure(raw_text: str, dialect: Dialect) -> CodeStructure:
    """Extract, deduplicate and analyze raw text."""
    structure = extract(raw_text, dialect)
    dedup(structure)
    analyze(structure)
    return structure
