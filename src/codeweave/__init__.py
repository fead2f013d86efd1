"""Codeweave - Dialect-aware source restructuring and metrics.

Codeweave extracts imports, classes, callables and variables from Java,
Python, C++ and JavaScript sources using pattern rules, deduplicates and
analyzes them, and emits restructured, documented source plus a metrics
report for each file.

Core principles:
- Pattern-Based: Lightweight per-dialect rule tables, no grammar or AST
- Deterministic: Same input and options always produce the same output
- Isolated: Each file is processed independently, failures never spread
- CI/CD Compatibility: No interactive prompts, meaningful exit codes
"""

__version__ = "0.1.0"
__author__ = "Codeweave Contributors"
