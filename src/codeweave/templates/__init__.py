"""Codeweave report rendering.

This module provides Jinja2-based rendering of per-file metrics blocks and
run reports. Output is a pure function of the analyzed structure.
"""

from codeweave.templates.renderer import ReportRenderer, format_datetime

__all__ = ["ReportRenderer", "format_datetime"]
