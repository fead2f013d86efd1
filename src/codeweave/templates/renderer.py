"""Template renderer for processing reports.

Renders per-file metrics blocks and run reports using Jinja2 templates.
All output is deterministic - the same structure always produces the same
block.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape

from codeweave.analyzers.metrics import complexity_estimate, count_non_blank_lines
from codeweave.models.structure import CodeStructure

logger = logging.getLogger(__name__)

FILE_REPORT_TEMPLATE = "file_report.txt.j2"
RUN_REPORT_TEMPLATE = "run_report.txt.j2"


def format_datetime(dt: datetime | str | None) -> str:
    """Format datetime for display in reports.

    Args:
        dt: Datetime object or ISO string

    Returns:
        Formatted date string
    """
    if dt is None:
        return "N/A"

    if isinstance(dt, str):
        try:
            dt = datetime.fromisoformat(dt)
        except ValueError:
            return dt

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")


class ReportRenderer:
    """Renders metrics reports from analyzed structures.

    Usage:
        renderer = ReportRenderer()
        block = renderer.render_file_report("Calculator.java", structure)
        report = renderer.render_run_report(timestamp, [block])
    """

    def __init__(self) -> None:
        self._env = Environment(
            loader=PackageLoader("codeweave", "templates"),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters["format_datetime"] = format_datetime

    def render_file_report(self, file_label: str, structure: CodeStructure) -> str:
        """Render the metrics block of one file.

        Args:
            file_label: Name shown on the block's first line
            structure: Analyzed and filtered structure

        Returns:
            Report block ending with a separator line
        """
        context = self._build_file_context(file_label, structure)
        return self._render(FILE_REPORT_TEMPLATE, context)

    def render_run_report(self, timestamp: datetime, blocks: list[str]) -> str:
        """Render a run report: header line followed by the file blocks.

        Args:
            timestamp: Run timestamp
            blocks: Rendered file blocks in processing order

        Returns:
            Run report text
        """
        return self._render(RUN_REPORT_TEMPLATE, {"timestamp": timestamp, "blocks": blocks})

    def _render(self, template_name: str, context: dict[str, Any]) -> str:
        try:
            template = self._env.get_template(template_name)
        except Exception as e:
            logger.error("Failed to load template %s: %s", template_name, e)
            raise ValueError(f"Template not found: {template_name}") from e

        try:
            return template.render(**context)
        except Exception as e:
            logger.error("Template rendering failed: %s", e)
            raise ValueError(f"Template rendering failed: {e}") from e

    def _build_file_context(self, file_label: str, structure: CodeStructure) -> dict[str, Any]:
        """Build the template context for one file.

        Side tables are read with defaults since filtering can leave them
        out of step with the surviving spans.
        """
        methods = []
        for span in structure.callables:
            signature = structure.callable_signature.get(span, "Unknown")
            methods.append(
                {
                    "signature": signature,
                    "lines": structure.callable_line_count.get(signature, 0),
                    "parameters": structure.callable_parameters.get(signature, "None"),
                    "return_type": structure.callable_return_type.get(signature, "Unknown"),
                }
            )

        return {
            "file_label": file_label,
            "extension": structure.extension,
            "total_lines": structure.total_lines,
            "non_blank_lines": count_non_blank_lines(structure.text),
            "complexity": complexity_estimate(structure.text),
            "counts": structure.category_counts(),
            "methods": methods,
            "variable_usage": list(structure.variable_usage.items()),
        }
