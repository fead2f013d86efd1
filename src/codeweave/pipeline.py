"""Processing pipeline orchestrator.

Runs every accepted source file through the fixed stage order (search
gate, extract, dedup, analyze, filter, restructure, edit, report) and
collects the results. Files are processed strictly one after another and
share no state.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime

from codeweave.analyzers import (
    analyze,
    dedup,
    extract,
    filter_structure,
    validate_structure,
)
from codeweave.analyzers.filtering import FilterType
from codeweave.config import CodeweaveConfig
from codeweave.errors import InvalidPatternError
from codeweave.models import (
    BatchResult,
    BatchStatus,
    FileResult,
    ProcessingError,
    SourceUnit,
)
from codeweave.templates import ReportRenderer
from codeweave.transforms import CaseMode, edit, restructure

logger = logging.getLogger(__name__)


@dataclass
class ProcessingOptions:
    """Options for one processing run.

    Attributes:
        search_term: Text or regex a file must contain (empty = accept all)
        filter_type: Category to keep
        filter_value: Narrowing value for the filter
        concatenate: Join all edited texts into one output
        replace_from: Literal text to replace
        replace_to: Replacement text
        format_indent: Reindent edited text
        case_mode: Identifier case transform
    """

    search_term: str = ""
    filter_type: FilterType = FilterType.ALL
    filter_value: str = ""
    concatenate: bool = False
    replace_from: str = ""
    replace_to: str = ""
    format_indent: bool = False
    case_mode: CaseMode = CaseMode.NONE

    def __post_init__(self) -> None:
        """Normalize string filter types and case modes."""
        self.filter_type = FilterType.parse(self.filter_type)
        self.case_mode = CaseMode.parse(self.case_mode)

    @classmethod
    def from_config(cls, config: CodeweaveConfig) -> "ProcessingOptions":
        """Build options from a loaded configuration."""
        return cls(
            search_term=config.search.term,
            filter_type=FilterType.parse(config.filter.type),
            filter_value=config.filter.value,
            concatenate=config.output.concatenate,
            replace_from=config.edit.replace_from,
            replace_to=config.edit.replace_to,
            format_indent=config.edit.format_indent,
            case_mode=CaseMode.parse(config.edit.case),
        )


def matches_search_term(raw_text: str, search_term: str) -> bool:
    """Decide whether a file passes the search gate.

    An empty term accepts everything. Otherwise the text must contain the
    term literally or match it as a regular expression.

    Args:
        raw_text: Unmodified file content
        search_term: Search term from the options

    Returns:
        True if the file should be processed

    Raises:
        InvalidPatternError: If the term does not compile as a regex
    """
    if not search_term:
        return True

    try:
        pattern = re.compile(search_term)
    except re.error as e:
        raise InvalidPatternError(search_term, str(e)) from e

    return search_term in raw_text or pattern.search(raw_text) is not None


def concatenate_outputs(files: list[FileResult]) -> str:
    """Join edited texts, each preceded by a "// File: <extension>" line."""
    return "".join(
        f"// File: {result.dialect.extension}\n{result.edited_text}\n\n" for result in files
    )


@dataclass
class _FileContext:
    """State of one file while it moves through the stages."""

    source: SourceUnit
    stage: str = "search"
    warnings: list[str] = field(default_factory=list)


class ProcessingPipeline:
    """Runs source files through all processing stages in sequence.

    The pipeline sequence per file:
    1. Search gate
    2. Extraction and structure validation
    3. Line and callable deduplication
    4. Analysis (line counts, callable details, variable usage)
    5. Filtering
    6. Restructuring and editing
    7. Report rendering

    A failure in any stage is recorded against that file only; the other
    files are processed normally.
    """

    def __init__(self, renderer: ReportRenderer | None = None) -> None:
        """Initialize the processing pipeline.

        Args:
            renderer: Report renderer (a default one is created if None)
        """
        self._renderer = renderer or ReportRenderer()

    def run(
        self,
        sources: list[SourceUnit],
        options: ProcessingOptions | None = None,
    ) -> BatchResult:
        """Process a batch of source files.

        Args:
            sources: Files in processing order
            options: Run options (defaults if None)

        Returns:
            BatchResult with per-file results, errors and the run report
        """
        options = options or ProcessingOptions()

        result = BatchResult(timestamp=datetime.now(UTC), status=BatchStatus.RUNNING)
        logger.info("Starting processing run for %d files", len(sources))

        try:
            for source in sources:
                file_result = self.process_file(source, options, result)
                if file_result is not None:
                    result.files.append(file_result)

            result.report = self._renderer.render_run_report(
                result.timestamp,
                [f.report for f in result.files],
            )
            if options.concatenate:
                result.concatenated_output = concatenate_outputs(result.files)

            result.status = BatchStatus.COMPLETED

        except Exception as e:
            logger.error("Processing run failed: %s", e)
            result.status = BatchStatus.FAILED
            result.add_error(
                ProcessingError(
                    component="pipeline",
                    message=str(e),
                    recoverable=False,
                )
            )

        logger.info(
            "Processing complete: %s (%d processed, %d excluded, %d errors)",
            result.status.value,
            len(result.files),
            len(result.excluded),
            len(result.errors),
        )

        return result

    def process_file(
        self,
        source: SourceUnit,
        options: ProcessingOptions,
        result: BatchResult,
    ) -> FileResult | None:
        """Process one file through every stage.

        Args:
            source: File to process
            options: Run options
            result: Batch result receiving exclusions and errors

        Returns:
            FileResult, or None if the file was excluded or failed
        """
        logger.info("Processing started: %s", source.name)
        context = _FileContext(source=source)

        try:
            if not self._passes_search_gate(context, options, result):
                return None
            file_result = self._process_accepted(context, options)
        except Exception as e:
            result.add_error(
                ProcessingError(
                    component=context.stage,
                    message=f"Processing failed: {e}",
                    file_name=source.name,
                    recoverable=True,
                )
            )
            logger.warning("Processing %s failed at %s: %s", source.name, context.stage, e)
            return None
        finally:
            logger.info("Processing finished: %s", source.name)

        return file_result

    def _passes_search_gate(
        self,
        context: _FileContext,
        options: ProcessingOptions,
        result: BatchResult,
    ) -> bool:
        """Apply the search gate, treating an invalid pattern as no match."""
        source = context.source
        try:
            accepted = matches_search_term(source.raw_text, options.search_term)
        except InvalidPatternError as e:
            logger.warning("%s; excluding %s", e, source.name)
            result.add_error(
                ProcessingError(
                    component="search",
                    message=str(e),
                    file_name=source.name,
                    recoverable=True,
                )
            )
            accepted = False

        if not accepted:
            logger.debug("Excluded by search gate: %s", source.name)
            result.excluded.append(source.name)
        return accepted

    def _process_accepted(self, context: _FileContext, options: ProcessingOptions) -> FileResult:
        """Run the structural stages on a file that passed the search gate."""
        source = context.source

        context.stage = "extract"
        structure = extract(source.raw_text, source.dialect)
        logger.info("File: %s, Lines: %d", source.name, structure.total_lines)

        context.stage = "validate"
        context.warnings = validate_structure(source.raw_text, source.dialect)
        for warning in context.warnings:
            logger.warning("%s: %s", source.name, warning)

        context.stage = "dedup"
        dedup(structure)

        context.stage = "analyze"
        analyze(structure)

        context.stage = "filter"
        filter_structure(structure, options.filter_type, options.filter_value)

        context.stage = "edit"
        edited = edit(
            restructure(structure),
            source.dialect,
            replace_from=options.replace_from,
            replace_to=options.replace_to,
            format_indent=options.format_indent,
            case_mode=options.case_mode,
        )

        context.stage = "report"
        report = self._renderer.render_file_report(source.name, structure)

        return FileResult(
            name=source.name,
            dialect=source.dialect,
            structure=structure,
            edited_text=edited,
            report=report,
            warnings=list(context.warnings),
        )
