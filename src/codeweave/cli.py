"""Codeweave CLI interface.

Commands:
- process: Process every supported file in one or more directories
- inspect: Process a single file and print the result without writing
- init: Initialize Codeweave configuration

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: Enable JSON log output
- --version: Show version and exit
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from codeweave import __version__
from codeweave.config import CodeweaveConfig, create_default_config, load_config
from codeweave.models import BatchResult, BatchStatus
from codeweave.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="codeweave",
    help="Dialect-aware structural extraction and rewriting of source files",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: CodeweaveConfig | None = None
_logger = get_logger("codeweave.cli")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"codeweave {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Codeweave - pattern-based code restructuring.

    Extracts imports, classes, callables and variables from Java, Python,
    C++ and JavaScript files, then rewrites and reports on them.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    if _config.config_path:
        _logger.debug(f"Loaded config from: {_config.config_path}")

    if _config.ci.json_output and not ci:
        configure_from_cli(verbose=verbose, quiet=quiet, ci=True)


def _current_config() -> CodeweaveConfig:
    return _config if _config is not None else CodeweaveConfig()


# =============================================================================
# process command
# =============================================================================


@app.command()
def process(
    directories: Annotated[
        list[Path],
        typer.Argument(help="Directories containing source files to process"),
    ],
    search: Annotated[
        str | None,
        typer.Option(
            "--search",
            "-s",
            help="Only process files containing this text or matching this regex",
        ),
    ] = None,
    filter_type: Annotated[
        str | None,
        typer.Option(
            "--filter-type",
            "-t",
            help=(
                "Category to keep: all, imports, classes, methods, variables, "
                "method_name, variable_type, parameter_type, return_type"
            ),
        ),
    ] = None,
    filter_value: Annotated[
        str | None,
        typer.Option(
            "--filter-value",
            help="Method name, variable type, parameter type or return type to keep",
        ),
    ] = None,
    concatenate: Annotated[
        bool | None,
        typer.Option(
            "--concatenate/--no-concatenate",
            help="Join all processed files into one output",
        ),
    ] = None,
    replace_from: Annotated[
        str | None,
        typer.Option(
            "--replace-from",
            help="Literal text to replace in the output",
        ),
    ] = None,
    replace_to: Annotated[
        str | None,
        typer.Option(
            "--replace-to",
            help="Replacement text",
        ),
    ] = None,
    format_indent: Annotated[
        bool | None,
        typer.Option(
            "--format-indent/--no-format-indent",
            help="Reindent the output",
        ),
    ] = None,
    case: Annotated[
        str | None,
        typer.Option(
            "--case",
            help="Identifier case transform: uppercase, lowercase, none",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Output directory (overrides config)",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Print outputs and reports without writing files",
        ),
    ] = False,
) -> None:
    """Process every supported file in each directory.

    Each directory is one run: its files are processed in name order, edited
    outputs are written to the output directory and the run report is
    appended to the cumulative report.

    Exit codes:
        0: All runs completed without errors
        1: No run completed
        2: Runs completed with recoverable errors or warnings
    """
    from codeweave.discovery import discover_sources
    from codeweave.errors import (
        CodeweaveError,
        InvalidInputPathError,
        NoSupportedFilesError,
        OutputWriteError,
    )
    from codeweave.pipeline import ProcessingOptions, ProcessingPipeline
    from codeweave.writer import OutputWriter

    config = _current_config()

    try:
        options = ProcessingOptions.from_config(config)
        options = replace(
            options,
            search_term=search if search is not None else options.search_term,
            filter_type=filter_type if filter_type is not None else options.filter_type,
            filter_value=filter_value if filter_value is not None else options.filter_value,
            concatenate=concatenate if concatenate is not None else options.concatenate,
            replace_from=replace_from if replace_from is not None else options.replace_from,
            replace_to=replace_to if replace_to is not None else options.replace_to,
            format_indent=format_indent if format_indent is not None else options.format_indent,
            case_mode=case if case is not None else options.case_mode,
        )
    except ValueError as e:
        _logger.error(f"Invalid option: {e}")
        raise typer.Exit(1)

    writer: OutputWriter | None = None
    if not dry_run:
        target = output_dir or Path(config.output.directory)
        try:
            writer = OutputWriter(
                target,
                report_file=config.output.report_file,
                error_log=config.output.error_log,
            )
        except CodeweaveError as e:
            _logger.error(str(e))
            raise typer.Exit(1)
        _logger.info(f"Output: {target}")

    pipeline = ProcessingPipeline()
    succeeded = 0
    had_problems = False

    for directory in directories:
        _logger.info(f"Processing directory: {directory}")

        try:
            sources = discover_sources(directory)
        except InvalidInputPathError as e:
            _logger.error(str(e))
            if writer:
                writer.append_error(f"Main loop error: {e}")
            continue
        except NoSupportedFilesError as e:
            _logger.warning(str(e))
            if writer:
                writer.append_error(str(e))
            continue

        result = pipeline.run(sources, options)
        warnings = [(f.name, w) for f in result.files for w in f.warnings]

        if result.status is not BatchStatus.COMPLETED:
            for error in result.errors:
                _logger.error(f"[{error.component}] {error.message}")
            if writer:
                for error in result.errors:
                    writer.append_error(error.message)
            continue

        succeeded += 1
        _logger.structured(
            logging.INFO,
            "Run summary",
            directory=str(directory),
            processed=len(result.files),
            excluded=len(result.excluded),
            errors=len(result.errors),
        )
        if result.errors:
            had_problems = True
            _logger.warning(f"Encountered {len(result.errors)} error(s)")
            for error in result.errors:
                _logger.warning(f"  [{error.component}] {error.file_name}: {error.message}")
        if warnings and config.ci.fail_on_warning:
            had_problems = True

        if writer is None:
            _print_result(result)
            continue

        for error in result.errors:
            writer.append_error(f"{error.file_name}: {error.message}")
        for name, warning in warnings:
            writer.append_error(f"{name}: {warning}")

        try:
            writer.append_report(result.report)
            if options.concatenate and result.concatenated_output is not None:
                path = writer.write_concatenated(result.concatenated_output)
                _logger.info(f"Wrote {path}")
            else:
                paths = writer.write_individual(result.files)
                _logger.info(f"Wrote {len(paths)} file(s) to {writer.directory}")
        except OutputWriteError as e:
            # The writer has already appended the failure to the error log
            had_problems = True
            _logger.error(str(e))

    if succeeded == 0:
        raise typer.Exit(1)
    if had_problems:
        raise typer.Exit(2)
    raise typer.Exit(0)


def _print_result(result: BatchResult) -> None:
    """Print the outputs and report of a run."""
    if result.concatenated_output is not None:
        typer.echo(result.concatenated_output)
    else:
        for file_result in result.files:
            typer.echo(f"--- {file_result.output_name} ---")
            typer.echo(file_result.edited_text)
    typer.echo(result.report)


# =============================================================================
# inspect command
# =============================================================================


@app.command()
def inspect(
    file: Annotated[
        Path,
        typer.Argument(
            help="Source file to inspect",
            exists=True,
            dir_okay=False,
        ),
    ],
) -> None:
    """Process one file and print its edited text and report.

    The search gate is not applied; every other option comes from the
    configuration. Nothing is written.
    """
    from codeweave.models import SourceUnit
    from codeweave.pipeline import ProcessingOptions, ProcessingPipeline

    try:
        source = SourceUnit.from_path(file)
    except (ValueError, UnicodeDecodeError) as e:
        _logger.error(f"Cannot read {file}: {e}")
        raise typer.Exit(1)

    options = replace(
        ProcessingOptions.from_config(_current_config()),
        search_term="",
        concatenate=False,
    )
    result = ProcessingPipeline().run([source], options)

    if not result.files:
        for error in result.errors:
            _logger.error(f"[{error.component}] {error.message}")
        raise typer.Exit(1)

    file_result = result.files[0]
    typer.echo(file_result.edited_text)
    typer.echo()
    typer.echo(file_result.report)

    for warning in file_result.warnings:
        _logger.warning(warning)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite existing config",
        ),
    ] = False,
) -> None:
    """Initialize Codeweave configuration.

    Creates .codeweave/config.yaml with the default settings.
    """
    codeweave_dir = Path(".codeweave")
    codeweave_dir.mkdir(exist_ok=True)

    config_file = codeweave_dir / "config.yaml"
    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config(), encoding="utf-8")
    typer.echo(f"Created {config_file}")


if __name__ == "__main__":
    app()
