"""Persistence of edited files, reports and the error log."""

import logging
from datetime import UTC, datetime
from pathlib import Path

from codeweave.errors import OutputWriteError
from codeweave.models import FileResult

logger = logging.getLogger(__name__)

CONCATENATED_FILE = "concatenated_output.txt"


class OutputWriter:
    """Writes processing outputs into one directory.

    Usage:
        writer = OutputWriter(Path("processed_code"))
        writer.write_individual(result.files)
        writer.append_report(result.report)
    """

    def __init__(
        self,
        directory: Path,
        report_file: str = "processing_report.txt",
        error_log: str = "error_log.txt",
    ) -> None:
        """Initialize the writer and create the output directory.

        Args:
            directory: Output directory
            report_file: Cumulative report file name
            error_log: Error log file name

        Raises:
            OutputWriteError: If the directory cannot be created
        """
        self.directory = directory
        self.report_path = directory / report_file
        self.error_log_path = directory / error_log

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(directory, str(e)) from e

    def write_individual(self, files: list[FileResult]) -> list[Path]:
        """Write one edited file per result as processed_<name>.

        Every file is attempted even if an earlier one fails.

        Args:
            files: Results to persist

        Returns:
            Paths written successfully

        Raises:
            OutputWriteError: For the first failing file, after all files were
                attempted and every failure was appended to the error log
        """
        written: list[Path] = []
        first_error: OutputWriteError | None = None

        for result in files:
            path = self.directory / result.output_name
            try:
                self._write(path, result.edited_text)
                written.append(path)
            except OutputWriteError as e:
                logger.warning("%s", e)
                self.append_error(str(e))
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error
        return written

    def write_concatenated(self, text: str) -> Path:
        """Write the concatenated output file.

        Raises:
            OutputWriteError: If the file cannot be written (already in the error log)
        """
        path = self.directory / CONCATENATED_FILE
        try:
            self._write(path, text)
        except OutputWriteError as e:
            self.append_error(str(e))
            raise
        return path

    def append_report(self, text: str) -> Path:
        """Append a run report to the cumulative report file.

        Raises:
            OutputWriteError: If the report cannot be written (already in the error log)
        """
        try:
            self._append(self.report_path, text)
        except OutputWriteError as e:
            self.append_error(str(e))
            raise
        return self.report_path

    def append_error(self, message: str, timestamp: datetime | None = None) -> None:
        """Append a "<timestamp>: <message>" line to the error log.

        Failures to write the log itself are logged and otherwise ignored.
        """
        timestamp = timestamp or datetime.now(UTC)
        line = f"{timestamp.strftime('%Y-%m-%d %H:%M:%S UTC')}: {message}\n"
        try:
            self._append(self.error_log_path, line)
        except OutputWriteError as e:
            logger.error("Could not write error log: %s", e)

    def _write(self, path: Path, text: str) -> None:
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(path, str(e)) from e
        logger.debug("Wrote %s", path)

    def _append(self, path: Path, text: str) -> None:
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise OutputWriteError(path, str(e)) from e
