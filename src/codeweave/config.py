"""Codeweave configuration system.

Configuration is YAML-based; every processing option can be overridden per
run from the CLI. Supports environment variable substitution (${VAR}) in
config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.codeweave/config.yaml
3. ./codeweave.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from codeweave.analyzers.filtering import FilterType
from codeweave.transforms.editor import CaseMode

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class SearchConfig:
    """Search gate configuration.

    Attributes:
        term: Literal text or regular expression a file must contain (empty = accept all)
    """

    term: str = ""


@dataclass
class FilterConfig:
    """Structure filter configuration.

    Attributes:
        type: Category to keep (all, imports, classes, methods, variables,
              method_name, variable_type, parameter_type, return_type)
        value: Narrowing value (meaning depends on type; empty = whole category)
    """

    type: str = "all"
    value: str = ""

    def __post_init__(self) -> None:
        """Validate filter configuration."""
        try:
            self.type = FilterType.parse(self.type).value
        except ValueError:
            valid = sorted(f.value for f in FilterType)
            raise ValueError(f"Invalid filter type: {self.type}. Valid: {valid}") from None


@dataclass
class EditConfig:
    """Editor configuration.

    Attributes:
        replace_from: Literal text to replace (empty disables replacement)
        replace_to: Replacement text
        format_indent: Reindent the emitted text
        case: Identifier case transform (uppercase, lowercase, none)
    """

    replace_from: str = ""
    replace_to: str = ""
    format_indent: bool = False
    case: str = "none"

    def __post_init__(self) -> None:
        """Validate edit configuration."""
        try:
            self.case = CaseMode.parse(self.case).value
        except ValueError:
            valid = sorted(c.value for c in CaseMode)
            raise ValueError(f"Invalid case mode: {self.case}. Valid: {valid}") from None


@dataclass
class OutputConfig:
    """Output configuration.

    Attributes:
        directory: Directory receiving edited files, report and error log
        concatenate: Join all edited files into one output
        report_file: Cumulative report file name inside the directory
        error_log: Error log file name inside the directory
    """

    directory: str = "processed_code"
    concatenate: bool = False
    report_file: str = "processing_report.txt"
    error_log: str = "error_log.txt"


@dataclass
class CIConfig:
    """CI/CD-specific configuration.

    Attributes:
        fail_on_warning: Exit with error if structure validation warns
        json_output: Use JSON output format
    """

    fail_on_warning: bool = False
    json_output: bool = False


@dataclass
class CodeweaveConfig:
    """Top-level Codeweave configuration.

    Attributes:
        search: Search gate settings
        filter: Structure filter settings
        edit: Editor settings
        output: Output directory and file names
        ci: CI/CD settings
    """

    search: SearchConfig = field(default_factory=SearchConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    edit: EditConfig = field(default_factory=EditConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    ci: CIConfig = field(default_factory=CIConfig)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${CODEWEAVE_OUTPUT} -> value of CODEWEAVE_OUTPUT

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.codeweave/config.yaml
    2. ./codeweave.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".codeweave" / "config.yaml",
        start_path / "codeweave.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> CodeweaveConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        CodeweaveConfig instance

    Raises:
        ValueError: If a section holds an invalid value
    """
    data = substitute_env_vars(data)

    config = CodeweaveConfig()

    if "search" in data:
        search_data = data["search"] or {}
        config.search = SearchConfig(term=str(search_data.get("term") or ""))

    if "filter" in data:
        filter_data = data["filter"] or {}
        config.filter = FilterConfig(
            type=filter_data.get("type") or "all",
            value=str(filter_data.get("value") or ""),
        )

    if "edit" in data:
        edit_data = data["edit"] or {}
        config.edit = EditConfig(
            replace_from=str(edit_data.get("replace_from") or ""),
            replace_to=str(edit_data.get("replace_to") or ""),
            format_indent=bool(edit_data.get("format_indent", False)),
            case=edit_data.get("case") or "none",
        )

    if "output" in data:
        output_data = data["output"] or {}
        config.output = OutputConfig(
            directory=output_data.get("directory", config.output.directory),
            concatenate=bool(output_data.get("concatenate", False)),
            report_file=output_data.get("report_file", config.output.report_file),
            error_log=output_data.get("error_log", config.output.error_log),
        )

    if "ci" in data:
        ci_data = data["ci"] or {}
        config.ci = CIConfig(
            fail_on_warning=ci_data.get("fail_on_warning", False),
            json_output=ci_data.get("json_output", False),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> CodeweaveConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        CodeweaveConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = CodeweaveConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# Codeweave Configuration

# Search gate: only files containing this text (or matching it as a regex) are processed
search:
  term: ""

# Structure filter
filter:
  type: "all"   # all, imports, classes, methods, variables,
                # method_name, variable_type, parameter_type, return_type
  value: ""     # e.g. a method name, variable type, parameter type or return type

# Editing applied to the restructured code
edit:
  replace_from: ""
  replace_to: ""
  format_indent: false
  case: "none"  # uppercase, lowercase, none

# Output settings
output:
  directory: "processed_code"
  concatenate: false
  report_file: "processing_report.txt"
  error_log: "error_log.txt"

# CI/CD settings
ci:
  fail_on_warning: false
  json_output: false
'''
