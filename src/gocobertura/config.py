"""Configuration parsing from ``.gocobertura.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from gocobertura.ignore import Ignore

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".gocobertura.yml"
DEFAULT_INTERMEDIATE_PATH = "coverage.xml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        elif isinstance(value, list):
            result[key] = [_resolve_env_vars(v) if isinstance(v, str) else v for v in value]
        else:
            result[key] = value
    return result


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass
class IgnoreConfig:
    """Which source files to leave out of the report."""

    generated_files: bool = False
    """Drop files carrying the generated-code marker."""

    files: str = ""
    """Regular expression matched against module-relative file paths."""

    dirs: str = ""
    """Regular expression matched against module-relative directories."""

    generated_marker: str = ""
    """Override for the generated-code marker pattern."""


@dataclass
class OutputConfig:
    """Presentation-layer output options."""

    save_intermediate: bool = False
    """Also write the XML report to ``intermediate_path``."""

    intermediate_path: str = DEFAULT_INTERMEDIATE_PATH
    """Where the extra copy of the report goes."""


@dataclass
class ConvertConfig:
    """Top-level configuration for a conversion run."""

    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def build_ignore(self) -> Ignore:
        """Return the ``Ignore`` filter described by this configuration.

        Raises:
            re.error: If a pattern is not a valid regular expression.
        """
        return Ignore.from_patterns(
            files=self.ignore.files or None,
            dirs=self.ignore.dirs or None,
            generated_files=self.ignore.generated_files,
            generated_marker=self.ignore.generated_marker or None,
        )


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    return value if isinstance(value, dict) else {}


def load_config(path: str | Path | None = None) -> ConvertConfig:
    """Load ``.gocobertura.yml`` from a file or a directory containing it.

    Falls back to defaults when the file is missing or incomplete.
    """
    config_path = Path(path) if path is not None else Path.cwd()
    if config_path.is_dir():
        config_path = config_path / CONFIG_FILE_NAME

    raw: dict[str, Any] = {}
    if config_path.is_file():
        parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)
        logger.debug("Loaded configuration from %s", config_path)

    ignore_raw = _section(raw, "ignore")
    output_raw = _section(raw, "output")

    return ConvertConfig(
        ignore=IgnoreConfig(
            generated_files=_as_bool(ignore_raw.get("generated_files", False)),
            files=str(ignore_raw.get("files") or ""),
            dirs=str(ignore_raw.get("dirs") or ""),
            generated_marker=str(ignore_raw.get("generated_marker") or ""),
        ),
        output=OutputConfig(
            save_intermediate=_as_bool(output_raw.get("save_intermediate", False)),
            intermediate_path=str(
                output_raw.get("intermediate_path", DEFAULT_INTERMEDIATE_PATH)
            ),
        ),
    )


def _validate_pattern(pattern: str, key: str) -> list[str]:
    if not pattern:
        return []
    try:
        re.compile(pattern)
    except re.error as exc:
        return [f"{key} is not a valid regular expression: {exc}"]
    return []


def validate_config(config: ConvertConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []
    errors.extend(_validate_pattern(config.ignore.files, "ignore.files"))
    errors.extend(_validate_pattern(config.ignore.dirs, "ignore.dirs"))
    errors.extend(_validate_pattern(config.ignore.generated_marker, "ignore.generated_marker"))
    if config.output.save_intermediate and not config.output.intermediate_path.strip():
        errors.append("output.intermediate_path is required when save_intermediate is enabled")
    return errors
