"""Configuration loading for wfimport (.wfimport.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .selectors import selector_names

CONFIG_FILENAME = ".wfimport.yml"
OUTPUT_FORMATS = ("json", "summary")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DirectoryConfig:
    """Directory import settings."""

    pattern: Optional[str] = None


@dataclass
class ArchiveConfig:
    """Zip archive import settings."""

    selector: str = "any"
    grouped: bool = False
    collect_errors: bool = False


@dataclass
class LoggingConfig:
    """Log verbosity and optional log file."""

    verbose: bool = False
    quiet: bool = False
    log_file: Optional[Path] = None


@dataclass
class ImportConfig:
    """Represents the settings defined in .wfimport.yml."""

    root: Path
    directory: DirectoryConfig = field(default_factory=DirectoryConfig)
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output_format: str = "json"


def load_config(config_path: Path) -> ImportConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ImportConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    directory_data = _as_dict(data.get("directory"))
    directory = DirectoryConfig(pattern=_as_str(directory_data.get("pattern")))

    archive_data = _as_dict(data.get("archive"))
    archive = ArchiveConfig()
    if archive_data:
        selector = _as_str(archive_data.get("selector"))
        if selector is not None:
            if selector.lower() not in selector_names():
                known = ", ".join(selector_names())
                raise ConfigError(f"Unknown archive selector '{selector}' (expected one of: {known})")
            archive.selector = selector.lower()
        archive.grouped = _as_bool(archive_data.get("grouped")) or False
        archive.collect_errors = _as_bool(archive_data.get("collect_errors")) or False

    logging_data = _as_dict(data.get("logging"))
    logging_config = LoggingConfig()
    if logging_data:
        logging_config.verbose = _as_bool(logging_data.get("verbose")) or False
        logging_config.quiet = _as_bool(logging_data.get("quiet")) or False
        log_file = _as_str(logging_data.get("log_file"))
        logging_config.log_file = root / log_file if log_file else None

    output_data = _as_dict(data.get("output"))
    output_format = _as_str(output_data.get("format")) or "json"
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Unknown output format '{output_format}' (expected one of: {', '.join(OUTPUT_FORMATS)})"
        )

    return ImportConfig(
        root=root,
        directory=directory,
        archive=archive,
        logging=logging_config,
        output_format=output_format,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "ArchiveConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "DirectoryConfig",
    "ImportConfig",
    "LoggingConfig",
    "OUTPUT_FORMATS",
    "load_config",
]
