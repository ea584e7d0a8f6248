"""Tests for wfimport.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from wfimport.config import ArchiveConfig, ConfigError, ImportConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ImportConfig)
    assert config.root == tmp_path.resolve()
    assert config.directory.pattern is None
    assert config.archive == ArchiveConfig()
    assert config.logging.verbose is False
    assert config.logging.quiet is False
    assert config.logging.log_file is None
    assert config.output_format == "json"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".wfimport.yml"
    config_file.write_text(
        """
directory:
  pattern: "\\\\.(md|txt)$"
archive:
  selector: Text
  grouped: true
  collect_errors: "yes"
logging:
  verbose: true
  quiet: true
  log_file: "logs/import.log"
output:
  format: summary
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.directory.pattern == r"\.(md|txt)$"
    assert config.archive.selector == "text"
    assert config.archive.grouped is True
    assert config.archive.collect_errors is True
    assert config.logging.verbose is True
    assert config.logging.quiet is True
    assert config.logging.log_file == tmp_path.resolve() / "logs" / "import.log"
    assert config.output_format == "summary"


def test_load_config_treats_blank_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".wfimport.yml").write_text("\n\n", encoding="utf-8")
    assert load_config(tmp_path).archive.selector == "any"


@pytest.mark.parametrize(
    "content",
    [
        "archive: [unbalanced\n",
        "- just\n- a list\n",
        "archive:\n  selector: markdown\n",
        "output:\n  format: xml\n",
    ],
)
def test_load_config_rejects_invalid_files(tmp_path: Path, content: str) -> None:
    (tmp_path / ".wfimport.yml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)
