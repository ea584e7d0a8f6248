from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.builders import FLAT_FILES, NESTED_FILES, ArchiveBuilder, DirectoryBuilder


@pytest.fixture
def archive_builder(tmp_path: Path) -> ArchiveBuilder:
    """Provide a zip archive builder rooted at the pytest tmp_path."""
    return ArchiveBuilder(tmp_path)


@pytest.fixture
def dir_builder(tmp_path: Path) -> DirectoryBuilder:
    """Provide a directory builder for a fresh `posts/` directory."""
    return DirectoryBuilder(tmp_path / "posts")


@pytest.fixture
def flat_archive(archive_builder: ArchiveBuilder) -> Path:
    return archive_builder.build(FLAT_FILES)


@pytest.fixture
def nested_archive(archive_builder: ArchiveBuilder) -> Path:
    return archive_builder.build(NESTED_FILES)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers installed by CLI runs so later tests do not log to closed streams."""
    yield
    logger = logging.getLogger("wfimport")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
