"""Tests for wfimport.archive."""

from __future__ import annotations

import zipfile
from datetime import datetime
from pathlib import Path

import pytest

from tests._fixtures.builders import FLAT_FILES, ArchiveBuilder, corrupt_entry
from wfimport.archive import ArchiveEntry, from_zip, from_zip_dirs
from wfimport.errors import ArchiveOpenError, ImportErrors, IOFailure, NotTextError
from wfimport.models import DRAFTS_KEY, PostRecord
from wfimport.selectors import TextFileSelector, TopLevelSelector

_JPEG = b"\xff\xd8\xff\xe0\x00\x10JFIF"


def test_from_zip_reads_every_file(flat_archive: Path) -> None:
    posts = from_zip(flat_archive)

    assert posts is not None
    assert len(posts) == len(FLAT_FILES)
    assert [post.source for post in posts] == [name for name, _ in FLAT_FILES]

    books = posts[1]
    assert books.title == "Title of post"
    assert books.body == "text body of post."
    assert books.id == "books.md"
    assert books.created == datetime(2019, 5, 4, 12, 30, 0)


def test_from_zip_decomposes_entry_names(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("rob/ubuntu-next_839ruu389ru9.txt", "Ubuntu next")])

    (post,) = from_zip(archive) or []

    assert (post.id, post.slug, post.collection) == ("839ruu389ru9", "ubuntu-next", "rob")


def test_from_zip_with_text_selector(flat_archive: Path) -> None:
    posts = from_zip(flat_archive, TextFileSelector())

    assert posts is not None
    assert [post.id for post in posts] == ["post", "secret"]


def test_from_zip_default_selector_reads_nested_entries(nested_archive: Path) -> None:
    posts = from_zip(nested_archive)
    assert posts is not None
    assert len(posts) == 6


def test_from_zip_top_level_selector_ignores_nested_entries(nested_archive: Path) -> None:
    posts = from_zip(nested_archive, TopLevelSelector())
    assert posts is not None
    assert len(posts) == 3


def test_from_zip_skips_empty_entries_and_directories(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("empty.txt", ""), ("blog/", ""), ("blog/ok.txt", "hi")])

    posts = from_zip(archive)

    assert posts is not None
    assert [post.body for post in posts] == ["hi"]


def test_from_zip_returns_none_when_nothing_selected(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("empty.txt", ""), ("other.md", "")])
    assert from_zip(archive) is None


def test_from_zip_aborts_on_first_failure(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("post.txt", "hello"), ("image.jpg", _JPEG), ("after.txt", "x")])

    with pytest.raises(NotTextError):
        from_zip(archive)


def test_from_zip_collects_failures_when_given_accumulator(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("post.txt", "hello"), ("image.jpg", _JPEG), ("after.txt", "x")])
    errors = ImportErrors()

    posts = from_zip(archive, errors=errors)

    assert posts is not None
    assert [post.body for post in posts] == ["hello", "x"]
    assert errors.sources() == ["image.jpg"]
    assert isinstance(errors.causes()[0], NotTextError)


def test_from_zip_accepts_plain_callable_selector(flat_archive: Path) -> None:
    def only_markdown(entry: ArchiveEntry) -> PostRecord | None:
        if not entry.name.endswith(".md"):
            return None
        return PostRecord(title=entry.name, body=entry.read().decode("utf-8"))

    posts = from_zip(flat_archive, only_markdown)

    assert posts is not None
    assert [post.title for post in posts] == ["books.md"]


def test_from_zip_surfaces_selector_errors(flat_archive: Path) -> None:
    def broken(entry: ArchiveEntry) -> PostRecord | None:
        raise ValueError(f"cannot handle {entry.name}")

    with pytest.raises(ValueError, match="post.txt"):
        from_zip(flat_archive, broken)


def test_from_zip_missing_archive_raises_io_failure(tmp_path: Path) -> None:
    with pytest.raises(IOFailure) as excinfo:
        from_zip(tmp_path / "missing.zip")
    assert not isinstance(excinfo.value, ArchiveOpenError)


def test_from_zip_corrupt_archive_raises_archive_open_error(tmp_path: Path) -> None:
    corrupt = tmp_path / "corrupt.zip"
    corrupt.write_bytes(b"this is not a zip archive")

    with pytest.raises(ArchiveOpenError):
        from_zip(corrupt)
    with pytest.raises(ArchiveOpenError):
        from_zip_dirs(corrupt)


def _archive_with_corrupt_entry(archive_builder: ArchiveBuilder) -> Path:
    archive = archive_builder.build(
        [("ok.txt", "a healthy post " * 20), ("bad.txt", "a damaged post " * 20)],
        compression=zipfile.ZIP_DEFLATED,
    )
    corrupt_entry(archive, "bad.txt")
    return archive


def test_from_zip_corrupt_entry_raises_io_failure(archive_builder: ArchiveBuilder) -> None:
    archive = _archive_with_corrupt_entry(archive_builder)

    with pytest.raises(IOFailure) as excinfo:
        from_zip(archive)

    assert excinfo.value.path == "bad.txt"
    assert excinfo.value.__cause__ is not None


def test_from_zip_collects_corrupt_entry(archive_builder: ArchiveBuilder) -> None:
    archive = _archive_with_corrupt_entry(archive_builder)
    errors = ImportErrors()

    posts = from_zip(archive, errors=errors)

    assert posts is not None
    assert [post.source for post in posts] == ["ok.txt"]
    assert errors.sources() == ["bad.txt"]
    assert isinstance(errors.causes()[0], IOFailure)


def test_from_zip_dirs_corrupt_entry_raises_io_failure(archive_builder: ArchiveBuilder) -> None:
    with pytest.raises(IOFailure):
        from_zip_dirs(_archive_with_corrupt_entry(archive_builder))


def test_from_zip_dirs_groups_by_directory(nested_archive: Path) -> None:
    collections = from_zip_dirs(nested_archive)

    assert list(collections) == [DRAFTS_KEY, "blog", "notes"]
    assert len(collections[DRAFTS_KEY]) == 3
    assert len(collections["blog"]) == 2
    assert len(collections["notes"]) == 1
    assert [post.collection for post in collections["blog"]] == ["blog", "blog"]


def test_from_zip_dirs_always_has_drafts(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("blog/post1.txt", "some file stuff")])

    collections = from_zip_dirs(archive)

    assert collections[DRAFTS_KEY] == []
    assert len(collections["blog"]) == 1


def test_from_zip_dirs_uses_innermost_directory(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("site/blog/post.txt", "nested deeply")])

    collections = from_zip_dirs(archive)

    assert set(collections) == {DRAFTS_KEY, "blog"}
    assert collections["blog"][0].body == "nested deeply"


def test_from_zip_dirs_keeps_collection_with_only_skipped_entries(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("notes/empty.txt", ""), ("post.txt", "hello")])

    collections = from_zip_dirs(archive)

    assert collections == {DRAFTS_KEY: collections[DRAFTS_KEY], "notes": []}
    assert len(collections[DRAFTS_KEY]) == 1


def test_from_zip_dirs_aborts_on_failure(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("blog/image.jpg", _JPEG), ("post.txt", "hello")])

    with pytest.raises(NotTextError):
        from_zip_dirs(archive)


def test_from_zip_dirs_collects_failures_when_given_accumulator(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("blog/image.jpg", _JPEG), ("blog/post.txt", "hello")])
    errors = ImportErrors()

    collections = from_zip_dirs(archive, errors=errors)

    assert [post.body for post in collections["blog"]] == ["hello"]
    assert errors.sources() == ["blog/image.jpg"]


def test_from_zip_dirs_with_text_selector(nested_archive: Path) -> None:
    collections = from_zip_dirs(nested_archive, TextFileSelector())

    assert len(collections[DRAFTS_KEY]) == 2
    assert len(collections["blog"]) == 1
    assert len(collections["notes"]) == 1


def test_walks_are_repeatable(nested_archive: Path) -> None:
    assert from_zip(nested_archive) == from_zip(nested_archive)
    assert from_zip_dirs(nested_archive) == from_zip_dirs(nested_archive)


def test_archive_entry_properties(archive_builder: ArchiveBuilder) -> None:
    archive = archive_builder.build([("a/b/c.txt", "x"), ("top.txt", "y"), ("dir/", "")])

    with zipfile.ZipFile(archive) as handle:
        nested, top, directory = (ArchiveEntry(handle, info) for info in handle.infolist())

        assert (nested.directory, nested.depth, nested.collection) == ("a/b", 2, "b")
        assert (top.directory, top.depth, top.collection) == ("", 0, DRAFTS_KEY)
        assert directory.is_dir
        assert directory.collection == "dir"
        assert nested.read() == b"x"
        assert nested.size == 1
