"""Parse posts from text files, directories and zip archives.

Files and directories yield flat lists of posts. Zip archives yield either a
flat list or a mapping of collection name to posts, where top-level entries
are collected under the ``"drafts"`` key.
"""

from .archive import ArchiveEntry, from_zip, from_zip_dirs
from .classifier import classify, detect_content_type
from .directory import from_directory, from_directory_match
from .errors import (
    ArchiveOpenError,
    EmptyContentError,
    EmptyDirectoryError,
    ImportErrorEntry,
    ImportErrorGroup,
    ImportErrors,
    ImportFailure,
    InvalidPatternError,
    IOFailure,
    NotTextError,
)
from .filenames import filename_parts
from .models import DRAFTS_KEY, CollectionMap, PostRecord, RawSource
from .parser import from_bytes, from_file, from_zip_entry, parse_source
from .selectors import (
    AnyFileSelector,
    FunctionSelector,
    Selector,
    TextFileSelector,
    TopLevelSelector,
    get_selector,
)
from .titles import extract_title

__all__ = [
    "AnyFileSelector",
    "ArchiveEntry",
    "ArchiveOpenError",
    "CollectionMap",
    "DRAFTS_KEY",
    "EmptyContentError",
    "EmptyDirectoryError",
    "FunctionSelector",
    "IOFailure",
    "ImportErrorEntry",
    "ImportErrorGroup",
    "ImportErrors",
    "ImportFailure",
    "InvalidPatternError",
    "NotTextError",
    "PostRecord",
    "RawSource",
    "Selector",
    "TextFileSelector",
    "TopLevelSelector",
    "classify",
    "detect_content_type",
    "extract_title",
    "filename_parts",
    "from_bytes",
    "from_directory",
    "from_directory_match",
    "from_file",
    "from_zip",
    "from_zip_dirs",
    "from_zip_entry",
    "get_selector",
    "parse_source",
]
