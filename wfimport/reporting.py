"""Plain-text import summaries rendered from Jinja2 templates."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from jinja2 import Environment, FileSystemLoader

from .errors import ImportErrors
from .models import CollectionMap, PostRecord

_TEMPLATES_DIR = Path(__file__).with_name("templates")

ImportResult = Union[Sequence[PostRecord], CollectionMap, None]


def render_summary(
    source: str,
    result: ImportResult,
    errors: Optional[ImportErrors] = None,
    *,
    templates_dir: Path | None = None,
) -> str:
    """Summarise an import: post counts per collection and every failure."""
    collections = _collection_counts(result)
    template = _create_env(templates_dir).get_template("summary.j2")
    return (
        template.render(
            source=source,
            total=sum(count for _, count in collections),
            collections=collections,
            failures=list(errors) if errors else [],
        ).strip()
        + "\n"
    )


def _collection_counts(result: ImportResult) -> List[Tuple[str, int]]:
    if result is None:
        return []
    if isinstance(result, dict):
        return [(name, len(posts)) for name, posts in result.items()]
    return [("posts", len(result))]


def _create_env(templates_dir: Path | None) -> Environment:
    directories = [str(templates_dir)] if templates_dir else []
    directories.append(str(_TEMPLATES_DIR))
    return Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )


__all__ = ["render_summary"]
