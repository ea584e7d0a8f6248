"""Core data models shared across wfimport components."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

DRAFTS_KEY = "drafts"


@dataclass
class RawSource:
    """Bytes read from a file or archive entry, with where they came from."""

    content: bytes
    origin: str
    modified: Optional[datetime] = None


@dataclass
class PostRecord:
    """A parsed post, shaped after the publishing API's post parameters."""

    title: str
    body: str
    created: Optional[datetime] = None
    slug: str = ""
    collection: str = ""
    id: str = ""
    source: str = ""

    def to_params(self) -> Dict[str, Any]:
        """Return the JSON body the publishing API expects for this post."""
        params: Dict[str, Any] = {"slug": self.slug, "body": self.body}
        if self.title:
            params["title"] = self.title
        if self.created is not None:
            params["created"] = _isoformat(self.created)
        return params

    def to_dict(self) -> Dict[str, Any]:
        """Return every field, with ``created`` as an ISO-8601 string.

        Posts read from files carry a UTC timestamp and serialise with a ``Z``
        suffix. Zip entries store local time without a zone, so posts read from
        archives serialise without an offset.
        """
        payload = asdict(self)
        payload["created"] = _isoformat(self.created) if self.created else None
        return payload


CollectionMap = Dict[str, List[PostRecord]]


def _isoformat(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")
