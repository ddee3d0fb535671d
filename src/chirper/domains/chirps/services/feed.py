# src/chirper/domains/chirps/services/feed.py
"""
Chirp feed projection.

Pairs each chirp with its author's display name for the index page and the
JSON list endpoint.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ....core.models import Chirp, User
from ..constants import UNKNOWN_AUTHOR


@dataclass(frozen=True)
class ChirpFeedItem:
    """One row of the chirp feed as seen by a particular viewer."""
    chirp: Chirp
    author_id: int
    author_name: str
    is_own: bool

    @property
    def edited(self) -> bool:
        return self.chirp.edited

    def to_dict(self) -> Dict[str, Any]:
        data = self.chirp.to_dict()
        data["user"] = {"id": self.author_id, "name": self.author_name}
        data["is_own"] = self.is_own
        return data


def sort_newest_first(chirps: Iterable[Chirp]) -> List[Chirp]:
    """Descending by creation time, then by id."""
    return sorted(
        chirps,
        key=lambda c: (c.created_at.timestamp() if c.created_at else 0.0, c.id),
        reverse=True,
    )


def build_feed(
    chirps: Iterable[Chirp],
    authors: Iterable[User],
    viewer_id: Optional[int] = None,
) -> List[ChirpFeedItem]:
    """Project chirps into feed items, newest first."""
    names = {user.id: user.name for user in authors}
    return [
        ChirpFeedItem(
            chirp=chirp,
            author_id=chirp.user_id,
            author_name=names.get(chirp.user_id, UNKNOWN_AUTHOR),
            is_own=viewer_id is not None and chirp.user_id == viewer_id,
        )
        for chirp in sort_newest_first(chirps)
    ]
