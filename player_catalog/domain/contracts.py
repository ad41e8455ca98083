from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from player_catalog.domain.models import Player

# Typed data transfer objects shared across layers


@dataclass
class PlayerPage:
    """One page of query results plus the size of the full matching set."""

    records: List[Player]
    page: int
    page_size: Union[int, float]
    total_count: int

    def to_response(self) -> Dict[str, Any]:
        return {
            "players": [p.to_document() for p in self.records],
            "page": self.page,
            "pageSize": self.page_size,
            "totalCount": self.total_count,
        }


class MergeGuard(str, Enum):
    """Extra write predicate applied to every upsert of one merge batch."""

    NONE = "none"
    EXCLUDE_FLAGGED = "exclude_flagged"

    @classmethod
    def for_overwrite(cls, overwrite: bool) -> "MergeGuard":
        return cls.NONE if overwrite else cls.EXCLUDE_FLAGGED


@dataclass(frozen=True)
class UpsertOperation:
    key: str
    document: Dict[str, Any]
    guard: MergeGuard = MergeGuard.EXCLUDE_FLAGGED


@dataclass
class MergeResult:
    inserted_count: int = 0
    modified_count: int = 0
    club_id: Optional[str] = field(default=None, compare=False)

    def to_response(self) -> Dict[str, Any]:
        """Caller-facing shape; count keys are present only when non-zero."""
        out: Dict[str, Any] = {"success": True}
        if self.inserted_count:
            out["insertedPlayers"] = self.inserted_count
        if self.modified_count:
            out["modifiedPlayers"] = self.modified_count
        return out
