"""
Filter value objects for player catalog reads.

A Filter compiles to an ordered list of predicate clauses that are combined
with logical AND by the storage layer. Absent fields contribute no clause.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from player_catalog.common.constants import (
    DEFAULT_UPDATE_STATUS,
    UpdateStatus,
    normalize_update_status,
)

BIRTH_YEAR_RANGE_PATTERN = re.compile(r"^(\d{4})-(\d{4})$")


@dataclass(frozen=True)
class Equals:
    """``field = value``"""

    field: str
    value: Any


@dataclass(frozen=True)
class Between:
    """Inclusive range on a string-ordered field; either bound may be None."""

    field: str
    gte: Optional[str] = None
    lte: Optional[str] = None


Clause = Union[Equals, Between]


def _valid_year(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


@dataclass(frozen=True)
class BirthYearRange:
    start: Optional[int] = None
    end: Optional[int] = None

    @classmethod
    def from_string(cls, value: str) -> "BirthYearRange":
        """Parse the ``YYYY-YYYY`` transport format (e.g. ``1992-2000``)."""
        match = BIRTH_YEAR_RANGE_PATTERN.match((value or "").strip())
        if not match:
            raise ValueError(
                f"birthYearRange must be in the format YYYY-YYYY (e.g., 1992-2000), got '{value}'"
            )
        return cls(start=int(match.group(1)), end=int(match.group(2)))

    def date_bounds(self) -> tuple[Optional[str], Optional[str]]:
        start = _valid_year(self.start)
        end = _valid_year(self.end)
        return (
            f"{start:04d}-01-01" if start else None,
            f"{end:04d}-12-31" if end else None,
        )

    def to_clause(self) -> Optional[Between]:
        gte, lte = self.date_bounds()
        if gte is None and lte is None:
            return None
        return Between("dateOfBirth", gte=gte, lte=lte)


@dataclass(frozen=True)
class Filter:
    position: Optional[str] = None
    is_active: Optional[bool] = None
    club_id: Optional[str] = None
    birth_year_range: Optional[BirthYearRange] = None
    update_status: UpdateStatus = field(default=DEFAULT_UPDATE_STATUS)

    def __post_init__(self):
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "update_status", normalize_update_status(self.update_status))

    def clauses(self) -> list[Clause]:
        """Ordered predicate clauses; the trust status clause is always first."""
        out: list[Clause] = [Equals("updateStatus", self.update_status.value)]
        if self.position is not None:
            out.append(Equals("position", self.position))
        if self.is_active is not None:
            out.append(Equals("isActive", self.is_active))
        if self.club_id is not None:
            out.append(Equals("clubId", self.club_id))
        if self.birth_year_range is not None:
            date_clause = self.birth_year_range.to_clause()
            if date_clause is not None:
                out.append(date_clause)
        return out

    def to_predicate(self) -> dict[str, Any]:
        """Plain mapping view of clauses(), used for logging and assertions."""
        predicate: dict[str, Any] = {}
        for clause in self.clauses():
            if isinstance(clause, Equals):
                predicate[clause.field] = clause.value
            else:
                bounds = {}
                if clause.gte is not None:
                    bounds["gte"] = clause.gte
                if clause.lte is not None:
                    bounds["lte"] = clause.lte
                predicate[clause.field] = bounds
        return predicate
