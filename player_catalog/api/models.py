"""
API Models
Pydantic Models für API Requests und Responses
"""

from datetime import datetime
from typing import Any, Optional, List, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from player_catalog.common.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from player_catalog.domain.contracts import MergeResult, PlayerPage
from player_catalog.domain.filter import BirthYearRange, Filter
from player_catalog.domain.models import Player
from player_catalog.domain.pagination import Pagination

BIRTH_YEAR_RANGE_REGEX = r"^\d{4}-\d{4}$"


def parse_is_active(value: Optional[str]) -> Optional[bool]:
    """'true' / 'false' als Boolean, alles andere gilt als nicht gesetzt"""
    if value == "true":
        return True
    if value == "false":
        return False
    return None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GetPlayersParams(_CamelModel):
    """Query-Parameter von GET /players"""

    position: Optional[str] = None
    birth_year_range: Optional[str] = Field(default=None, pattern=BIRTH_YEAR_RANGE_REGEX)
    is_active: Optional[bool] = None
    club_id: Optional[str] = None
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    def to_filter(self) -> Filter:
        return Filter(
            position=self.position,
            is_active=self.is_active,
            club_id=self.club_id,
            birth_year_range=(
                BirthYearRange.from_string(self.birth_year_range)
                if self.birth_year_range
                else None
            ),
        )

    def to_pagination(self) -> Pagination:
        return Pagination(page=self.page, page_size=self.page_size)


class PlayerDto(_CamelModel):
    """Spieler wie er über die API ausgeliefert wird (ohne Trust-Status)"""

    id: str
    name: Optional[str] = None
    position: Optional[str] = None
    date_of_birth: Optional[str] = None
    age: Optional[int] = None
    nationality: List[str] = Field(default_factory=list)
    height: Optional[Union[int, float]] = None
    foot: Optional[str] = None
    joined_on: Optional[str] = None
    signed_from: Optional[str] = None
    contract: Optional[str] = None
    market_value: Optional[Union[int, float]] = None
    status: Optional[str] = None
    is_active: Optional[bool] = None
    club_id: Optional[str] = None

    @classmethod
    def from_player(cls, player: Player) -> "PlayerDto":
        return cls.model_validate(player.model_dump(exclude={"update_status"}))


class GetPlayersResponse(_CamelModel):
    players: List[PlayerDto]
    page: int
    page_size: int
    total_count: int

    @classmethod
    def from_page(cls, result: PlayerPage) -> "GetPlayersResponse":
        return cls(
            players=[PlayerDto.from_player(p) for p in result.records],
            page=result.page,
            page_size=int(result.page_size),
            total_count=result.total_count,
        )


class SyncRequest(_CamelModel):
    """Request body von POST /players/sync"""

    club_id: str = Field(..., min_length=1)
    overwrite: bool = False


class SyncResponse(_CamelModel):
    success: bool = True
    inserted_players: Optional[int] = None
    modified_players: Optional[int] = None

    @classmethod
    def from_result(cls, result: MergeResult) -> "SyncResponse":
        return cls.model_validate(result.to_response())


class HealthResponse(BaseModel):
    """Health check response model"""

    status: str
    timestamp: datetime
    database: Optional[Any] = None
