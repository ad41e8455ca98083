"""
Domain models for validated player data using Pydantic.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from player_catalog.common.constants import UpdateStatus

Number = Union[int, float]


class Player(BaseModel):
    """A football player as stored in the catalog.

    Attribute names are snake_case; the stored document and the provider
    payload use camelCase (``dateOfBirth``, ``clubId``, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    position: Optional[str] = None
    date_of_birth: Optional[str] = None
    age: Optional[int] = None
    nationality: list[str] = Field(default_factory=list)
    height: Optional[Number] = None
    foot: Optional[str] = None
    joined_on: Optional[str] = None
    signed_from: Optional[str] = None
    contract: Optional[str] = None
    market_value: Optional[Number] = None
    status: Optional[str] = None
    club_id: Optional[str] = None
    is_active: Optional[bool] = None
    update_status: UpdateStatus = UpdateStatus.UPDATED

    @field_validator("id", "club_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, v: Any) -> Any:
        # Provider ids arrive as strings, older dumps carry ints
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("nationality", mode="before")
    @classmethod
    def _coerce_nationality(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    def to_document(self) -> dict[str, Any]:
        """Serialize to the camelCase document stored in the catalog."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Player":
        return cls.model_validate(document)
