from __future__ import annotations

from enum import Enum


class UpdateStatus(str, Enum):
    """Trust status of a stored player document."""

    UPDATED = "UPDATED"
    TO_UPDATE = "TO_UPDATE"


ALL_UPDATE_STATUSES: set[str] = {s.value for s in UpdateStatus}

DEFAULT_PAGE: int = 1
DEFAULT_PAGE_SIZE: int = 10
DEFAULT_UPDATE_STATUS: UpdateStatus = UpdateStatus.UPDATED


def normalize_update_status(value: str | UpdateStatus | None) -> UpdateStatus:
    """
    Normalize a trust status to the enum member.
    ``None`` falls back to DEFAULT_UPDATE_STATUS; unknown values raise ValueError.
    """
    if value is None:
        return DEFAULT_UPDATE_STATUS
    if isinstance(value, UpdateStatus):
        return value
    v = (value or "").strip().upper()
    if v not in ALL_UPDATE_STATUSES:
        allowed = ", ".join(sorted(ALL_UPDATE_STATUSES))
        raise ValueError(f"Unknown update status '{value}'. Allowed: {allowed}")
    return UpdateStatus(v)
