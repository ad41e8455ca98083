"""
Domain Module
Player entity, filter and pagination value objects, shared contracts
"""

from .contracts import MergeGuard, MergeResult, PlayerPage, UpsertOperation
from .filter import Between, BirthYearRange, Equals, Filter
from .models import Player
from .pagination import Pagination

__all__ = [
    "Player",
    "Filter",
    "BirthYearRange",
    "Equals",
    "Between",
    "Pagination",
    "PlayerPage",
    "MergeGuard",
    "MergeResult",
    "UpsertOperation",
]
