"""
Player Query Engine

Turns a Filter and a Pagination into a single count-and-page storage call.
Storage errors propagate to the caller unchanged.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from player_catalog.common.constants import DEFAULT_PAGE_SIZE
from player_catalog.database.services.players import PlayerRepository
from player_catalog.domain.contracts import PlayerPage
from player_catalog.domain.filter import Filter
from player_catalog.domain.models import Player
from player_catalog.domain.pagination import Pagination


class PlayerQueryEngine:
    """Read side of the catalog"""

    def __init__(
        self,
        repository: PlayerRepository,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        metrics=None,
    ):
        self.repository = repository
        self.default_page_size = default_page_size if default_page_size > 0 else DEFAULT_PAGE_SIZE
        self.metrics = metrics
        self.logger = logging.getLogger("player_query_engine")

    async def query(
        self, filter: Optional[Filter] = None, pagination: Optional[Pagination] = None
    ) -> PlayerPage:
        filter = filter or Filter()
        pagination = pagination or Pagination()

        page = pagination.get_page()
        page_size = pagination.get_page_size(self.default_page_size)
        skip = pagination.skip(self.default_page_size)
        limit = pagination.limit(self.default_page_size)

        self.logger.debug(
            f"Querying players predicate={filter.to_predicate()} skip={skip} limit={limit}"
        )
        start = time.perf_counter()
        total_count, documents = await self.repository.count_and_page(
            filter.clauses(), skip, limit
        )
        if self.metrics is not None:
            self.metrics.record_query(time.perf_counter() - start)

        return PlayerPage(
            records=[Player.from_document(doc) for doc in documents],
            page=page,
            page_size=page_size,
            total_count=total_count,
        )
