from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

from player_catalog.common.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE

PageSize = Union[int, float]


@dataclass(frozen=True)
class Pagination:
    """1-based page plus page size; ``math.inf`` as page size means unbounded."""

    page: Optional[int] = None
    page_size: Optional[PageSize] = None

    def get_page(self) -> int:
        if self.page is None or self.page <= 0:
            return DEFAULT_PAGE
        return int(self.page)

    def get_page_size(self, default: int = DEFAULT_PAGE_SIZE) -> PageSize:
        if self.page_size is None or self.page_size <= 0:
            return default
        if math.isinf(self.page_size):
            return math.inf
        return int(self.page_size)

    def is_unbounded(self, default: int = DEFAULT_PAGE_SIZE) -> bool:
        return math.isinf(self.get_page_size(default))

    def skip(self, default: int = DEFAULT_PAGE_SIZE) -> int:
        """Rows to skip before the page.

        An unbounded page size has no finite offset for pages after the first;
        those reach storage as ``skip=0, limit=0`` (see ``limit``), which yields
        the same empty page with the full total count.
        """
        if self.is_unbounded(default):
            return 0
        return (self.get_page() - 1) * int(self.get_page_size(default))

    def limit(self, default: int = DEFAULT_PAGE_SIZE) -> Optional[int]:
        """Row limit for the page; None means no upper limit.

        With an unbounded page size the first page holds every record, so any
        later page starts past the end and is empty (limit 0).
        """
        if self.is_unbounded(default):
            return None if self.get_page() == 1 else 0
        return int(self.get_page_size(default))
