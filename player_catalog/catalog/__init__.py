"""
Catalog Module
Read side: filtered, paginated player queries
"""

from .query_engine import PlayerQueryEngine

__all__ = ["PlayerQueryEngine"]
