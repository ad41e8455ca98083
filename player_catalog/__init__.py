"""
Player Catalog
Football player catalog with filtered reads and provider synchronization
"""

__version__ = "1.0.0"
__author__ = "Sports Data Team"

# NOTE:
# Avoid importing configuration or the database layer at package import time so
# that "import player_catalog" stays side-effect free for unit tests that only
# need the domain value objects.

__all__ = []
