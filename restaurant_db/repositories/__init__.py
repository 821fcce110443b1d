"""
Persistence adapters.

Callers should go through these repositories rather than opening sessions
on the store themselves.
"""

from .sql_repository import EntityRepository, ItemRepository, MenuRepository, RestaurantRepository

__all__ = ["EntityRepository", "ItemRepository", "MenuRepository", "RestaurantRepository"]
