"""Composition root: one store plus the repositories that share it."""
from __future__ import annotations

from dataclasses import dataclass, field

from restaurant_db.core.config import Settings
from restaurant_db.db.session import Store
from restaurant_db.repositories.sql_repository import ItemRepository, MenuRepository, RestaurantRepository


@dataclass
class Repositories:
    store: Store
    restaurants: RestaurantRepository
    menus: MenuRepository
    items: ItemRepository
    owns_store: bool = field(default=True, repr=False)

    def close(self) -> None:
        if self.owns_store:
            self.store.close()

    def __enter__(self) -> "Repositories":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_repositories(settings: Settings | None = None, store: Store | None = None) -> Repositories:
    """Build repositories over ``store``, opening one from settings when omitted."""
    owns_store = store is None
    if store is None:
        store = Store.from_settings(settings)
    return Repositories(
        store=store,
        restaurants=RestaurantRepository(store),
        menus=MenuRepository(store),
        items=ItemRepository(store),
        owns_store=owns_store,
    )


__all__ = ["Repositories", "create_repositories"]
