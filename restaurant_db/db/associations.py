"""Declared associations between models and how to load them.

Every association a caller can ``include`` or fetch through
``get_related`` is listed in ``ASSOCIATIONS``. Anything else is rejected
with ``ConfigurationError`` instead of being inferred from the mapper.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from restaurant_db.core.errors import ConfigurationError
from .models import Item, Menu, MenuItem, Restaurant

ONE_TO_MANY = "one_to_many"
MANY_TO_ONE = "many_to_one"
MANY_TO_MANY = "many_to_many"


@dataclass(frozen=True)
class Association:
    name: str
    kind: str
    target: type
    loader: Callable[[], Any]
    query: Callable[[int], Select]
    # column on the target (one-to-many) or on the join row (many-to-many)
    # that points back at the owning record
    foreign_key: str
    # join-row column pointing at the target (many-to-many only)
    target_key: str | None = None

    @property
    def many(self) -> bool:
        return self.kind in (ONE_TO_MANY, MANY_TO_MANY)


def _restaurant_menus(restaurant_id: int) -> Select:
    return select(Menu).where(Menu.restaurant_id == restaurant_id).order_by(Menu.id)


def _menu_restaurant(menu_id: int) -> Select:
    return select(Restaurant).join(Menu, Menu.restaurant_id == Restaurant.id).where(Menu.id == menu_id)


def _menu_items(menu_id: int) -> Select:
    return (
        select(Item)
        .join(MenuItem, MenuItem.item_id == Item.id)
        .where(MenuItem.menu_id == menu_id)
        .order_by(MenuItem.id)
    )


def _item_menus(item_id: int) -> Select:
    return (
        select(Menu)
        .join(MenuItem, MenuItem.menu_id == Menu.id)
        .where(MenuItem.item_id == item_id)
        .order_by(MenuItem.id)
    )


ASSOCIATIONS: dict[type, dict[str, Association]] = {
    Restaurant: {
        "menus": Association(
            name="menus",
            kind=ONE_TO_MANY,
            target=Menu,
            loader=lambda: selectinload(Restaurant.menus),
            query=_restaurant_menus,
            foreign_key="restaurant_id",
        ),
    },
    Menu: {
        "restaurant": Association(
            name="restaurant",
            kind=MANY_TO_ONE,
            target=Restaurant,
            loader=lambda: selectinload(Menu.restaurant),
            query=_menu_restaurant,
            foreign_key="restaurant_id",
        ),
        "items": Association(
            name="items",
            kind=MANY_TO_MANY,
            target=Item,
            loader=lambda: selectinload(Menu.item_links).selectinload(MenuItem.item),
            query=_menu_items,
            foreign_key="menu_id",
            target_key="item_id",
        ),
    },
    Item: {
        "menus": Association(
            name="menus",
            kind=MANY_TO_MANY,
            target=Menu,
            loader=lambda: selectinload(Item.menu_links).selectinload(MenuItem.menu),
            query=_item_menus,
            foreign_key="item_id",
            target_key="menu_id",
        ),
    },
}


def get_association(model: type, name: str) -> Association:
    declared = ASSOCIATIONS.get(model, {})
    association = declared.get(name)
    if association is None:
        known = ", ".join(sorted(declared)) or "none"
        raise ConfigurationError(f"{model.__name__} has no association {name!r} (declared: {known})")
    return association


def eager_options(model: type, include: Iterable[str] | str | None) -> list[Any]:
    """Loader options that fetch each named association alongside the root rows."""
    if not include:
        return []
    if isinstance(include, str):
        include = [include]
    return [get_association(model, name).loader() for name in include]
