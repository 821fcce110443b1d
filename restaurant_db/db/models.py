"""SQLAlchemy models for restaurants, their menus and menu items."""
from __future__ import annotations

from typing import Any

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    func,
)
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship, synonym, validates

from restaurant_db.core.coercion import coerce_bool, coerce_float, coerce_string
from .session import Base


class RecordMixin:
    """Shared helpers for every persisted record."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def to_dict(self) -> dict[str, Any]:
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}

    def __repr__(self) -> str:
        label = getattr(self, "name", None)
        return f"<{type(self).__name__} id={self.id} name={label!r}>"


class Restaurant(RecordMixin, Base):
    __tablename__ = "restaurants"

    name = Column(String(255), nullable=True)
    location = Column(String(255), nullable=True)
    cuisine = Column(String(255), nullable=True)

    menus = relationship("Menu", back_populates="restaurant", order_by="Menu.id", passive_deletes=True)

    @validates("name", "location", "cuisine")
    def _coerce_strings(self, key, value):
        return coerce_string("Restaurant", key, value)


class Menu(RecordMixin, Base):
    __tablename__ = "menus"

    name = Column(String(255), nullable=True)
    # Older fixtures call the display label "title".
    title = synonym("name")
    restaurant_id = Column(Integer, ForeignKey("restaurants.id", ondelete="SET NULL"), nullable=True, index=True)

    restaurant = relationship("Restaurant", back_populates="menus")
    item_links = relationship(
        "MenuItem",
        back_populates="menu",
        order_by="MenuItem.id",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )
    items = association_proxy("item_links", "item", creator=lambda item: MenuItem(item=item))

    @validates("name")
    def _coerce_name(self, key, value):
        return coerce_string("Menu", key, value)


class Item(RecordMixin, Base):
    __tablename__ = "items"

    name = Column(String(255), nullable=True)
    image = Column(String(1024), nullable=True)
    price = Column(Float, nullable=True)
    vegetarian = Column(Boolean, nullable=True)

    menu_links = relationship(
        "MenuItem",
        back_populates="item",
        order_by="MenuItem.id",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )
    menus = association_proxy("menu_links", "menu", creator=lambda menu: MenuItem(menu=menu))

    @validates("name", "image")
    def _coerce_strings(self, key, value):
        return coerce_string("Item", key, value)

    @validates("price")
    def _coerce_price(self, key, value):
        return coerce_float("Item", key, value)

    @validates("vegetarian")
    def _coerce_vegetarian(self, key, value):
        return coerce_bool("Item", key, value)


class MenuItem(Base):
    """Join row linking a menu to one of its items; ``id`` keeps insertion order."""

    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    menu_id = Column(Integer, ForeignKey("menus.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    menu = relationship("Menu", back_populates="item_links")
    item = relationship("Item", back_populates="menu_links")

    def __repr__(self) -> str:
        return f"<MenuItem menu_id={self.menu_id} item_id={self.item_id}>"
