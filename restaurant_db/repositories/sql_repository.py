"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy import delete, func, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value

from restaurant_db.core.errors import ConfigurationError, ReferenceViolationError, ValidationError
from restaurant_db.db.associations import MANY_TO_MANY, MANY_TO_ONE, ONE_TO_MANY, eager_options, get_association
from restaurant_db.db.models import Item, Menu, MenuItem, Restaurant
from restaurant_db.db.session import Base, Store

logger = logging.getLogger(__name__)

Include = Iterable[str] | str | None


class EntityRepository:
    """CRUD and association helpers for one model, wrapping a store's sessions.

    Records are returned detached from their session: column attributes are
    loaded, relationships only when requested through ``include``.
    """

    def __init__(self, store: Store, model: type) -> None:
        self.store = store
        self.model = model
        mapper = inspect(model)
        self._attributes = set(mapper.column_attrs.keys()) | set(mapper.synonyms.keys())

    # -------------------------- helpers --------------------------
    def _check_where(self, where: Mapping[str, Any] | None) -> dict[str, Any]:
        where = dict(where or {})
        unknown = sorted(set(where) - self._attributes)
        if unknown:
            raise ConfigurationError(f"{self.model.__name__} has no attribute(s) {', '.join(unknown)}")
        return where

    def _check_writable(self, attributes: Mapping[str, Any]) -> None:
        unknown = sorted(set(attributes) - self._attributes)
        if unknown:
            raise ValidationError(
                f"{self.model.__name__} has no attribute(s) {', '.join(unknown)}",
                model=self.model.__name__,
                field=unknown[0],
            )
        for field in ("id", "created_at", "updated_at"):
            if field in attributes:
                raise ValidationError(
                    f"{self.model.__name__}.{field} is assigned by the store",
                    model=self.model.__name__,
                    field=field,
                )

    def _check_record(self, record) -> None:
        if not isinstance(record, self.model):
            raise ValidationError(
                f"expected a {self.model.__name__} record, got {type(record).__name__}",
                model=self.model.__name__,
            )

    def _build(self, attributes: Mapping[str, Any]):
        self._check_writable(attributes)
        return self.model(**attributes)

    def _commit(self, session: Session) -> None:
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            message = str(exc.orig)
            if "foreign key" in message.lower():
                raise ReferenceViolationError(
                    f"{self.model.__name__} references a record that does not exist: {message}"
                ) from exc
            raise ValidationError(message, model=self.model.__name__) from exc

    # -------------------------- writes --------------------------
    def create(self, attributes: Mapping[str, Any]):
        entity = self._build(attributes)
        with self.store.session() as session:
            session.add(entity)
            self._commit(session)
            session.refresh(entity)
            logger.debug("Created %r", entity)
            return entity

    def bulk_create(self, rows: Iterable[Mapping[str, Any]]) -> list:
        entities = [self._build(row) for row in rows]
        with self.store.session() as session:
            session.add_all(entities)
            self._commit(session)
            for entity in entities:
                session.refresh(entity)
        logger.info("Bulk created %d %s record(s)", len(entities), self.model.__name__)
        return entities

    def update(self, record, attributes: Mapping[str, Any]):
        """Merge ``attributes`` into the stored record; other fields keep their values."""
        self._check_record(record)
        self._check_writable(attributes)
        with self.store.session() as session:
            entity = session.get(self.model, record.id)
            if entity is None:
                return None
            for key, value in attributes.items():
                setattr(entity, key, value)
            self._commit(session)
            session.refresh(entity)
        for column in self.model.__table__.columns:
            set_committed_value(record, column.key, getattr(entity, column.key))
        return entity

    def destroy(self, record) -> None:
        self._check_record(record)
        with self.store.session() as session:
            session.execute(delete(self.model).where(self.model.id == record.id))
            session.commit()
        logger.debug("Destroyed %s id=%s", self.model.__name__, record.id)

    # -------------------------- reads --------------------------
    def find_by_key(self, key: int, include: Include = None):
        options = eager_options(self.model, include)
        with self.store.session() as session:
            if not options:
                return session.get(self.model, key)
            stmt = select(self.model).where(self.model.id == key).options(*options)
            return session.execute(stmt).scalars().first()

    def find_one(self, where: Mapping[str, Any] | None = None, include: Include = None):
        """First record (by key) matching the equality filter, or None."""
        options = eager_options(self.model, include)
        stmt = (
            select(self.model)
            .filter_by(**self._check_where(where))
            .options(*options)
            .order_by(self.model.id)
            .limit(1)
        )
        with self.store.session() as session:
            return session.execute(stmt).scalars().first()

    def find_all(self, where: Mapping[str, Any] | None = None, include: Include = None) -> list:
        options = eager_options(self.model, include)
        stmt = select(self.model).filter_by(**self._check_where(where)).options(*options).order_by(self.model.id)
        with self.store.session() as session:
            return list(session.execute(stmt).scalars().all())

    def count(self, where: Mapping[str, Any] | None = None) -> int:
        stmt = select(func.count()).select_from(self.model).filter_by(**self._check_where(where))
        with self.store.session() as session:
            return int(session.execute(stmt).scalar_one())

    # -------------------------- associations --------------------------
    def add_related(self, record, association: str, related) -> None:
        """Link ``related`` (one record or an iterable of records) to ``record``.

        Many-to-many links are stored as join rows in the order given. If the
        owner or any related record is missing nothing is written.
        """
        self._check_record(record)
        assoc = get_association(self.model, association)
        if isinstance(related, Base):
            others = [related]
        else:
            try:
                others = list(related)
            except TypeError:
                raise ValidationError(
                    f"{self.model.__name__}.{association} expects a record or an iterable of records",
                    model=self.model.__name__,
                    field=association,
                ) from None
        if assoc.kind == MANY_TO_ONE and len(others) != 1:
            raise ValidationError(
                f"{self.model.__name__}.{association} takes exactly one record",
                model=self.model.__name__,
                field=association,
            )
        for other in others:
            if not isinstance(other, assoc.target):
                raise ValidationError(
                    f"{self.model.__name__}.{association} expects {assoc.target.__name__} records, "
                    f"got {type(other).__name__}",
                    model=self.model.__name__,
                    field=association,
                )

        with self.store.session() as session:
            owner = session.get(self.model, record.id) if record.id is not None else None
            if owner is None:
                raise ReferenceViolationError(f"{self.model.__name__} id={record.id} does not exist")
            for other in others:
                if other.id is None or session.get(assoc.target, other.id) is None:
                    raise ReferenceViolationError(f"{assoc.target.__name__} id={other.id} does not exist")

            if assoc.kind == MANY_TO_MANY:
                session.add_all(
                    MenuItem(**{assoc.foreign_key: owner.id, assoc.target_key: other.id}) for other in others
                )
            elif assoc.kind == ONE_TO_MANY:
                for other in others:
                    setattr(session.get(assoc.target, other.id), assoc.foreign_key, owner.id)
            else:
                setattr(owner, assoc.foreign_key, others[0].id)
            self._commit(session)

        if assoc.kind == ONE_TO_MANY:
            for other in others:
                set_committed_value(other, assoc.foreign_key, record.id)
        elif assoc.kind == MANY_TO_ONE:
            set_committed_value(record, assoc.foreign_key, others[0].id)
        logger.debug("Linked %d %s record(s) to %r via %s", len(others), assoc.target.__name__, record, association)

    def get_related(self, record, association: str):
        """Read an association fresh from the store.

        Collections come back as a list ordered by link insertion; a
        many-to-one association returns the record or None.
        """
        self._check_record(record)
        assoc = get_association(self.model, association)
        with self.store.session() as session:
            result = session.execute(assoc.query(record.id)).scalars()
            if assoc.many:
                return list(result.all())
            return result.first()


class RestaurantRepository(EntityRepository):
    def __init__(self, store: Store) -> None:
        super().__init__(store, Restaurant)

    def add_menus(self, restaurant: Restaurant, menus: Menu | Iterable[Menu]) -> None:
        self.add_related(restaurant, "menus", menus)

    def get_menus(self, restaurant: Restaurant) -> list[Menu]:
        return self.get_related(restaurant, "menus")


class MenuRepository(EntityRepository):
    def __init__(self, store: Store) -> None:
        super().__init__(store, Menu)

    def add_items(self, menu: Menu, items: Item | Iterable[Item]) -> None:
        self.add_related(menu, "items", items)

    def get_items(self, menu: Menu) -> list[Item]:
        return self.get_related(menu, "items")

    def set_restaurant(self, menu: Menu, restaurant: Restaurant) -> None:
        self.add_related(menu, "restaurant", restaurant)

    def get_restaurant(self, menu: Menu) -> Optional[Restaurant]:
        return self.get_related(menu, "restaurant")


class ItemRepository(EntityRepository):
    def __init__(self, store: Store) -> None:
        super().__init__(store, Item)

    def add_menus(self, item: Item, menus: Menu | Iterable[Menu]) -> None:
        self.add_related(item, "menus", menus)

    def get_menus(self, item: Item) -> list[Menu]:
        return self.get_related(item, "menus")
