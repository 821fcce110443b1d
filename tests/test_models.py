"""
CRUD tests for restaurants, menus and items against a temporary SQLite database.
"""
from __future__ import annotations

import pytest

from restaurant_db.core.errors import ValidationError
from restaurant_db.seed_data import SEED_ITEMS, SEED_MENUS, SEED_RESTAURANTS


def test_can_create_a_restaurant(seeded):
    created = seeded.restaurants.create(SEED_RESTAURANTS[0])

    found = seeded.restaurants.find_one(where={"id": created.id})

    assert found is not None
    assert found.name == SEED_RESTAURANTS[0]["name"]
    assert found.location == SEED_RESTAURANTS[0]["location"]
    assert found.cuisine == SEED_RESTAURANTS[0]["cuisine"]


def test_can_create_a_menu(seeded):
    created = seeded.menus.create(SEED_MENUS[0])

    found = seeded.menus.find_one(where={"id": created.id})

    assert found is not None
    assert found.title == SEED_MENUS[0]["title"]
    assert found.name == SEED_MENUS[0]["title"]


def test_item_read_back_by_key(repos):
    created = repos.items.create({"name": "Burger", "image": "burger.jpg", "price": 9.99, "vegetarian": False})

    found = repos.items.find_by_key(created.id)

    assert found is not None
    assert found.id == created.id
    assert found.name == "Burger"
    assert found.image == "burger.jpg"
    assert found.price == 9.99
    assert found.vegetarian is False


def test_keys_are_assigned_by_the_store(repos):
    first = repos.restaurants.create({"name": "One"})
    second = repos.restaurants.create({"name": "Two"})

    assert first.id is not None
    assert second.id is not None
    assert first.id != second.id
    with pytest.raises(ValidationError):
        repos.restaurants.create({"id": 50, "name": "Chosen key"})


def test_can_find_restaurants(seeded):
    found = sorted(seeded.restaurants.find_all(), key=lambda r: r.id)

    assert [{"name": r.name, "location": r.location, "cuisine": r.cuisine} for r in found] == SEED_RESTAURANTS


def test_can_find_menus(seeded):
    found = sorted(seeded.menus.find_all(), key=lambda m: m.id)

    assert [{"title": m.title} for m in found] == SEED_MENUS


def test_can_find_items(seeded):
    found = seeded.items.find_all()

    assert [
        {"name": i.name, "image": i.image, "price": i.price, "vegetarian": i.vegetarian} for i in found
    ] == SEED_ITEMS


def test_find_all_filters_by_equality(seeded):
    found = seeded.restaurants.find_all(where={"location": "Dallas"})

    assert [r.name for r in found] == ["LittleSheep"]
    assert seeded.menus.find_one(where={"title": "Lunch"}).name == "Lunch"
    assert seeded.menus.find_one(where={"title": "Supper"}) is None
    assert seeded.restaurants.count() == len(SEED_RESTAURANTS)
    assert seeded.items.count(where={"vegetarian": True}) == 1


def test_can_delete_restaurants(seeded):
    restaurant = seeded.restaurants.find_one(where={"id": 1})

    seeded.restaurants.destroy(restaurant)

    assert seeded.restaurants.find_one(where={"id": 1}) is None
    assert seeded.restaurants.find_by_key(1) is None


def test_can_delete_menus(seeded):
    menu = seeded.menus.find_one(where={"id": 1})

    seeded.menus.destroy(menu)

    assert seeded.menus.find_one(where={"id": 1}) is None


def test_can_delete_items(seeded):
    item = seeded.items.find_by_key(2)

    seeded.items.destroy(item)

    assert seeded.items.find_by_key(2) is None
    assert seeded.items.count() == len(SEED_ITEMS) - 1


def test_partial_update_keeps_other_fields(repos):
    restaurant = repos.restaurants.create({"name": "Noodle Bar", "location": "Austin", "cuisine": "Ramen"})

    updated = repos.restaurants.update(restaurant, {"cuisine": "Udon"})

    assert updated.cuisine == "Udon"
    assert updated.name == "Noodle Bar"
    assert updated.location == "Austin"
    assert restaurant.cuisine == "Udon"
    found = repos.restaurants.find_by_key(restaurant.id)
    assert (found.name, found.location, found.cuisine) == ("Noodle Bar", "Austin", "Udon")


def test_update_menu_through_title(repos):
    menu = repos.menus.create({"name": "Brunch"})

    repos.menus.update(menu, {"title": "Late Brunch"})

    assert repos.menus.find_by_key(menu.id).name == "Late Brunch"


def test_values_are_coerced_to_column_types(repos):
    item = repos.items.create({"name": 42, "price": "7.25", "vegetarian": "true"})

    found = repos.items.find_by_key(item.id)

    assert found.name == "42"
    assert found.price == 7.25
    assert found.vegetarian is True


@pytest.mark.parametrize(
    "attributes",
    [
        {"name": "Salad", "price": "cheap"},
        {"name": "Salad", "price": True},
        {"name": "Gold", "price": 10**400},
        {"name": "Salad", "vegetarian": "maybe"},
        {"name": ["Salad"]},
        {"name": "Salad", "calories": 120},
    ],
)
def test_create_rejects_invalid_attributes(repos, attributes):
    with pytest.raises(ValidationError):
        repos.items.create(attributes)

    assert repos.items.count() == 0


def test_failed_update_writes_nothing(repos):
    item = repos.items.create({"name": "Soup", "price": 4.0, "vegetarian": True})

    with pytest.raises(ValidationError) as excinfo:
        repos.items.update(item, {"name": "Stew", "price": "a lot"})

    assert excinfo.value.field == "price"
    found = repos.items.find_by_key(item.id)
    assert found.name == "Soup"
    assert found.price == 4.0


def test_to_dict_lists_columns(repos):
    item = repos.items.create({"name": "Fries", "image": "fries.png", "price": 3.5, "vegetarian": True})

    data = item.to_dict()

    assert data["id"] == item.id
    assert data["name"] == "Fries"
    assert set(data) == {"id", "name", "image", "price", "vegetarian", "created_at", "updated_at"}
