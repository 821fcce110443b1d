"""Static fixture records used to populate a fresh store."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from restaurant_db.app_factory import Repositories

logger = logging.getLogger(__name__)

SEED_RESTAURANTS = [
    {"name": "AppleBees", "location": "Texas", "cuisine": "FastFood"},
    {"name": "LittleSheep", "location": "Dallas", "cuisine": "Hotpot"},
    {"name": "Spice Grill", "location": "Houston", "cuisine": "Indian"},
]

SEED_MENUS = [
    {"title": "Breakfast"},
    {"title": "Lunch"},
    {"title": "Dinner"},
]

SEED_ITEMS = [
    {"name": "bhindi masala", "image": "someimage.jpg", "price": 9.50, "vegetarian": True},
    {"name": "egusi soup", "image": "someimage.jpg", "price": 10.50, "vegetarian": False},
    {"name": "hamburger", "image": "someimage.jpg", "price": 6.50, "vegetarian": False},
]


def seed(repos: "Repositories") -> dict[str, int]:
    """Bulk-create every seed table and return how many rows each received."""
    counts = {
        "restaurants": len(repos.restaurants.bulk_create(SEED_RESTAURANTS)),
        "menus": len(repos.menus.bulk_create(SEED_MENUS)),
        "items": len(repos.items.bulk_create(SEED_ITEMS)),
    }
    logger.info("Seeded %s", counts)
    return counts
