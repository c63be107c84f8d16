"""
Menu API — Demo Menu Seeding
==============================

What:  Loads the five demo dishes through DishService.create_dishes().
How:   Skips seeding when dishes already exist unless --force is given.
       The dishes go through the normal bulk-create path, so they receive
       sequential IDs from the same counter as API-created dishes.

Usage:
    menu-api-seed            # seed an empty database
    menu-api-seed --force    # append the demo dishes regardless
    python -m menu_api.seed
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from menu_api.database import dispose_engine, get_session_factory
from menu_api.exceptions import MenuAPIError
from menu_api.models.dish import Dish
from menu_api.schemas.dish import DishResponse
from menu_api.services.dish_service import dish_service

logger = logging.getLogger(__name__)

DEMO_DISHES: List[Dict[str, Any]] = [
    {
        "name": "Spicy Basil Chicken",
        "price": "14.99",
        "description": "Fresh basil leaves stir-fried with chicken, chili, and garlic.",
        "image": "https://images.unsplash.com/photo-1589302168068-964664d93dc0?auto=format&fit=crop&w=800&q=80",
    },
    {
        "name": "Classic Cheeseburger",
        "price": "11.50",
        "description": "Juicy beef patty topped with cheddar, lettuce, tomato, and house sauce.",
        "image": "https://images.unsplash.com/photo-1568901346375-23c9450c58cd?auto=format&fit=crop&w=800&q=80",
    },
    {
        "name": "Vegan Buddha Bowl",
        "price": "13.00",
        "description": "Quinoa, avocado, roasted chickpeas, kale, and tahini dressing.",
        "image": "https://images.unsplash.com/photo-1512621776951-a57141f2eefd?auto=format&fit=crop&w=800&q=80",
    },
    {
        "name": "Seafood Paella",
        "price": "22.00",
        "description": "Traditional Spanish rice dish with shrimp, mussels, and saffron.",
        "image": "https://images.unsplash.com/photo-1534080564583-6be75777b70a?auto=format&fit=crop&w=800&q=80",
    },
    {
        "name": "Tiramisu",
        "price": "8.50",
        "description": "Classic Italian dessert with layers of coffee-soaked ladyfingers and mascarpone.",
        "image": "https://images.unsplash.com/photo-1571877227200-a0d98ea607e9?auto=format&fit=crop&w=800&q=80",
    },
]


async def seed_demo_dishes(db: AsyncSession, force: bool = False) -> List[DishResponse]:
    """
    Insert DEMO_DISHES unless the table already has rows.

    Returns the created dishes (empty when seeding was skipped). The caller
    owns the transaction.
    """
    if not force:
        result = await db.execute(select(func.count(Dish.id)))
        existing = result.scalar() or 0
        if existing:
            logger.info("Skipping seed: %d dish(es) already present", existing)
            return []

    return await dish_service.create_dishes(db, DEMO_DISHES)


async def _run(
    force: bool,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> int:
    factory = session_factory or get_session_factory()
    async with factory() as session:
        created = await seed_demo_dishes(session, force=force)
        await session.commit()
    logger.info("Seeded %d dish(es)", len(created))
    return len(created)


async def _main(force: bool) -> int:
    try:
        return await _run(force)
    finally:
        await dispose_engine()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the `menu-api-seed` console script."""
    parser = argparse.ArgumentParser(description="Seed the menu with demo dishes.")
    parser.add_argument(
        "--force",
        action="store_true",
        help="insert the demo dishes even if the menu is not empty",
    )
    args = parser.parse_args(argv)

    from menu_api.main import setup_logging
    setup_logging()

    try:
        asyncio.run(_main(args.force))
    except (ValueError, MenuAPIError) as e:
        logger.error("Seeding failed: %s", getattr(e, "message", str(e)))
        sys.exit(1)


if __name__ == "__main__":
    main()
