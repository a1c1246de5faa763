"""
Database seeding utilities for minimal reference data.

Seeds:
- Admin user (SEED_ADMIN_* settings)
- One inventory line per balloon color and size
- A few common accessories

Every step is idempotent: existing rows are left untouched.

Usage:
  python -m src.db.run_migrations upgrade head
  python -m src.db.seed
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.security import get_password_hash
from src.core.settings import AppSettings, get_app_settings
from src.db.models.enums import BalloonColor, BalloonSize, UserRole
from src.db.models.inventory import Accessory, InventoryItem
from src.db.models.security import User
from src.db.session import get_engine, make_session_maker
from src.services.inventory_status import calculate_inventory_status

logger = logging.getLogger(__name__)

# Starting stock per size for a fresh install
STARTING_STOCK: Dict[BalloonSize, int] = {
    BalloonSize.SMALL: 100,
    BalloonSize.LARGE: 50,
}

STARTING_ACCESSORIES: List[Tuple[str, int, int]] = [
    ("Balloon tape strip", 20, 5),
    ("Glue dots", 50, 10),
    ("Fishing line (100 m)", 10, 2),
    ("Arch frame", 4, 1),
]


# PUBLIC_INTERFACE
async def seed_all() -> None:
    """
    Seed the database with minimal reference data.

    This function:
      - Creates the admin user when no user with that username exists
      - Fills in any missing color x size inventory lines
      - Adds the starting accessories that are not present yet
    """
    settings = get_app_settings()
    maker = make_session_maker(get_engine())
    async with maker() as session:
        await _seed_admin(session, settings)
        await _seed_inventory(session, settings.DEFAULT_INVENTORY_THRESHOLD)
        await _seed_accessories(session)
        await session.commit()


async def _seed_admin(session: AsyncSession, settings: AppSettings) -> None:
    res = await session.execute(select(User).where(User.username == settings.SEED_ADMIN_USERNAME))
    if res.scalars().first():
        return
    session.add(
        User(
            username=settings.SEED_ADMIN_USERNAME,
            email=settings.SEED_ADMIN_EMAIL,
            full_name="Studio Admin",
            hashed_password=get_password_hash(settings.SEED_ADMIN_PASSWORD),
            role=UserRole.ADMIN,
            is_active=True,
        )
    )
    logger.info("Seeded admin user %s", settings.SEED_ADMIN_USERNAME)


async def _seed_inventory(session: AsyncSession, threshold: int) -> None:
    res = await session.execute(select(InventoryItem.color, InventoryItem.size))
    existing = {(color, size) for color, size in res.all()}
    added = 0
    for color in BalloonColor:
        for size in BalloonSize:
            if (color, size) in existing:
                continue
            quantity = STARTING_STOCK[size]
            session.add(
                InventoryItem(
                    color=color,
                    size=size,
                    quantity=quantity,
                    threshold=threshold,
                    status=calculate_inventory_status(quantity, threshold),
                )
            )
            added += 1
    if added:
        logger.info("Seeded %d inventory lines", added)


async def _seed_accessories(session: AsyncSession) -> None:
    res = await session.execute(select(Accessory.name))
    existing = set(res.scalars().all())
    for name, quantity, threshold in STARTING_ACCESSORIES:
        if name in existing:
            continue
        session.add(
            Accessory(
                name=name,
                quantity=quantity,
                threshold=threshold,
                status=calculate_inventory_status(quantity, threshold),
            )
        )


# PUBLIC_INTERFACE
def main() -> None:
    """Entrypoint to run the asynchronous seeding."""
    asyncio.run(seed_all())


if __name__ == "__main__":
    main()
