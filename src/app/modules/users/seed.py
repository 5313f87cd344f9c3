"""Demo users for development databases."""

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.users.models import User


DEMO_USERS: list[dict] = [
    {"forename": "Peter", "surname": "Loew", "email": "ploew@example.com", "is_active": True, "date_of_birth": date(1985, 3, 15)},
    {"forename": "Benjamin Franklin", "surname": "Gates", "email": "bfgates@example.com", "is_active": True, "date_of_birth": date(1976, 7, 22)},
    {"forename": "Castor", "surname": "Troy", "email": "ctroy@example.com", "is_active": False, "date_of_birth": date(1962, 11, 8)},
    {"forename": "Memphis", "surname": "Raines", "email": "mraines@example.com", "is_active": True, "date_of_birth": date(1974, 9, 12)},
    {"forename": "Stanley", "surname": "Goodspeed", "email": "sgodspeed@example.com", "is_active": True, "date_of_birth": date(1969, 1, 30)},
    {"forename": "H.I.", "surname": "McDunnough", "email": "himcdunnough@example.com", "is_active": True, "date_of_birth": date(1957, 4, 18)},
    {"forename": "Cameron", "surname": "Poe", "email": "cpoe@example.com", "is_active": False, "date_of_birth": date(1964, 12, 5)},
    {"forename": "Edward", "surname": "Malus", "email": "emalus@example.com", "is_active": False, "date_of_birth": date(1983, 6, 27)},
    {"forename": "Damon", "surname": "Macready", "email": "dmacready@example.com", "is_active": False, "date_of_birth": date(1958, 10, 14)},
    {"forename": "Johnny", "surname": "Blaze", "email": "jblaze@example.com", "is_active": True, "date_of_birth": date(1972, 2, 19)},
    {"forename": "Robin", "surname": "Feld", "email": "rfeld@example.com", "is_active": True, "date_of_birth": date(1966, 8, 3)},
]  # fmt: skip


async def seed_users(session: AsyncSession) -> int:
    """Insert the demo users into an empty users table.

    Seeding bypasses UserService, so no change log entries are written.

    Args:
        session: Database session; the caller commits

    Returns:
        Number of users inserted (0 if the table already had rows)
    """
    result = await session.execute(select(func.count()).select_from(User))
    if result.scalar_one() > 0:
        return 0

    session.add_all(User(**data) for data in DEMO_USERS)
    await session.flush()
    return len(DEMO_USERS)
