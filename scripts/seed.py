#!/usr/bin/env python
"""
Create tables and load demo users for development.
"""

import asyncio
import sys


# Add src to path for imports
sys.path.insert(0, "src")

from app.core.database import Base, async_engine, async_session_factory  # noqa: E402
from app.modules.logs.models import ChangeLogEntry  # noqa: E402, F401
from app.modules.users.seed import seed_users  # noqa: E402


async def main() -> None:
    """Create the schema and seed users into an empty database."""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        inserted = await seed_users(session)
        await session.commit()

    if inserted:
        print(f"Created {inserted} demo users")
    else:
        print("Users table is not empty, nothing to seed")

    await async_engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
