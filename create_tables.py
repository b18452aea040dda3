"""
create_tables.py
----------------
One-shot script to create all database tables, including the partial
unique indexes guarding open partnerships and shares.
For production migrations, use Alembic instead.

Usage:
    python create_tables.py
"""

import asyncio

from brokerage.core.config import settings
from brokerage.core.logging import configure_logging, get_logger
from brokerage.db.session import build_engine
from brokerage.models import Base  # Imports all models so metadata is populated

logger = get_logger(__name__)


async def create_all_tables() -> None:
    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    logger.info("All tables created", tables=sorted(Base.metadata.tables))


if __name__ == "__main__":
    configure_logging()
    asyncio.run(create_all_tables())
