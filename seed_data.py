import asyncio
import logging
from src.db.main import async_session_maker, init_db, engine
from src.db.seed import seed_sample_data
from src.utils.logging_config import setup_logging

logger = logging.getLogger("seed_data")


async def seed_data():
    # Creates any missing tables first; existing rows with the same ids make the insert fail
    await init_db()

    async with async_session_maker() as session:
        await seed_sample_data(session)

    logger.info("Successfully seeded sample rental store data")
    await engine.dispose()

if __name__ == "__main__":
    setup_logging("INFO")
    asyncio.run(seed_data())
