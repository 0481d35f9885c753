import asyncio
import asyncpg
from alembic.config import Config
from alembic import command
from tenderbid.core.config import settings
from tenderbid.core.logging_config import logger

RETRIES = 5
RETRY_DELAY = 2


async def wait_for_db():
    settings.validate()
    db_url = settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://")
    for i in range(RETRIES):
        try:
            conn = await asyncpg.connect(db_url)
            await conn.close()
            logger.info("Database is ready!")
            return True
        except (OSError, asyncpg.PostgresError) as e:
            logger.error(f"Waiting for database... Attempt {i+1}/{RETRIES}: {e}")
            await asyncio.sleep(RETRY_DELAY)
    logger.error("Failed to connect to database after retries")
    raise ConnectionError("Database connection failed")


def apply_migrations():
    asyncio.run(wait_for_db())
    logger.info("Starting migrations...")
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)
    logger.info("Running Alembic upgrade to head...")
    command.upgrade(alembic_cfg, "head")
    logger.info("Migrations applied!")


if __name__ == "__main__":
    apply_migrations()
