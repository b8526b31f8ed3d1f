import argparse
import asyncio
from collections.abc import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskboard import models  # noqa: F401
from taskboard.config import settings
from taskboard.models.base import Base
from taskboard.utils.logger import setup_logger

logger = setup_logger("db")

DEFAULT_SEED_USERNAME = "testuser"
DEFAULT_SEED_PASSWORD = "password123"

logger.debug(f"Application DB URL: {settings.database_url}")

_is_sqlite = settings.database_url.startswith("sqlite")

if _is_sqlite:
    app_engine = create_async_engine(
        settings.database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(app_engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores REFERENCES clauses unless asked per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

else:
    app_engine = create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_recycle=300,
        echo=False,
    )

AppAsyncSessionLocal = async_sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=app_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# --- Dependency for FastAPI ---
async def get_app_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, closed on every exit path."""
    async with AppAsyncSessionLocal() as session:
        yield session


async def init_db():
    """Create any missing tables."""
    if not Base.metadata.tables:
        logger.warning("Base.metadata.tables is EMPTY! No tables will be created.")
    else:
        logger.debug(
            f"Tables registered in Base.metadata: {list(Base.metadata.tables.keys())}"
        )

    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema initialized.")


async def reset_db():
    """Drop every table and recreate the schema. Deletes all data."""
    async with app_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema reset.")


async def close_db():
    """Closes database connections."""
    logger.info("Closing database connections.")
    await app_engine.dispose()
    logger.info("Database connections closed.")


async def check_db_connection() -> bool:
    """Performs a simple query to check actual DB connectivity."""
    async with AppAsyncSessionLocal() as session:
        try:
            result = await session.execute(text("SELECT 1"))
            if result.scalar_one() == 1:
                logger.info("Successfully connected to the database.")
                return True
            raise RuntimeError("Test query returned an unexpected result.")
        except Exception as e:
            logger.error(f"Failed to execute test query: {e}", exc_info=True)
            raise RuntimeError("Database connectivity check failed.") from e


async def seed_user(
    username: str = DEFAULT_SEED_USERNAME, password: str = DEFAULT_SEED_PASSWORD
) -> tuple[str, bool]:
    """
    Create a development user if it does not exist yet.

    Returns the user's id and whether it was created by this call.
    """
    from taskboard.db_handlers.user import UserDBHandler
    from taskboard.utils.auth import PasswordHasher

    user_handler = UserDBHandler()
    existing = await user_handler.get_user_by_username(username)
    if existing:
        logger.info(f"User '{username}' already exists (ID: {existing.id})")
        return existing.id, False

    password_hash = await asyncio.to_thread(PasswordHasher().hash, password)
    user = await user_handler.create(
        {"username": username, "password_hash": password_hash}
    )
    logger.info(f"Seed user created: {username} (ID: {user.id})")
    return user.id, True


async def _seed_command(username: str, password: str) -> None:
    await init_db()
    user_id, created = await seed_user(username, password)
    if created:
        print("Test user created:")
        print(f"  Username: {username}")
        print(f"  Password: {password}")
        print(f"  ID: {user_id}")
    else:
        print(f"User '{username}' already exists (ID: {user_id})")
    await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Taskboard database utility")
    parser.add_argument(
        "action",
        choices=["init", "reset", "seed-user"],
        help="'init' to create missing tables, "
        "'reset' to drop and recreate all tables, "
        "'seed-user' to create a development user.",
    )
    parser.add_argument("--username", default=DEFAULT_SEED_USERNAME)
    parser.add_argument("--password", default=DEFAULT_SEED_PASSWORD)
    args = parser.parse_args()

    if args.action == "init":
        asyncio.run(init_db())
    elif args.action == "reset":
        confirm = input(
            "WARNING: This will delete all users and tasks. Are you sure? (yes/no): "
        )
        if confirm.lower() == "yes":
            asyncio.run(reset_db())
        else:
            logger.info("Database reset cancelled by user.")
    elif args.action == "seed-user":
        asyncio.run(_seed_command(args.username, args.password))
    logger.info("Database utility script finished.")
