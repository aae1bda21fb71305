"""Database connection and session management."""
import logging

from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from food_ordering.db.models import Base, MenuItemRecord

logger = logging.getLogger(__name__)


def async_database_url(database_url: str) -> str:
    """Convert postgresql:// and sqlite:// URLs to their async drivers."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Create an async engine for the given URL."""
    engine = create_async_engine(
        async_database_url(database_url),
        echo=False,
        future=True,
        **kwargs,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_menu_items(session_factory: async_sessionmaker, items) -> int:
    """Insert ``items`` when the menu table is empty. Returns rows inserted."""
    async with session_factory() as session:
        async with session.begin():
            count = await session.scalar(select(func.count()).select_from(MenuItemRecord))
            if count:
                return 0
            session.add_all(
                [
                    MenuItemRecord(
                        id=item.id,
                        name=item.name,
                        description=item.description,
                        price=item.price,
                        category=item.category,
                        image_url=item.image_url,
                        created_at=item.created_at,
                    )
                    for item in items
                ]
            )
    logger.info(f"Seeded {len(items)} menu items")
    return len(items)
