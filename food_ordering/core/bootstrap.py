"""Storage bootstrap: picks the order backend and loads the menu."""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from food_ordering.core.config import Settings
from food_ordering.core.errors import StorageUnavailableError
from food_ordering.db.database import create_engine, create_session_factory, init_db, seed_menu_items
from food_ordering.services.menu.base import MenuProvider
from food_ordering.services.menu.catalog import MenuCatalog
from food_ordering.services.menu.yaml_menu import YamlMenuProvider
from food_ordering.services.ordering.aggregator import OrderAggregator
from food_ordering.services.ordering.service import OrderService
from food_ordering.services.persistence.base import OrderRepository, UnavailableOrderRepository
from food_ordering.services.persistence.json_file import (
    JsonFileMenuProvider,
    JsonFileOrderRepository,
    JsonFileStore,
)
from food_ordering.services.persistence.memory import InMemoryOrderRepository, InMemoryStore
from food_ordering.services.persistence.sql import SqlMenuProvider, SqlOrderRepository

logger = logging.getLogger(__name__)


@dataclass
class Storage:
    """Everything the API needs, built once per process."""

    backend: str
    catalog: MenuCatalog
    repository: OrderRepository
    service: OrderService
    available: bool = True

    async def close(self) -> None:
        await self.repository.close()


def _assemble(backend: str, catalog: MenuCatalog, repository: OrderRepository, available: bool = True) -> Storage:
    service = OrderService(OrderAggregator(catalog), repository)
    return Storage(
        backend=backend,
        catalog=catalog,
        repository=repository,
        service=service,
        available=available,
    )


async def _seed_items(seed: MenuProvider):
    catalog = await MenuCatalog.load(seed)
    return catalog.list_all()


async def _open_backend(settings: Settings, seed: MenuProvider) -> Storage:
    backend = settings.storage_backend

    if backend == "memory":
        catalog = await MenuCatalog.load(seed)
        return _assemble(backend, catalog, InMemoryOrderRepository(InMemoryStore()))

    if backend == "file":
        store = JsonFileStore.open(settings.data_file, seed_items=await _seed_items(seed))
        catalog = await MenuCatalog.load(JsonFileMenuProvider(store))
        return _assemble(backend, catalog, JsonFileOrderRepository(store))

    if backend == "database":
        engine = None
        try:
            # Unknown dialects and missing drivers fail here, not at first query
            engine = create_engine(settings.database_url)
            session_factory = create_session_factory(engine)
            await init_db(engine)
            await seed_menu_items(session_factory, await _seed_items(seed))
            items = await SqlMenuProvider(session_factory).load_items()
        except (SQLAlchemyError, OSError, ImportError, StorageUnavailableError) as e:
            if engine is not None:
                await engine.dispose()
            raise StorageUnavailableError(f"Database unavailable: {type(e).__name__}: {e}") from e
        return _assemble(backend, MenuCatalog(items), SqlOrderRepository(session_factory, engine))

    raise ValueError(f"Unknown storage backend: {backend}")


async def build_storage(settings: Settings, seed: Optional[MenuProvider] = None) -> Storage:
    """
    Build the catalog, repository and service for the configured backend.

    When the backend cannot be opened, ``settings.fail_closed`` decides what
    happens: raise, or start in degraded mode with the seed menu and an
    order repository that reports itself unavailable.

    Raises:
        StorageUnavailableError: backend unavailable and ``fail_closed`` is set
    """
    if seed is None:
        seed = YamlMenuProvider(settings.menu_file)

    try:
        storage = await _open_backend(settings, seed)
    except StorageUnavailableError as e:
        if settings.fail_closed:
            logger.critical(f"Storage backend '{settings.storage_backend}' unavailable, refusing to start: {e}")
            raise
        logger.error(
            f"Storage backend '{settings.storage_backend}' unavailable, "
            f"serving menu only: {e}"
        )
        catalog = await MenuCatalog.load(seed)
        return _assemble(
            settings.storage_backend,
            catalog,
            UnavailableOrderRepository(str(e)),
            available=False,
        )

    logger.info(
        f"Storage ready - backend: {storage.backend}, menu items: {len(storage.catalog)}"
    )
    return storage
