"""Shared test fixtures and configuration."""
import pytest
from pathlib import Path
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from food_ordering.main import app
from food_ordering.core.bootstrap import build_storage
from food_ordering.core.config import Settings
from food_ordering.core.dependencies import get_storage
from food_ordering.db.database import create_engine, create_session_factory, init_db
from food_ordering.db.models import Base
from food_ordering.services.menu.catalog import MenuCatalog
from food_ordering.services.menu.yaml_menu import YamlMenuProvider
from food_ordering.services.ordering.aggregator import OrderAggregator
from food_ordering.services.ordering.service import OrderService
from food_ordering.services.persistence.json_file import JsonFileOrderRepository, JsonFileStore
from food_ordering.services.persistence.memory import InMemoryOrderRepository
from food_ordering.services.persistence.sql import SqlOrderRepository


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

BACKENDS = ["memory", "file", "database"]


def create_test_engine():
    """In-memory SQLite engine shared by every session of one test."""
    return create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def test_menu_path():
    """Return path to test menu YAML file."""
    return Path(__file__).parent / "fixtures" / "test_menu.yaml"


@pytest.fixture
async def test_catalog(test_menu_path):
    """Menu catalog with the test fixture items (ids 1, 2, 3, 7)."""
    return await MenuCatalog.load(YamlMenuProvider(test_menu_path))


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_test_engine()
    await init_db(engine)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_db_engine):
    """Session factory bound to the test engine."""
    return create_session_factory(test_db_engine)


@pytest.fixture
def sql_repository(test_session_factory):
    """Relational repository on the test database."""
    return SqlOrderRepository(test_session_factory)


@pytest.fixture
def json_store(tmp_path):
    """Empty JSON store in a temporary directory."""
    return JsonFileStore.open(tmp_path / "data.json")


@pytest.fixture(params=BACKENDS)
async def order_repository(request, tmp_path):
    """Each order repository backend in turn."""
    if request.param == "memory":
        yield InMemoryOrderRepository()
    elif request.param == "file":
        yield JsonFileOrderRepository(JsonFileStore.open(tmp_path / "data.json"))
    else:
        # File-backed so concurrent sessions get their own connections
        engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}")
        await init_db(engine)
        repository = SqlOrderRepository(create_session_factory(engine), engine)
        yield repository
        await repository.close()


@pytest.fixture
def order_service(test_catalog, order_repository):
    """Order service over each backend."""
    return OrderService(OrderAggregator(test_catalog), order_repository)


@pytest.fixture
def test_settings(test_menu_path, tmp_path):
    """Override settings for testing."""
    return Settings(
        storage_backend="memory",
        data_file=str(tmp_path / "data.json"),
        database_url=TEST_DATABASE_URL,
        menu_file=str(test_menu_path),
        restaurant_name="Test Restaurant",
    )


@pytest.fixture
async def test_storage(test_settings):
    """Storage built the way the app builds it at startup."""
    storage = await build_storage(test_settings)
    yield storage
    await storage.close()


@pytest.fixture
def test_client(test_storage):
    """Create FastAPI test client with overrides."""
    app.dependency_overrides[get_storage] = lambda: test_storage

    client = TestClient(app)

    yield client

    # Clear overrides
    app.dependency_overrides.clear()
