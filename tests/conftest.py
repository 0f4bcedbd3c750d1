import pytest

from config.settings import get_settings
from taskproxy.db import supabase_client
from taskproxy.dispatcher import RequestDispatcher

from tests.fakes import InMemoryStore


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep real credentials out of tests and rebuild cached globals."""
    for name in ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "TASKS_TABLE",
                 "CATEGORIES_TABLE", "LOG_LEVEL", "LOG_FILE", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    supabase_client.reset_store()
    yield
    get_settings.cache_clear()
    supabase_client.reset_store()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def dispatcher(store):
    return RequestDispatcher(store)
