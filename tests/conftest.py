import pytest

from querykit.config import get_settings


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    for name in (
        "QUERYKIT_DEFAULT_PAGE_SIZE",
        "QUERYKIT_MAX_PAGE_SIZE",
        "QUERYKIT_STRICT_TIME_PARSING",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
