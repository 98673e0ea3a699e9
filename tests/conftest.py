import pytest

from storefront.infrastructure import bootstrap


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the composition root at a fresh data directory."""
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path))
    bootstrap.settings.cache_clear()
    yield tmp_path
    bootstrap.settings.cache_clear()
