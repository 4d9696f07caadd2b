import pytest

from athenadriver.client_cache import ClientCache
from athenadriver.constants import SDK_LOAD_CONFIG_ENV


@pytest.fixture(autouse=True)
def no_sdk_load_config(monkeypatch):
    """Tests start with AWS_SDK_LOAD_CONFIG unset regardless of the host shell."""
    monkeypatch.delenv(SDK_LOAD_CONFIG_ENV, raising=False)


@pytest.fixture
def client_cache():
    return ClientCache()
