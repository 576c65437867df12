import logging
import os
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

# Keep the module-level app from picking up a developer's token
os.environ.update({"WEBHOOK_TOKEN": "", "LOG_LEVEL": "DEBUG"})

from hookecho.core.config import Settings, get_settings
from hookecho.main import create_app

logger = logging.getLogger(__name__)

SECRET = "secret"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(webhook_token=SECRET, _env_file=None)


@pytest.fixture
def open_settings() -> Settings:
    return Settings(webhook_token="", _env_file=None)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        logger.info("Test client created")
        yield test_client
    logger.info("Test client closed")


@pytest.fixture
def open_client(open_settings) -> Iterator[TestClient]:
    with TestClient(create_app(open_settings)) as test_client:
        yield test_client
