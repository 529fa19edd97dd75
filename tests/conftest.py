import pytest
from fastapi.testclient import TestClient
from loguru import logger

from scoresync.app import create_app
from scoresync.config import Config
from scoresync.relay import BroadcastRelay


class TestConfig(Config):
    APP_ENV = 'test'
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def anyio_backend():
    return 'asyncio'


@pytest.fixture()
def relay():
    return BroadcastRelay()


@pytest.fixture()
def relay_app(relay):
    return create_app(TestConfig, relay=relay)


@pytest.fixture()
def client(relay_app):
    with TestClient(relay_app) as test_client:
        yield test_client


@pytest.fixture()
def log_messages():
    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
