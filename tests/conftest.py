import os

import pytest

from config import BASE_DIR, Config
from utils.content_sources import LocalJsonSource

DATA_DIR = os.path.join(BASE_DIR, 'bible_data')


class TestConfig(Config):
    __test__ = False
    TESTING = True
    CONTENT_SOURCE = 'local'
    BIBLE_DATA_DIR = DATA_DIR
    DEFAULT_TRANSLATION = 'kjv'
    TRANSLATION_LOAD_TIMEOUT = 5


@pytest.fixture(scope='session')
def kjv():
    return LocalJsonSource(DATA_DIR).fetch('kjv')


@pytest.fixture(scope='session')
def asv():
    return LocalJsonSource(DATA_DIR).fetch('asv')


@pytest.fixture
def app():
    from app import create_app
    return create_app(TestConfig)


@pytest.fixture
def client(app):
    return app.test_client()
