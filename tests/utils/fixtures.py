import os

import pytest
from chalice.cli import factory
from chalice.local import LocalGateway

from chalicelib.session import StoreSession
from chalicelib.store import KeyValueStore, MemoryMedium
from chalicelib.utils.logger import logger

PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def local_gateway() -> LocalGateway:
    stage = os.environ.get('stage', 'test')
    config = factory.CLIFactory(project_dir=PROJECT_DIR, environ=os.environ).create_config_obj(
        chalice_stage_name=stage)
    logger.info(f'local_gateway ::: stage = {stage}')
    return LocalGateway(config.chalice_app, config)


@pytest.fixture(scope='session')
def chalice_gateway() -> LocalGateway:
    yield local_gateway()


@pytest.fixture
def empty_session() -> StoreSession:
    """
    Session over an in-memory medium, nothing seeded
    """
    return StoreSession(KeyValueStore(MemoryMedium(), namespace='test'))


@pytest.fixture
def store_session(empty_session) -> StoreSession:
    empty_session.initialize()
    return empty_session
