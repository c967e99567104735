"""Shared fixtures: in-memory stores with a controllable clock."""

import itertools
import logging

import pytest

from splitsmith.io.ser import ConnectionSpec, TestConfig
from splitsmith.runtime.config import ConfigResolver
from splitsmith.store.adapters import InMemoryStore, register_store, reset_store_pool

_prefixes = itertools.count()


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def connection():
    """A memory-backed connection spec unique to the test."""
    return ConnectionSpec(backend="memory", key_prefix=f"mab-test-{next(_prefixes)}")


@pytest.fixture
def store(connection, clock):
    memory_store = InMemoryStore(clock=clock)
    register_store(connection, memory_store)
    yield memory_store
    reset_store_pool()


@pytest.fixture
def config(connection, store):
    return TestConfig(connection=connection)


@pytest.fixture
def dup_config(connection, store):
    return TestConfig(connection=connection, count_duplicates=True)


@pytest.fixture
def resolver(connection, store):
    return ConfigResolver(connection=connection)


@pytest.fixture
def reset_logging():
    """Remove the handler installed by configure_logging and restore levels."""
    from splitsmith.utils import logging as splitsmith_logging

    yield
    if splitsmith_logging._handler is not None:
        splitsmith_logging._logger.removeHandler(splitsmith_logging._handler)
        splitsmith_logging._handler = None
    splitsmith_logging._logger.setLevel(logging.INFO)
    for logger in splitsmith_logging._loggers.values():
        logger.setLevel(logging.NOTSET)
