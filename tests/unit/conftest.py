from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "support"))

from fakes import (
    DictCache,
    InMemoryConfigRepository,
    InMemoryReservationRepository,
    InMemoryTableRepository,
    RecordingPublisher,
    make_config,
    make_table,
)

from reserveflow.application.use_cases.config import ConfigLoader
from reserveflow.application.use_cases.context import TraceContext
from reserveflow.domain.table.entities import TableArea


@pytest.fixture
def trace_ctx() -> TraceContext:
    return TraceContext(trace_id="trace-1", request_id="req-1")


@pytest.fixture
def table_repository() -> InMemoryTableRepository:
    return InMemoryTableRepository(
        [
            make_table("T1"),
            make_table("T2"),
            make_table("T3", 4, 8),
            make_table("B1", 1, 2, area=TableArea.BAR),
            make_table("OLD", active=False),
        ]
    )


@pytest.fixture
def reservation_repository(table_repository) -> InMemoryReservationRepository:
    return InMemoryReservationRepository(table_repository)


@pytest.fixture
def config_repository() -> InMemoryConfigRepository:
    return InMemoryConfigRepository(make_config())


@pytest.fixture
def cache() -> DictCache:
    return DictCache()


@pytest.fixture
def loader(config_repository, cache) -> ConfigLoader:
    return ConfigLoader(repository=config_repository, cache=cache, ttl_seconds=60)


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()
