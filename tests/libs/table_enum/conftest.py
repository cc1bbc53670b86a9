from collections.abc import Iterator

import pytest
from enum_test_models import LOOKUP_ROWS, InMemoryLookupStore
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from common.core.config_service import EnumSettings
from table_enum.crud.lookup import LookupDAO
from table_enum.db import Base, create_session_factory, create_sync_engine
from table_enum.store import SessionLookupStore
from table_enum.strategies.registry import StrategyRegistry


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_sync_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with create_session_factory(engine)() as session:
        dao = LookupDAO()
        for prefix, members in LOOKUP_ROWS.items():
            dao.create_many(session, prefix, members.items())
        session.commit()
        yield session


@pytest.fixture
def store(session: Session) -> SessionLookupStore:
    return SessionLookupStore(session)


@pytest.fixture
def memory_store() -> InMemoryLookupStore:
    return InMemoryLookupStore({prefix: dict(members) for prefix, members in LOOKUP_ROWS.items()})


@pytest.fixture
def settings() -> EnumSettings:
    return EnumSettings(default_strategy="lookup", error_message="The provided value is invalid")


@pytest.fixture
def strategies() -> StrategyRegistry:
    return StrategyRegistry.instance().copy()
