"""Reference-data stores read by the lookup strategy."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy import Connection
from sqlalchemy.orm import Session

from common.exceptions import ConfigurationError
from table_enum.crud.lookup import LookupDAO


class LookupStore(Protocol):
    """Protocol for reference-data sources keyed by prefix.

    Implementations must return members in a stable order across calls
    when the backing data has not changed.
    """

    def fetch_by_prefix(self, prefix: str) -> dict[str, str]:
        """Return ``{symbolic_key: label}`` for ``prefix`` in source order."""
        ...

    def has_prefix(self, prefix: str) -> bool:
        """Return True when at least one member is stored under ``prefix``."""
        ...


class SessionLookupStore:
    """``LookupStore`` backed by the ``enum_lookups`` table through a caller-owned session."""

    def __init__(self, session: Session, dao: LookupDAO | None = None) -> None:
        self.session = session
        self.dao = dao or LookupDAO()

    def fetch_by_prefix(self, prefix: str) -> dict[str, str]:
        return self.dao.fetch_by_prefix(self.session, prefix)

    def has_prefix(self, prefix: str) -> bool:
        return self.dao.has_prefix(self.session, prefix)

    def __repr__(self) -> str:
        return f"<SessionLookupStore(session={self.session!r})>"


class ConnectionLookupStore:
    """``LookupStore`` that reads through whichever connection is currently bound.

    Usage:
        store = ConnectionLookupStore()
        with store.bind(connection):
            store.fetch_by_prefix("PRIORITY")
    """

    def __init__(self, dao: LookupDAO | None = None) -> None:
        self.dao = dao or LookupDAO()
        self._session: Session | None = None

    @contextmanager
    def bind(self, connection: Connection) -> Iterator[Session]:
        """Read through ``connection`` until the block exits."""
        with Session(bind=connection) as session:
            self._session = session
            try:
                yield session
            finally:
                self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise ConfigurationError("lookup store is not bound to a connection")
        return self._session

    def fetch_by_prefix(self, prefix: str) -> dict[str, str]:
        return self.dao.fetch_by_prefix(self.session, prefix)

    def has_prefix(self, prefix: str) -> bool:
        return self.dao.has_prefix(self.session, prefix)

    def __repr__(self) -> str:
        return f"<ConnectionLookupStore(bound={self._session is not None})>"
