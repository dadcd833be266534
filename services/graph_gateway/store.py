"""
Store Interface
===============

The narrow surface of the graph store that graph operations consume.

``shared.database.Neo4jClient`` satisfies it against a live database; tests
supply an in-memory implementation.

Version: 0.1.0
"""

from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol


class StoreRecord(Protocol):
    """One result row; fields are read by name or position."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def __getitem__(self, key: int | str) -> Any: ...


class StoreSession(Protocol):
    """A session bound to one request."""

    async def run(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> Sequence[StoreRecord]: ...


class GraphStoreClient(Protocol):
    """Hands out scoped sessions."""

    def session(self) -> AbstractAsyncContextManager[StoreSession]: ...
