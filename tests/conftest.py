"""
Test Configuration
==================

Pytest fixtures for Graph Gateway tests.

The graph store is replaced by an in-memory fake that records every
session and query, so tests can assert the store was never touched and
that sessions are always released.
"""

import os
from collections.abc import AsyncGenerator, AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"


# =============================================================================
# Fake Graph Elements
# =============================================================================


@dataclass
class FakeNode:
    """Stands in for neo4j.graph.Node."""

    element_id: str
    labels: frozenset[str] = frozenset()
    properties: dict[str, Any] = field(default_factory=dict)

    def items(self) -> Any:
        return self.properties.items()


@dataclass
class FakeRelationship:
    """Stands in for neo4j.graph.Relationship."""

    element_id: str
    type: str


class FakeRecord:
    """Stands in for neo4j.Record: fields by name or position."""

    def __init__(self, **fields: Any) -> None:
        self._fields = fields

    def get(self, key: str, default: Any = None) -> Any:
        return self._fields.get(key, default)

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, int):
            return list(self._fields.values())[key]
        return self._fields[key]


def node(element_id: str, *labels: str, **properties: Any) -> FakeNode:
    """Build a fake node."""
    return FakeNode(element_id, frozenset(labels), dict(properties))


def rel(rel_type: str, element_id: str = "r") -> FakeRelationship:
    """Build a fake relationship."""
    return FakeRelationship(element_id, rel_type)


def triple_record(n: FakeNode, r: FakeRelationship, m: FakeNode) -> FakeRecord:
    """One (n, r, m) result row."""
    return FakeRecord(n=n, r=r, m=m)


# =============================================================================
# Fake Store
# =============================================================================


class FakeSession:
    def __init__(self, store: "FakeStore") -> None:
        self._store = store

    async def run(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> Sequence[FakeRecord]:
        self._store.queries.append((query, parameters or {}))
        if self._store.error is not None:
            raise self._store.error
        return list(self._store.records)


class FakeStore:
    """In-memory GraphStoreClient returning canned records for any query."""

    def __init__(
        self,
        records: Sequence[FakeRecord] = (),
        error: Exception | None = None,
    ) -> None:
        self.records = list(records)
        self.error = error
        self.queries: list[tuple[str, dict[str, Any]]] = []
        self.opened = 0
        self.closed = 0
        self.health: dict[str, Any] = {"status": "healthy", "latency_ms": 0.1}

    @asynccontextmanager
    async def session(self) -> AsyncIterator[FakeSession]:
        self.opened += 1
        try:
            yield FakeSession(self)
        finally:
            self.closed += 1

    async def health_check(self) -> dict[str, Any]:
        return self.health


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def people() -> dict[str, FakeNode]:
    """A small social graph's nodes."""
    return {
        "alice": node("4:db:1", "Person", name="Alice", age=34),
        "bob": node("4:db:2", "Person", name="Bob"),
        "acme": node("4:db:3", "Company", "Customer", name="ACME Corp"),
    }


@pytest.fixture
def social_records(people: dict[str, FakeNode]) -> list[FakeRecord]:
    """Alice knows Bob, Alice works at ACME."""
    return [
        triple_record(people["alice"], rel("KNOWS", "5:db:1"), people["bob"]),
        triple_record(people["alice"], rel("WORKS_AT", "5:db:2"), people["acme"]),
    ]


@pytest.fixture
def fake_store(social_records: list[FakeRecord]) -> FakeStore:
    """Store that answers every query with the social graph."""
    return FakeStore(social_records)


@pytest_asyncio.fixture
async def gateway_client(fake_store: FakeStore) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the Graph Gateway Service."""
    from services.graph_gateway.main import create_app

    app = create_app(store_client=fake_store)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
