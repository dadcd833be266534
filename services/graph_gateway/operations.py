"""
Graph Operations
================

The fixed set of read operations the gateway supports.

Each operation turns request parameters into exactly one Cypher query and
turns the returned records into its response shape. Parameter validation
happens in ``prepare`` so a bad request never reaches the store.

Operations:
- labels: every label known to the store
- full: every relationship triple in the store
- byLabel: nodes carrying a given label
- search: triples where either endpoint's name contains a substring
- expand: triples touching a given node

Version: 0.1.0
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar

from services.graph_gateway.errors import InvalidParameter, MissingParameter, UnknownOperation
from services.graph_gateway.normalizer import node_view, normalize, triples_from_records
from services.graph_gateway.store import StoreRecord
from shared.models.graph import GraphNode, GraphView


# Labels are interpolated into the query text (Cypher has no parameter slot
# for them), so only word characters are accepted.
LABEL_PATTERN = re.compile(r"\w+")

OperationResult = list[str] | list[GraphNode] | GraphView


@dataclass(frozen=True)
class PreparedQuery:
    """Cypher text plus its bound parameters."""

    text: str
    parameters: dict[str, Any] = field(default_factory=dict)


def require_param(params: Mapping[str, str | None], name: str) -> str:
    """Return a required parameter, rejecting absent or empty values."""
    value = params.get(name)
    if not value:
        raise MissingParameter(name)
    return value


def validate_label(label: str) -> str:
    """Check a label against the identifier allow-list."""
    if not LABEL_PATTERN.fullmatch(label):
        raise InvalidParameter(
            "label",
            "only letters, digits and underscore are allowed",
        )
    return label


class GraphOperation(ABC):
    """A single supported graph read."""

    name: ClassVar[str]
    aliases: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def prepare(self, params: Mapping[str, str | None]) -> PreparedQuery:
        """Validate parameters and build the query. Never touches the store."""

    @abstractmethod
    def shape(self, records: Sequence[StoreRecord]) -> OperationResult:
        """Build the response from the records, in store order."""


class ListLabels(GraphOperation):
    """Enumerate the distinct labels known to the store."""

    name = "labels"

    def prepare(self, params: Mapping[str, str | None]) -> PreparedQuery:
        return PreparedQuery("CALL db.labels()")

    def shape(self, records: Sequence[StoreRecord]) -> list[str]:
        return [record[0] for record in records]


class LoadFullGraph(GraphOperation):
    """Every relationship triple in the store."""

    name = "full"
    aliases = ("initial",)

    def prepare(self, params: Mapping[str, str | None]) -> PreparedQuery:
        return PreparedQuery("MATCH (n)-[r]->(m) RETURN n, r, m")

    def shape(self, records: Sequence[StoreRecord]) -> GraphView:
        return normalize(triples_from_records(records))


class NodesByLabel(GraphOperation):
    """Nodes carrying the given label; no edges."""

    name = "byLabel"
    aliases = ("nodesByLabel",)

    def prepare(self, params: Mapping[str, str | None]) -> PreparedQuery:
        label = validate_label(require_param(params, "label"))
        return PreparedQuery(f"MATCH (n:`{label}`) RETURN n")

    def shape(self, records: Sequence[StoreRecord]) -> list[GraphNode]:
        return [node_view(record.get("n")) for record in records]


class Search(GraphOperation):
    """Triples where either endpoint's name contains the query, ignoring case."""

    name = "search"

    def prepare(self, params: Mapping[str, str | None]) -> PreparedQuery:
        query = require_param(params, "query")
        return PreparedQuery(
            """
            MATCH (n)-[r]-(m)
            WHERE toLower(n.name) CONTAINS toLower($query)
               OR toLower(m.name) CONTAINS toLower($query)
            RETURN n, r, m
            """,
            {"query": query},
        )

    def shape(self, records: Sequence[StoreRecord]) -> GraphView:
        return normalize(triples_from_records(records))


class Expand(GraphOperation):
    """Triples where either endpoint is the given node."""

    name = "expand"

    def prepare(self, params: Mapping[str, str | None]) -> PreparedQuery:
        node_id = require_param(params, "nodeId")
        return PreparedQuery(
            """
            MATCH (n)-[r]-(m)
            WHERE elementId(n) = $nodeId OR elementId(m) = $nodeId
            RETURN n, r, m
            """,
            {"nodeId": node_id},
        )

    def shape(self, records: Sequence[StoreRecord]) -> GraphView:
        return normalize(triples_from_records(records))


OPERATIONS: tuple[GraphOperation, ...] = (
    ListLabels(),
    LoadFullGraph(),
    NodesByLabel(),
    Search(),
    Expand(),
)

SUPPORTED_OPERATIONS: list[str] = [op.name for op in OPERATIONS]

_REGISTRY: dict[str, GraphOperation] = {
    alias: op for op in OPERATIONS for alias in (op.name, *op.aliases)
}


def resolve_operation(name: str | None) -> GraphOperation:
    """
    Map an operation name (or legacy alias) to its operation.

    Raises:
        UnknownOperation: If the name is missing or not supported
    """
    operation = _REGISTRY.get(name) if name else None
    if operation is None:
        raise UnknownOperation(name, SUPPORTED_OPERATIONS)
    return operation
