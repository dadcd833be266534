"""
Result Normalizer
=================

Flattens matched (node, relationship, node) rows into the client's
node/edge view.

Rules:
- Nodes are deduplicated by element id. The first representation seen
  wins; a later row carrying the same id with different labels or
  properties does not overwrite it.
- Edges are never deduplicated. One edge is emitted per row, in row order,
  so an undirected match that returns the same relationship twice yields
  two edges.

Version: 0.1.0
"""

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, NamedTuple

from neo4j.spatial import Point

from services.graph_gateway.store import StoreRecord
from shared.models.graph import GraphEdge, GraphNode, GraphView


class Triple(NamedTuple):
    """One matched row: start endpoint, relationship, end endpoint."""

    start: Any
    relationship: Any
    end: Any


def element_id(element: Any) -> str:
    """Stable identity of a store element, as a string."""
    return str(element.element_id)


def to_jsonable(value: Any) -> Any:
    """
    Convert a store property value into plain JSON data.

    Temporal values become ISO-8601 strings, points become
    ``{"srid", "x", "y"[, "z"]}`` and byte arrays become hex strings.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Point):
        return {"srid": value.srid, **dict(zip("xyz", value))}
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()

    # neo4j.time types expose iso_format(), stdlib ones isoformat()
    for attr in ("iso_format", "isoformat"):
        formatter = getattr(value, attr, None)
        if callable(formatter):
            return formatter()

    return str(value)


def node_view(element: Any) -> GraphNode:
    """Build the client view of one store node."""
    return GraphNode(
        id=element_id(element),
        labels=sorted(element.labels),
        properties={key: to_jsonable(value) for key, value in element.items()},
    )


def triples_from_records(
    records: Iterable[StoreRecord],
    start: str = "n",
    relationship: str = "r",
    end: str = "m",
) -> Iterator[Triple]:
    """Read the named endpoint/relationship fields from each record, in order."""
    for record in records:
        yield Triple(record.get(start), record.get(relationship), record.get(end))


def normalize(triples: Iterable[Triple | Sequence[Any]]) -> GraphView:
    """
    Deduplicate nodes and collect edges across matched triples.

    Args:
        triples: Rows in store order

    Returns:
        GraphView with nodes in first-seen order and one edge per triple
    """
    nodes: dict[str, GraphNode] = {}
    edges: list[GraphEdge] = []

    for start, relationship, end in triples:
        for endpoint in (start, end):
            node_id = element_id(endpoint)
            if node_id not in nodes:
                nodes[node_id] = node_view(endpoint)

        edges.append(
            GraphEdge(
                from_=element_id(start),
                to=element_id(end),
                label=relationship.type,
            )
        )

    return GraphView(nodes=list(nodes.values()), edges=edges)
