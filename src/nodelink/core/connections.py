"""
Connection Store - Append-only list of directed connections.

Connections reference nodes and ports by id only; coordinates are
resolved against the live nodes at draw time.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Mapping, Tuple

from nodelink.core.errors import InvalidConnectionError, UnknownEndpointError
from nodelink.core.types import Vec2

if TYPE_CHECKING:
    from nodelink.core.node import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    """A (node, port) pair."""
    node_id: str
    port_id: str

    def __str__(self) -> str:
        return f"{self.node_id}:{self.port_id}"


@dataclass(frozen=True)
class Connection:
    """
    A directed connection from one port to a port on another node.

    Equality compares the endpoints only, so two connections between the
    same ports are equal even though their ids differ.
    """
    start: Endpoint
    end: Endpoint
    connection_id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)

    @property
    def is_self_loop(self) -> bool:
        return self.start.node_id == self.end.node_id


class ConnectionStore:
    """
    Ordered, append-only collection of connections.

    Duplicates are allowed: appending the same endpoints twice stores
    two connections (multigraph).
    """

    def __init__(self):
        self._connections: List[Connection] = []

    def __len__(self) -> int:
        return len(self._connections)

    def append(self, connection: Connection) -> None:
        """
        Append a connection.

        Raises:
            InvalidConnectionError: If both endpoints are on the same node
        """
        if connection.is_self_loop:
            raise InvalidConnectionError(connection.start.node_id)

        self._connections.append(connection)
        logger.debug(f"Added connection: {connection.start} -> {connection.end}")

    def all(self) -> Tuple[Connection, ...]:
        """All connections in insertion order."""
        return tuple(self._connections)

    def resolve_endpoint(self, node_id: str, port_id: str, nodes: Mapping[str, "Node"]) -> Vec2:
        """
        Get the current world position of a port.

        Args:
            node_id: Owning node id
            port_id: Port id on that node
            nodes: Live nodes by id

        Raises:
            UnknownEndpointError: If the node or its port is unknown
        """
        node = nodes.get(node_id)
        if node is None:
            raise UnknownEndpointError(node_id)
        return node.port_center(port_id)

    def resolve(self, connection: Connection, nodes: Mapping[str, "Node"]) -> Tuple[Vec2, Vec2]:
        """Resolve both endpoints of a connection."""
        start = self.resolve_endpoint(connection.start.node_id, connection.start.port_id, nodes)
        end = self.resolve_endpoint(connection.end.node_id, connection.end.port_id, nodes)
        return (start, end)

    def segments(self, nodes: Mapping[str, "Node"]) -> List[Tuple[Vec2, Vec2]]:
        """
        Resolve every connection to a line segment, in insertion order.

        A connection whose endpoint cannot be resolved is logged and
        left out rather than drawn to a default position.
        """
        segments = []
        for connection in self._connections:
            try:
                segments.append(self.resolve(connection, nodes))
            except UnknownEndpointError as e:
                logger.error(f"Skipping connection {connection.connection_id}: {e}")
        return segments
