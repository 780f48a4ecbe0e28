"""
Node - A draggable rectangle exposing one or more ports.

A node owns its ports and keeps their world centers in sync with its
own position: every position change recomputes the port centers before
returning.
"""

import logging
import uuid
from typing import Iterable, List, Optional, Tuple

from nodelink.core.errors import UnknownEndpointError
from nodelink.core.geometry import hit_any_port
from nodelink.core.types import PortAnchor, Vec2

logger = logging.getLogger(__name__)


class Port:
    """
    A circular connection point on a node.

    The world center is owned by the parent node and only updated through
    ``Node.set_position``.
    """

    DEFAULT_RADIUS = 10.0

    def __init__(
        self,
        anchor: PortAnchor = PortAnchor.BOX_CENTER,
        radius: float = DEFAULT_RADIUS,
        port_id: Optional[str] = None,
    ):
        if radius <= 0:
            raise ValueError(f"Port radius must be positive, got {radius}")

        self._port_id = port_id or str(uuid.uuid4())
        self._anchor = anchor
        self._radius = float(radius)
        self._center = Vec2.zero()

    @property
    def port_id(self) -> str:
        return self._port_id

    @property
    def anchor(self) -> PortAnchor:
        return self._anchor

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def center(self) -> Vec2:
        """Current world center."""
        return self._center

    def __repr__(self) -> str:
        return f"Port({self._port_id!r}, {self._anchor.value}, center={self._center})"


class Node:
    """
    A rectangular diagram node.

    Features:
    - Position (top-left) and size
    - Ordered, non-empty list of ports
    - Port centers recomputed synchronously on every move
    """

    def __init__(
        self,
        position: Vec2,
        size: Vec2,
        ports: Iterable[Port],
        node_id: Optional[str] = None,
        title: str = "",
    ):
        ports = list(ports)
        if not ports:
            raise ValueError("A node needs at least one port")
        if size.x <= 0 or size.y <= 0:
            raise ValueError(f"Node size must be positive, got {size}")

        seen = set()
        for port in ports:
            if port.port_id in seen:
                raise ValueError(f"Duplicate port id on node: {port.port_id}")
            seen.add(port.port_id)

        self._node_id = node_id or str(uuid.uuid4())
        self._title = title or self._node_id[:8]
        self._size = size
        self._ports: List[Port] = ports
        self._position = position

        self._update_port_positions()

    @property
    def node_id(self) -> str:
        return self._node_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def position(self) -> Vec2:
        return self._position

    @property
    def size(self) -> Vec2:
        return self._size

    @property
    def ports(self) -> Tuple[Port, ...]:
        """Ports in declaration order."""
        return tuple(self._ports)

    @property
    def port_ids(self) -> List[str]:
        return [port.port_id for port in self._ports]

    def set_position(self, new_pos: Vec2) -> None:
        """Move the node and recompute every port center."""
        self._position = new_pos
        self._update_port_positions()

    def translate(self, delta: Vec2) -> None:
        """Move the node by a delta."""
        self.set_position(self._position + delta)

    def _update_port_positions(self) -> None:
        """Recompute port world centers from their anchor rules."""
        for port in self._ports:
            port._center = self._position + port.anchor.offset(self._size)

    def port_at(self, point: Optional[Vec2]) -> Optional[str]:
        """Get the id of the port under a point, first declared wins."""
        return hit_any_port(point, self)

    def port_center(self, port_id: str) -> Vec2:
        """
        Get a port's current world center.

        Raises:
            UnknownEndpointError: If the port does not belong to this node
        """
        for port in self._ports:
            if port.port_id == port_id:
                return port.center
        raise UnknownEndpointError(self._node_id, port_id)

    def __repr__(self) -> str:
        return f"Node({self._node_id!r}, position={self._position}, ports={len(self._ports)})"


def create_node(
    x: float,
    y: float,
    width: float = 100.0,
    height: float = 100.0,
    anchors: Iterable[PortAnchor] = (PortAnchor.BOX_CENTER,),
    port_radius: float = Port.DEFAULT_RADIUS,
    node_id: Optional[str] = None,
    title: str = "",
) -> Node:
    """
    Create a node with one port per anchor.

    The defaults give a 100x100 box with a single centered port.
    """
    ports = [Port(anchor, port_radius) for anchor in anchors]
    node = Node(Vec2(x, y), Vec2(width, height), ports, node_id=node_id, title=title)
    logger.debug(f"Created node: {node.node_id} at ({x}, {y}) with {len(ports)} port(s)")
    return node
