"""
Hit testing helpers.

Pure functions over points, ports and rectangles. No state.
"""

from typing import TYPE_CHECKING, Optional

from nodelink.core.types import Vec2

if TYPE_CHECKING:
    from nodelink.core.node import Node, Port


def hit_port(point: Optional[Vec2], port: "Port") -> bool:
    """
    Check whether a point lies on a port.

    The test is inclusive at the radius edge and compares squared
    distances, so no square root is taken.

    Args:
        point: World position to test, or None if the host had no sample
        port: The port, with its current world center

    Returns:
        True if the distance from point to the port center is <= radius
    """
    if point is None:
        return False
    return (point - port.center).length_squared() <= port.radius * port.radius


def hit_any_port(point: Optional[Vec2], node: "Node") -> Optional[str]:
    """
    Find the port of a node under a point.

    Ports are tested in the node's declaration order and the first hit
    wins, so overlapping ports resolve to the earlier-declared one.

    Returns:
        The port id, or None if no port is hit
    """
    if point is None:
        return None
    for port in node.ports:
        if hit_port(point, port):
            return port.port_id
    return None


def point_in_rect(point: Optional[Vec2], top_left: Vec2, size: Vec2) -> bool:
    """Inclusive axis-aligned rectangle test."""
    if point is None:
        return False
    return (
        top_left.x <= point.x <= top_left.x + size.x
        and top_left.y <= point.y <= top_left.y + size.y
    )
