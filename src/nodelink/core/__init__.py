"""
NodeLink Core - The headless diagram model and gesture state machine.

The Core holds nodes, ports and connections and interprets pointer
input. It has no GUI dependencies; a host feeds it one input snapshot
per frame and draws the snapshot it returns.
"""

from nodelink.core.connections import Connection, ConnectionStore, Endpoint
from nodelink.core.errors import InvalidConnectionError, NodeLinkError, UnknownEndpointError
from nodelink.core.interaction import FrameInput, FrameOutput, InteractionController, NodeDrag
from nodelink.core.node import Node, Port, create_node
from nodelink.core.types import GestureState, PortAnchor, Vec2

__all__ = [
    "Connection",
    "ConnectionStore",
    "Endpoint",
    "FrameInput",
    "FrameOutput",
    "GestureState",
    "InteractionController",
    "InvalidConnectionError",
    "Node",
    "NodeDrag",
    "NodeLinkError",
    "Port",
    "PortAnchor",
    "UnknownEndpointError",
    "Vec2",
    "create_node",
]
