"""
Startup diagram construction.

The editor works on a fixed set of nodes created once at startup.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from nodelink.core.config import NodeLinkConfig
from nodelink.core.connections import ConnectionStore
from nodelink.core.interaction import InteractionController
from nodelink.core.node import Node, create_node
from nodelink.core.types import PortAnchor

logger = logging.getLogger(__name__)


@dataclass
class NodeLayout:
    """Startup placement of one node."""
    x: float
    y: float
    anchors: List[PortAnchor] = field(default_factory=lambda: [PortAnchor.BOX_CENTER])
    title: str = ""
    width: Optional[float] = None
    height: Optional[float] = None


# Two boxes side by side, one centered port each
DEFAULT_LAYOUT = (
    NodeLayout(100.0, 100.0, title="Box 1"),
    NodeLayout(400.0, 100.0, title="Box 2"),
)


def build_nodes(layout: Sequence[NodeLayout], config: Optional[NodeLinkConfig] = None) -> List[Node]:
    """Create nodes for a layout, filling sizes and port radius from config."""
    config = config or NodeLinkConfig()

    nodes = []
    for entry in layout:
        nodes.append(create_node(
            entry.x,
            entry.y,
            width=entry.width if entry.width is not None else config.nodes.default_width,
            height=entry.height if entry.height is not None else config.nodes.default_height,
            anchors=entry.anchors,
            port_radius=config.interaction.port_radius,
            title=entry.title,
        ))
    return nodes


def build_diagram(
    layout: Sequence[NodeLayout],
    config: Optional[NodeLinkConfig] = None,
) -> InteractionController:
    """Build a controller owning the nodes of a layout and an empty store."""
    nodes = build_nodes(layout, config)
    controller = InteractionController(nodes, ConnectionStore())
    logger.info(f"Diagram built with {len(nodes)} node(s)")
    return controller


def build_default_diagram(config: Optional[NodeLinkConfig] = None) -> InteractionController:
    """Build the default two-box diagram."""
    return build_diagram(DEFAULT_LAYOUT, config)
