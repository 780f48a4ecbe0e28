"""
NodeLink - Interactive node-link diagram editor

Draggable boxes with connection ports, linked by dragging from one
port to a port on another box.
"""

__version__ = "1.0.0"

from nodelink.core.interaction import InteractionController
from nodelink.core.connections import ConnectionStore

__all__ = ["InteractionController", "ConnectionStore", "__version__"]
