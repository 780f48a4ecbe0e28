"""
NodeLink Test Configuration and Fixtures.

Provides shared fixtures for unit and integration tests.
"""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from nodelink.core.connections import ConnectionStore
from nodelink.core.interaction import FrameInput, InteractionController, NodeDrag
from nodelink.core.node import Node, Port
from nodelink.core.types import PortAnchor, Vec2

# =============================================================================
# Temporary Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Provide a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# Diagram Fixtures
# =============================================================================

@pytest.fixture
def node1():
    """100x100 box at (100, 100) with a centered port at (150, 150)."""
    return Node(Vec2(100, 100), Vec2(100, 100), [Port(PortAnchor.BOX_CENTER, 10.0, port_id="port1")],
                node_id="node1", title="Box 1")


@pytest.fixture
def node2():
    """100x100 box at (400, 100) with a centered port at (450, 150)."""
    return Node(Vec2(400, 100), Vec2(100, 100), [Port(PortAnchor.BOX_CENTER, 10.0, port_id="port2")],
                node_id="node2", title="Box 2")


@pytest.fixture
def side_port_node():
    """Box at (100, 300) with left and right ports."""
    return Node(
        Vec2(100, 300),
        Vec2(100, 100),
        [
            Port(PortAnchor.LEFT_CENTER, 10.0, port_id="in"),
            Port(PortAnchor.RIGHT_CENTER, 10.0, port_id="out"),
        ],
        node_id="node3",
        title="Box 3",
    )


@pytest.fixture
def store():
    """Provide an empty connection store."""
    return ConnectionStore()


@pytest.fixture
def controller(node1, node2, store):
    """Controller over the two-box diagram."""
    return InteractionController([node1, node2], store)


@pytest.fixture
def event_sink(controller):
    """Mock sink registered on every controller hook."""
    sink = MagicMock()
    controller.on_state_change(sink.state_changed)
    controller.on_connection_created(sink.connection_created)
    controller.on_connection_rejected(sink.connection_rejected)
    return sink


# =============================================================================
# Frame Helpers
# =============================================================================

@pytest.fixture
def frames():
    """Provide factories for common per-frame inputs."""

    class Frames:
        @staticmethod
        def press(x, y, drags=None):
            return FrameInput(Vec2(x, y), primary_down=True, primary_clicked=True, drags=drags or {})

        @staticmethod
        def hold(x, y, drags=None):
            return FrameInput(Vec2(x, y), primary_down=True, drags=drags or {})

        @staticmethod
        def release(x=None, y=None, drags=None):
            pointer = Vec2(x, y) if x is not None else None
            return FrameInput(pointer, primary_released=True, drags=drags or {})

        @staticmethod
        def drag(node_id, dx, dy):
            return {node_id: NodeDrag(active=True, delta=Vec2(dx, dy))}

    return Frames()
