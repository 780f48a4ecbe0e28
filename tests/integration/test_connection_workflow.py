"""
Integration tests for full editing sessions.

Drives the default diagram through the pointer sampler and the
controller the same way the canvas does each frame.
"""

from nodelink.core.config import NodeLinkConfig
from nodelink.core.connections import Endpoint
from nodelink.core.diagram import build_default_diagram
from nodelink.core.types import GestureState, Vec2
from nodelink.gui.input_sampler import PointerSampler


class Session:
    """Minimal host loop: sampler -> controller -> sampler bodies."""

    def __init__(self, controller):
        self.controller = controller
        self.sampler = PointerSampler()
        self.output = controller.snapshot()
        self.sampler.set_bodies(self.output.nodes)

    def frame(self):
        self.output = self.controller.tick(self.sampler.sample())
        self.sampler.set_bodies(self.output.nodes)
        return self.output

    def press(self, x, y):
        self.sampler.press(Vec2(x, y))
        return self.frame()

    def move(self, x, y):
        self.sampler.move(Vec2(x, y))
        return self.frame()

    def release(self, x, y):
        self.sampler.release(Vec2(x, y))
        return self.frame()


def ids(output):
    return [(view.node_id, view.ports[0].port_id) for view in output.nodes]


class TestTwoBoxScenario:
    """The default two-box diagram."""

    def test_connect_twice(self):
        """Test connecting box 1 to box 2 twice stores two identical connections."""
        session = Session(build_default_diagram())
        (node1, port1), (node2, port2) = ids(session.output)

        output = session.press(150, 150)
        assert output.state == GestureState.DRAWING_CONNECTION
        assert output.pending.endpoint == Endpoint(node1, port1)

        session.move(300, 150)
        output = session.release(449, 150)
        assert len(output.connections) == 1
        assert output.connections[0].start == Endpoint(node1, port1)
        assert output.connections[0].end == Endpoint(node2, port2)

        session.press(150, 150)
        output = session.release(449, 150)
        assert len(output.connections) == 2
        assert output.connections[0] == output.connections[1]

    def test_drag_box_then_connect(self):
        """Test dragging a box by its body, then connecting to its moved port."""
        session = Session(build_default_diagram())

        session.press(410, 110)
        session.move(430, 160)
        output = session.release(430, 160)

        box2 = output.nodes[1]
        assert box2.position == Vec2(420, 150)
        assert box2.ports[0].center == Vec2(470, 200)
        assert output.state == GestureState.IDLE
        assert output.connections == ()

        session.press(470, 200)
        session.move(200, 200)
        output = session.release(155, 145)

        assert len(output.connections) == 1
        assert output.segments[0].start == Vec2(470, 200)
        assert output.segments[0].end == Vec2(150, 150)

    def test_fast_move_after_press_drags_box(self):
        """Test a press on the body drags the box even if the pointer reaches the port before the next frame."""
        session = Session(build_default_diagram())

        session.sampler.press(Vec2(150, 175))
        session.sampler.move(Vec2(150, 155))
        output = session.frame()

        assert output.state == GestureState.DRAGGING_NODE
        assert output.last_click == Vec2(150, 175)
        assert not output.last_click_on_port
        assert output.nodes[0].position == Vec2(100, 80)
        assert output.preview is None

        output = session.release(150, 155)
        assert output.state == GestureState.IDLE
        assert output.connections == ()

    def test_port_drag_never_moves_box(self):
        """Test dragging from a port draws a preview instead of moving the box."""
        session = Session(build_default_diagram())

        session.press(150, 150)
        output = session.move(250, 300)

        assert output.nodes[0].position == Vec2(100, 100)
        assert output.preview.start == Vec2(150, 150)
        assert output.preview.end == Vec2(250, 300)

        output = session.release(250, 300)
        assert output.preview is None
        assert output.connections == ()

    def test_self_connection_rejected(self):
        """Test releasing back on the start port creates nothing."""
        session = Session(build_default_diagram())

        session.press(150, 150)
        session.move(200, 200)
        output = session.release(150, 150)

        assert output.connections == ()
        assert output.state == GestureState.IDLE

    def test_port_radius_from_config(self):
        """Test the configured hit radius is used."""
        config = NodeLinkConfig()
        config.interaction.port_radius = 4.0
        session = Session(build_default_diagram(config))

        output = session.press(156, 150)
        assert output.state != GestureState.DRAWING_CONNECTION

        session.release(156, 150)
        output = session.press(154, 150)
        assert output.state == GestureState.DRAWING_CONNECTION
