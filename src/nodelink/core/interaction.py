"""
Interaction Controller - The pointer gesture state machine.

One pointer drives three competing gestures: dragging a node body,
drawing a connection from a port, and completing that connection by
releasing over another node's port. The controller consumes one
immutable input snapshot per frame, updates the diagram it owns, and
returns an immutable output snapshot for the host to draw.

Each tick evaluates, in this fixed order:

1. primary-button-down sampling
2. click edge (a click on a port starts a connection, anywhere else
   clears pending state)
3. per-node drag deltas (ports take priority over the node body)
4. release edge (commit or abort a connection, end a drag)
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from nodelink.core.connections import Connection, ConnectionStore, Endpoint
from nodelink.core.errors import InvalidConnectionError
from nodelink.core.node import Node
from nodelink.core.types import GestureState, Vec2

logger = logging.getLogger(__name__)


# =============================================================================
# Per-frame input
# =============================================================================

@dataclass(frozen=True)
class NodeDrag:
    """Host-side drag report for one node body during one frame."""
    active: bool = False
    delta: Vec2 = field(default_factory=Vec2.zero)


NO_DRAG = NodeDrag()


@dataclass(frozen=True)
class FrameInput:
    """
    Pointer snapshot for a single frame.

    Captured once at tick entry; every decision in the tick reads the
    same values. ``primary_clicked`` is the press edge of the primary
    button and ``primary_released`` its release edge. ``click_pos`` is
    where the press happened when the pointer has moved on since.
    """
    pointer: Optional[Vec2] = None
    primary_down: bool = False
    primary_clicked: bool = False
    primary_released: bool = False
    drags: Mapping[str, NodeDrag] = field(default_factory=dict)
    click_pos: Optional[Vec2] = None

    def __post_init__(self):
        object.__setattr__(self, "drags", MappingProxyType(dict(self.drags)))

    @property
    def click_point(self) -> Optional[Vec2]:
        """Press position, falling back to the current pointer."""
        return self.click_pos if self.click_pos is not None else self.pointer

    def drag_for(self, node_id: str) -> NodeDrag:
        return self.drags.get(node_id, NO_DRAG)


# =============================================================================
# Per-frame output
# =============================================================================

@dataclass(frozen=True)
class Segment:
    """A line segment in world coordinates."""
    start: Vec2
    end: Vec2


@dataclass(frozen=True)
class PortView:
    port_id: str
    center: Vec2
    radius: float


@dataclass(frozen=True)
class NodeView:
    """Read-only copy of a node's drawable state."""
    node_id: str
    title: str
    position: Vec2
    size: Vec2
    ports: Tuple[PortView, ...]

    @classmethod
    def of(cls, node: Node) -> "NodeView":
        return cls(
            node_id=node.node_id,
            title=node.title,
            position=node.position,
            size=node.size,
            ports=tuple(PortView(p.port_id, p.center, p.radius) for p in node.ports),
        )


@dataclass(frozen=True)
class PendingConnection:
    """The committed start of a connection whose end is still open."""
    node_id: str
    port_id: str
    position: Vec2

    @property
    def endpoint(self) -> Endpoint:
        return Endpoint(self.node_id, self.port_id)


@dataclass(frozen=True)
class FrameOutput:
    """Everything the host needs to draw one frame."""
    state: GestureState
    nodes: Tuple[NodeView, ...]
    connections: Tuple[Connection, ...]
    segments: Tuple[Segment, ...]
    preview: Optional[Segment] = None
    committed: Tuple[Connection, ...] = ()
    drag_target: Optional[str] = None
    pending: Optional[PendingConnection] = None
    primary_down: bool = False
    last_click: Optional[Vec2] = None
    last_click_on_port: bool = False

    def node(self, node_id: str) -> NodeView:
        for view in self.nodes:
            if view.node_id == node_id:
                return view
        raise KeyError(node_id)


# =============================================================================
# Controller
# =============================================================================

class InteractionController:
    """
    Gesture state machine over an exclusively owned diagram.

    The controller owns the node collection and the connection store
    for the duration of a tick. Callers drive it with ``tick()`` and
    read results only from the returned ``FrameOutput``.
    """

    def __init__(self, nodes: Iterable[Node], store: Optional[ConnectionStore] = None):
        self._nodes: Dict[str, Node] = {}
        port_owners: Dict[str, str] = {}

        for node in nodes:
            if node.node_id in self._nodes:
                raise ValueError(f"Duplicate node id: {node.node_id}")
            for port_id in node.port_ids:
                if port_id in port_owners:
                    raise ValueError(
                        f"Port id {port_id} on node {node.node_id} is already used "
                        f"by node {port_owners[port_id]}"
                    )
                port_owners[port_id] = node.node_id
            self._nodes[node.node_id] = node

        self._store = store if store is not None else ConnectionStore()

        # Gesture state
        self._state = GestureState.IDLE
        self._drag_target: Optional[str] = None
        self._pending: Optional[PendingConnection] = None

        # Last-frame readouts
        self._primary_down = False
        self._last_click: Optional[Vec2] = None
        self._last_click_on_port = False
        self._committed: List[Connection] = []

        # Callbacks
        self._state_callbacks: List[Callable[[GestureState, GestureState], None]] = []
        self._created_callbacks: List[Callable[[Connection], None]] = []
        self._rejected_callbacks: List[Callable[[Endpoint, Optional[Endpoint], str], None]] = []

        logger.debug(f"Interaction controller created with {len(self._nodes)} node(s)")

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> GestureState:
        return self._state

    # -------------------------------------------------------------------------
    # Observability hooks
    # -------------------------------------------------------------------------

    def on_state_change(self, callback: Callable[[GestureState, GestureState], None]) -> None:
        """Register callback for gesture state changes (old, new)."""
        self._state_callbacks.append(callback)

    def on_connection_created(self, callback: Callable[[Connection], None]) -> None:
        """Register callback for committed connections."""
        self._created_callbacks.append(callback)

    def on_connection_rejected(
        self, callback: Callable[[Endpoint, Optional[Endpoint], str], None]
    ) -> None:
        """Register callback for aborted connection gestures (start, end or None, reason)."""
        self._rejected_callbacks.append(callback)

    def _set_state(self, value: GestureState) -> None:
        old_state = self._state
        self._state = value
        if old_state != value:
            logger.debug(f"Gesture state changed: {old_state.name} -> {value.name}")
            for callback in self._state_callbacks:
                try:
                    callback(old_state, value)
                except Exception as e:
                    logger.error(f"State callback error: {e}")

    def _notify_created(self, connection: Connection) -> None:
        for callback in self._created_callbacks:
            try:
                callback(connection)
            except Exception as e:
                logger.error(f"Connection created callback error: {e}")

    def _notify_rejected(self, start: Endpoint, end: Optional[Endpoint], reason: str) -> None:
        logger.debug(f"Connection from {start} rejected: {reason}")
        for callback in self._rejected_callbacks:
            try:
                callback(start, end, reason)
            except Exception as e:
                logger.error(f"Connection rejected callback error: {e}")

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def tick(self, frame: FrameInput) -> FrameOutput:
        """
        Advance the state machine by one frame.

        Args:
            frame: The frame's input snapshot

        Returns:
            The output snapshot to draw
        """
        self._committed = []

        self._primary_down = frame.primary_down

        if frame.primary_clicked:
            self._handle_click(frame.click_point)

        self._apply_drags(frame)

        if frame.primary_released:
            self._handle_release(frame.pointer)

        return self._build_output(frame.pointer)

    def cancel(self) -> None:
        """Drop any gesture in progress and return to IDLE."""
        if self._pending is not None:
            self._notify_rejected(self._pending.endpoint, None, "cancelled")
        self._reset()

    def snapshot(self, pointer: Optional[Vec2] = None) -> FrameOutput:
        """Build an output snapshot without advancing the state machine."""
        return self._build_output(pointer)

    def _find_port(
        self, point: Optional[Vec2], exclude_node: Optional[str] = None
    ) -> Optional[Tuple[Node, str]]:
        """First (node, port id) under a point, in node then port declaration order."""
        if point is None:
            return None
        for node in self._nodes.values():
            if node.node_id == exclude_node:
                continue
            port_id = node.port_at(point)
            if port_id is not None:
                return (node, port_id)
        return None

    def _handle_click(self, pointer: Optional[Vec2]) -> None:
        """Press edge: start a connection on a port, clear state anywhere else."""
        if pointer is not None:
            self._last_click = pointer

        hit = self._find_port(pointer)
        self._last_click_on_port = hit is not None

        if hit is None:
            if self._pending is not None:
                self._notify_rejected(self._pending.endpoint, None, "click on empty space")
            self._reset()
            return

        node, port_id = hit
        if self._pending is not None:
            self._notify_rejected(self._pending.endpoint, None, "restarted")

        self._drag_target = None
        self._pending = PendingConnection(node.node_id, port_id, node.port_center(port_id))
        self._set_state(GestureState.DRAWING_CONNECTION)
        logger.debug(f"Connection started from {node.node_id}:{port_id}")

    def _apply_drags(self, frame: FrameInput) -> None:
        """Translate the dragged node, or pick one up if a body drag begins."""
        if self._state == GestureState.DRAWING_CONNECTION:
            return

        if self._state == GestureState.DRAGGING_NODE:
            drag = frame.drag_for(self._drag_target)
            if drag.active:
                self._nodes[self._drag_target].translate(drag.delta)
            return

        # The body was grabbed where the button went down
        point = frame.click_point if frame.primary_clicked else frame.pointer
        if point is None:
            return

        for node in self._nodes.values():
            drag = frame.drag_for(node.node_id)
            if not drag.active:
                continue
            # Ports win over the body
            if node.port_at(point) is not None:
                continue
            self._drag_target = node.node_id
            self._set_state(GestureState.DRAGGING_NODE)
            node.translate(drag.delta)
            logger.debug(f"Drag started on {node.node_id}")
            return

    def _handle_release(self, pointer: Optional[Vec2]) -> None:
        """Release edge: end a drag, or commit/abort a pending connection."""
        if self._state == GestureState.DRAGGING_NODE:
            logger.debug(f"Drag ended on {self._drag_target}")
            self._reset()
            return

        if self._state != GestureState.DRAWING_CONNECTION or self._pending is None:
            return

        start = self._pending.endpoint
        # Ports of the start node never end a connection, even where they
        # overlap a port of another node
        hit = self._find_port(pointer, exclude_node=start.node_id)

        if hit is None:
            own_port = self._nodes[start.node_id].port_at(pointer)
            if own_port is not None:
                self._notify_rejected(start, Endpoint(start.node_id, own_port), "same node")
            else:
                reason = "no pointer sample" if pointer is None else "released over no port"
                self._notify_rejected(start, None, reason)
        else:
            node, port_id = hit
            end = Endpoint(node.node_id, port_id)
            connection = Connection(start, end)
            try:
                self._store.append(connection)
            except InvalidConnectionError as e:
                self._notify_rejected(start, end, str(e))
            else:
                self._committed.append(connection)
                logger.debug(f"Connection created: {start} -> {end} ({len(self._store)} total)")
                self._notify_created(connection)

        self._reset()

    def _reset(self) -> None:
        self._drag_target = None
        self._pending = None
        self._set_state(GestureState.IDLE)

    def _build_output(self, pointer: Optional[Vec2]) -> FrameOutput:
        preview = None
        if self._state == GestureState.DRAWING_CONNECTION and self._pending is not None:
            start = self._pending.position
            preview = Segment(start, pointer if pointer is not None else start)

        return FrameOutput(
            state=self._state,
            nodes=tuple(NodeView.of(node) for node in self._nodes.values()),
            connections=self._store.all(),
            segments=tuple(Segment(start, end) for start, end in self._store.segments(self._nodes)),
            preview=preview,
            committed=tuple(self._committed),
            drag_target=self._drag_target,
            pending=self._pending,
            primary_down=self._primary_down,
            last_click=self._last_click,
            last_click_on_port=self._last_click_on_port,
        )
