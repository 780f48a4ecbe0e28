"""
Pointer Sampler - Turns raw pointer events into per-frame input.

Qt delivers mouse events whenever they happen; the interaction core
wants exactly one snapshot per frame. The sampler accumulates events
between frames, latches the press/release edges, and does the host's
own body hit testing: the node whose rectangle received the press
(topmost wins) is the active drag target until release.
"""

import logging
from typing import Dict, Optional, Sequence

from nodelink.core.geometry import point_in_rect
from nodelink.core.interaction import FrameInput, NodeDrag, NodeView
from nodelink.core.types import Vec2

logger = logging.getLogger(__name__)


class PointerSampler:
    """Accumulates pointer events and emits one FrameInput per frame."""

    def __init__(self):
        self._pointer: Optional[Vec2] = None
        self._down = False
        self._clicked = False
        self._released = False
        self._press_pos: Optional[Vec2] = None

        # Body drag tracking
        self._bodies: Sequence[NodeView] = ()
        self._grabbed: Optional[str] = None
        self._drag_anchor: Optional[Vec2] = None

    def set_bodies(self, nodes: Sequence[NodeView]) -> None:
        """Update node rectangles used for body hit testing (draw order)."""
        self._bodies = tuple(nodes)

    def body_at(self, point: Optional[Vec2]) -> Optional[str]:
        """Topmost node body under a point."""
        for view in reversed(self._bodies):
            if point_in_rect(point, view.position, view.size):
                return view.node_id
        return None

    def move(self, pos: Vec2) -> None:
        self._pointer = pos

    def press(self, pos: Vec2) -> None:
        self._pointer = pos
        self._down = True
        self._clicked = True
        self._press_pos = pos
        self._grabbed = self.body_at(pos)
        self._drag_anchor = pos if self._grabbed is not None else None

    def release(self, pos: Optional[Vec2]) -> None:
        if pos is not None:
            self._pointer = pos
        self._down = False
        self._released = True

    def leave(self) -> None:
        """Pointer left the canvas; no position until it comes back."""
        self._pointer = None

    def sample(self) -> FrameInput:
        """
        Snapshot the current frame and reset the edges.

        Returns:
            Immutable input for one controller tick
        """
        drags: Dict[str, NodeDrag] = {}
        if self._grabbed is not None:
            delta = Vec2.zero()
            if self._pointer is not None and self._drag_anchor is not None:
                delta = self._pointer - self._drag_anchor
                self._drag_anchor = self._pointer
            drags[self._grabbed] = NodeDrag(active=True, delta=delta)

        frame = FrameInput(
            pointer=self._pointer,
            primary_down=self._down,
            primary_clicked=self._clicked,
            primary_released=self._released,
            drags=drags,
            click_pos=self._press_pos if self._clicked else None,
        )

        self._clicked = False
        self._press_pos = None
        self._released = False
        if not self._down:
            self._grabbed = None
            self._drag_anchor = None

        return frame
