"""
Centralized Type Definitions for NodeLink.

This module provides the small value types and enums shared by the
core: 2D vectors, port anchor rules and gesture states.
"""

from dataclasses import dataclass
from enum import Enum, auto


@dataclass(frozen=True)
class Vec2:
    """Immutable 2D point/vector in world coordinates."""
    x: float
    y: float

    @classmethod
    def zero(cls) -> "Vec2":
        return cls(0.0, 0.0)

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y


class PortAnchor(Enum):
    """
    Where a port sits on its node's rectangle.

    The anchor is the port's fixed offset rule: the port's world center
    is always the node's top-left position plus ``offset(size)``.
    """
    LEFT_CENTER = "left-center"
    RIGHT_CENTER = "right-center"
    TOP_CENTER = "top-center"
    BOTTOM_CENTER = "bottom-center"
    BOX_CENTER = "box-center"

    def offset(self, size: Vec2) -> Vec2:
        """Offset of the port center from the node's top-left corner."""
        if self == PortAnchor.LEFT_CENTER:
            return Vec2(0.0, size.y / 2.0)
        if self == PortAnchor.RIGHT_CENTER:
            return Vec2(size.x, size.y / 2.0)
        if self == PortAnchor.TOP_CENTER:
            return Vec2(size.x / 2.0, 0.0)
        if self == PortAnchor.BOTTOM_CENTER:
            return Vec2(size.x / 2.0, size.y)
        return Vec2(size.x / 2.0, size.y / 2.0)


class GestureState(Enum):
    """
    State of the single-pointer gesture state machine.

    A gesture (press -> hold -> release) is interpreted as exactly one
    of these; IDLE covers both "no gesture" and the no-op gesture.
    """
    IDLE = auto()
    DRAGGING_NODE = auto()
    DRAWING_CONNECTION = auto()

    @property
    def is_active(self) -> bool:
        """Whether a multi-frame gesture is in progress."""
        return self != GestureState.IDLE
