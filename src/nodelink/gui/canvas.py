"""
Diagram Canvas - The widget that hosts the interaction core.

Runs the frame loop on a QTimer: each frame samples the pointer,
ticks the controller once, and repaints from the returned snapshot.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QPointF, QRectF, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QMouseEvent, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from nodelink.core.config import UIConfig
from nodelink.core.interaction import FrameOutput, InteractionController
from nodelink.core.types import GestureState, Vec2
from nodelink.gui.input_sampler import PointerSampler

logger = logging.getLogger(__name__)


def to_vec2(point: QPointF) -> Vec2:
    return Vec2(point.x(), point.y())


def to_qpointf(point: Vec2) -> QPointF:
    return QPointF(point.x, point.y)


class DiagramCanvas(QWidget):
    """
    Canvas that draws nodes, ports, connections and the preview line.

    All interaction decisions are made by the InteractionController;
    this widget only forwards pointer events and paints.
    """

    # Signals
    frame_rendered = pyqtSignal(object)  # FrameOutput

    # Colors
    BACKGROUND_COLOR = QColor(27, 27, 27)
    NODE_COLORS = [
        QColor(100, 150, 250),
        QColor(150, 100, 250),
    ]
    PORT_COLOR = QColor(255, 255, 255)
    LINE_COLOR = QColor(255, 255, 255)
    PREVIEW_COLOR = QColor(255, 255, 255)

    def __init__(
        self,
        controller: InteractionController,
        config: Optional[UIConfig] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)

        self._controller = controller
        self._config = config or UIConfig()
        self._sampler = PointerSampler()
        self._output: FrameOutput = controller.snapshot()
        self._sampler.set_bodies(self._output.nodes)

        self.setMouseTracking(True)
        self.setMinimumSize(200, 150)
        controller.on_state_change(self._on_state_change)

        # Frame loop
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_frame)
        self._timer.start(self._config.frame_interval_ms)

    def stop(self) -> None:
        """Stop the frame loop."""
        self._timer.stop()

    def _on_frame(self) -> None:
        """Tick the controller with this frame's pointer snapshot."""
        frame = self._sampler.sample()
        self._output = self._controller.tick(frame)
        self._sampler.set_bodies(self._output.nodes)
        self.frame_rendered.emit(self._output)
        self.update()

    def _on_state_change(self, old_state: GestureState, new_state: GestureState) -> None:
        """Show what the current gesture does."""
        if new_state == GestureState.DRAGGING_NODE:
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
        elif new_state == GestureState.DRAWING_CONNECTION:
            self.setCursor(Qt.CursorShape.CrossCursor)
        else:
            self.unsetCursor()

    # Event handlers
    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        self._sampler.move(to_vec2(event.position()))
        super().mouseMoveEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._sampler.press(to_vec2(event.position()))
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._sampler.release(to_vec2(event.position()))
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def leaveEvent(self, event) -> None:
        self._sampler.leave()
        super().leaveEvent(event)

    def focusOutEvent(self, event) -> None:
        """Drop any gesture when the window loses focus mid-drag."""
        if self._controller.state.is_active:
            logger.debug("Focus lost, cancelling gesture")
            self._controller.cancel()
        super().focusOutEvent(event)

    def paintEvent(self, event) -> None:
        """Paint the current snapshot."""
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), self.BACKGROUND_COLOR)

        output = self._output

        # Boxes
        painter.setPen(Qt.PenStyle.NoPen)
        for index, view in enumerate(output.nodes):
            color = self.NODE_COLORS[index % len(self.NODE_COLORS)]
            painter.setBrush(QBrush(color))
            painter.drawRect(QRectF(view.position.x, view.position.y, view.size.x, view.size.y))

        # Ports
        painter.setBrush(QBrush(self.PORT_COLOR))
        for view in output.nodes:
            for port in view.ports:
                painter.drawEllipse(to_qpointf(port.center), port.radius, port.radius)

        # Committed connections
        pen = QPen(self.LINE_COLOR, self._config.line_width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        for segment in output.segments:
            painter.drawLine(to_qpointf(segment.start), to_qpointf(segment.end))

        # Preview while drawing a connection
        if output.preview is not None:
            pen = QPen(self.PREVIEW_COLOR, self._config.line_width)
            pen.setStyle(Qt.PenStyle.DashLine)
            painter.setPen(pen)
            painter.drawLine(to_qpointf(output.preview.start), to_qpointf(output.preview.end))

        painter.end()
