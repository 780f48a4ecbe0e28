"""
Main Window - The primary PyQt6 window for NodeLink.

Hosts the diagram canvas and a debug text panel showing the pointer
and gesture state of the last frame.
"""

import logging
from typing import List, Optional

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)

from nodelink.core.config import NodeLinkConfig
from nodelink.core.interaction import FrameOutput, InteractionController
from nodelink.gui.canvas import DiagramCanvas

logger = logging.getLogger(__name__)


def describe_frame(output: FrameOutput) -> List[str]:
    """Debug panel lines for a frame."""
    lines = [f"Mouse1 pressed: {output.primary_down}"]
    if output.last_click is not None:
        lines.append(f"Last Mouse1 click: ({output.last_click.x:.1f}, {output.last_click.y:.1f})")
    lines.append(f"Last click on port: {output.last_click_on_port}")
    lines.append(f"State: {output.state.name}")
    if output.drag_target is not None:
        lines.append(f"Dragging: {output.node(output.drag_target).title}")
    if output.pending is not None:
        lines.append(f"Connecting from: {output.node(output.pending.node_id).title}")
    for view in output.nodes:
        lines.append(f"{view.title} position: ({view.position.x:.1f}, {view.position.y:.1f})")
    lines.append(f"Connections: {len(output.connections)}")
    return lines


class DebugPanel(QWidget):
    """Row of labels mirroring the last frame's state."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._layout = QHBoxLayout(self)
        self._layout.setContentsMargins(6, 4, 6, 4)
        self._labels: List[QLabel] = []

    def update_frame(self, output: FrameOutput) -> None:
        lines = describe_frame(output)

        while len(self._labels) < len(lines):
            label = QLabel(self)
            self._layout.addWidget(label)
            self._labels.append(label)

        for label, text in zip(self._labels, lines):
            label.setText(text)
            label.show()
        for label in self._labels[len(lines):]:
            label.hide()


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, controller: InteractionController, config: Optional[NodeLinkConfig] = None):
        super().__init__()

        self._config = config or NodeLinkConfig()

        self.setWindowTitle(self._config.ui.window_title)
        self.resize(self._config.ui.window_width, self._config.ui.window_height)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._debug_panel: Optional[DebugPanel] = None
        if self._config.ui.show_debug_panel:
            self._debug_panel = DebugPanel(central)
            layout.addWidget(self._debug_panel)

        self._canvas = DiagramCanvas(controller, self._config.ui, central)
        layout.addWidget(self._canvas, 1)
        self.setCentralWidget(central)

        self._canvas.frame_rendered.connect(self._on_frame_rendered)
        controller.on_connection_rejected(self._on_connection_rejected)

    def _on_frame_rendered(self, output: FrameOutput) -> None:
        if self._debug_panel is not None:
            self._debug_panel.update_frame(output)
        for connection in output.committed:
            self.statusBar().showMessage(
                f"Connected {connection.start} -> {connection.end}", 3000
            )

    def _on_connection_rejected(self, start, end, reason: str) -> None:
        self.statusBar().showMessage(f"No connection from {start}: {reason}", 3000)

    def closeEvent(self, event) -> None:
        self._canvas.stop()
        logger.info("Main window closed")
        super().closeEvent(event)
