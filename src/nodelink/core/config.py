"""
Centralized Configuration for NodeLink.

This module provides a single source of truth for the startup and
display settings of the editor. The interaction core itself takes
plain arguments; only the startup diagram and the host shell read
these values.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class InteractionConfig:
    """Hit-testing configuration values."""

    # Port hit radius (world units)
    port_radius: float = 10.0


@dataclass
class NodeConfig:
    """Default node geometry."""

    default_width: float = 100.0
    default_height: float = 100.0


@dataclass
class UIConfig:
    """UI-related configuration values."""

    # Window dimensions
    window_width: int = 800
    window_height: int = 600
    window_title: str = "Connected Boxes"

    # Frame loop interval (milliseconds), ~60 fps
    frame_interval_ms: int = 16

    # Debug text panel above the canvas
    show_debug_panel: bool = True

    # Connection and preview stroke width
    line_width: float = 2.0


@dataclass
class PathConfig:
    """Path-related configuration values."""

    user_config_dir: Path = field(default_factory=lambda: Path.home() / ".nodelink")


@dataclass
class NodeLinkConfig:
    """Main configuration container for NodeLink."""

    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    nodes: NodeConfig = field(default_factory=NodeConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    paths: PathConfig = field(default_factory=PathConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "interaction": {
                "port_radius": self.interaction.port_radius,
            },
            "nodes": {
                "default_width": self.nodes.default_width,
                "default_height": self.nodes.default_height,
            },
            "ui": {
                "window_width": self.ui.window_width,
                "window_height": self.ui.window_height,
                "window_title": self.ui.window_title,
                "frame_interval_ms": self.ui.frame_interval_ms,
                "show_debug_panel": self.ui.show_debug_panel,
                "line_width": self.ui.line_width,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NodeLinkConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        config = cls()

        sections = {
            "interaction": config.interaction,
            "nodes": config.nodes,
            "ui": config.ui,
        }
        for section_name, section in sections.items():
            for key, value in data.get(section_name, {}).items():
                if hasattr(section, key):
                    setattr(section, key, value)

        return config

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = self.paths.user_config_dir / "config.json"

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "NodeLinkConfig":
        """Load configuration from file, using defaults if not found."""
        config = cls()

        if path is None:
            path = config.paths.user_config_dir / "config.json"

        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                config = cls.from_dict(data)
                logger.info(f"Configuration loaded from {path}")
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load configuration from {path}: {e}")
                logger.info("Using default configuration")

        return config

