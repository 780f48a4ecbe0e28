"""
NodeLink Main Entry Point

Launches the diagram editor window.

Usage:
    python -m nodelink                  # Default two-box diagram
    python -m nodelink --debug          # Enable debug logging
    python -m nodelink --config path    # Use a specific config file
    python -m nodelink --save-config    # Write the effective config and exit
"""

import argparse
import logging
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

# Configure logging before importing NodeLink modules
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)

logger = logging.getLogger("nodelink")


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="nodelink",
        description="NodeLink - Interactive node-link diagram editor",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Load configuration from this file instead of ~/.nodelink/config.json",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Write the effective configuration to the config file and exit",
    )
    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """Configure logging level."""
    level = logging.DEBUG if debug else logging.INFO
    logging.getLogger("nodelink").setLevel(level)

    if debug:
        for name in ["nodelink.core", "nodelink.gui"]:
            logging.getLogger(name).setLevel(logging.DEBUG)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.debug)

    from nodelink.core.config import NodeLinkConfig
    from nodelink.core.diagram import build_default_diagram
    from nodelink.gui.main_window import MainWindow

    config = NodeLinkConfig.load(args.config)

    if args.save_config:
        try:
            config.save(args.config)
        except OSError as e:
            logger.error(f"Could not save configuration: {e}")
            return 1
        return 0

    logger.info("Starting NodeLink...")

    app = QApplication(sys.argv)
    app.setApplicationName("NodeLink")

    try:
        controller = build_default_diagram(config)
        controller.on_connection_created(
            lambda c: logger.info(f"Connection created: {c.start} -> {c.end}")
        )
        window = MainWindow(controller, config)
        window.show()
    except Exception as e:
        logger.exception(f"Initialization error: {e}")
        return 1

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
