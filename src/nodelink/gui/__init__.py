"""
NodeLink GUI - PyQt6 host shell.

Owns the frame loop and painting; the diagram logic lives in
nodelink.core.
"""

from nodelink.gui.input_sampler import PointerSampler

__all__ = ["PointerSampler"]
