"""Rendering and console output."""

from .display_utils import DisplayUtils
from .renderer import Renderer
from .tail_display import TailDisplay

__all__ = ["DisplayUtils", "Renderer", "TailDisplay"]
