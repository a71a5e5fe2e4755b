"""Markdown rendering of package documentation."""

from .newlines import MultiNewlineEliminator, collapse_newlines
from .renderer import Renderer, create_environment

__all__ = ["MultiNewlineEliminator", "Renderer", "collapse_newlines", "create_environment"]
