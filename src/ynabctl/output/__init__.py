"""Output rendering."""
from .formatter import Formatter, Renderable, RenderKind, truncate

__all__ = ["Formatter", "Renderable", "RenderKind", "truncate"]
