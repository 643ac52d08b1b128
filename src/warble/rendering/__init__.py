"""Fragment rendering: kida environment and the before/view/after renderer."""

from warble.rendering.environment import create_environment
from warble.rendering.renderer import Renderer, language_prefix

__all__ = ["Renderer", "create_environment", "language_prefix"]
