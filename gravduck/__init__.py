"""A gravity-flipping tile puzzle platformer built on pygame."""

__version__ = "0.1.0"
__all__ = ["__version__"]