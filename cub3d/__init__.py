"""Textured raycasting maze viewer: scene files, XPM textures, rendering and a pygame window."""

__version__ = "0.1.0"
__all__ = ["__version__"]