"""Textured ray-casting maze explorer for .cub map files with XPM wall textures."""

__version__ = "0.1.0"
__all__ = ["colors", "xpm", "mapfile", "player", "raycast", "render", "game"]