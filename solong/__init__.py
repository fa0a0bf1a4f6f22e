"""Tile-based puzzle game: map validation, game state, XPM textures and a pygame front end."""

__version__ = "1.0.0"
__all__ = ["colors", "xpm", "mapcheck", "game", "app"]