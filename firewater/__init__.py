"""A two-player cooperative grid platformer: grid, sprites, characters, game states and a pygame front end."""

__version__ = "0.1.0"
__all__ = ["__version__"]