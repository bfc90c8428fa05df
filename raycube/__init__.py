"""Ray-casting maze explorer for .cub map files: parsing, game state and rendering."""

__version__ = "0.1.0"
__all__ = ["__version__"]