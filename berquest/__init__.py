"""A tile-based puzzle game played on .ber maps, with map checking, XPM loading and a pygame window."""

__version__ = "0.1.0"
__all__ = ["__version__"]