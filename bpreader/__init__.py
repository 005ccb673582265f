"""
Package initializer for bpreader.
"""

__version__ = "1.0.0"

# Engine version, written to the "meta" block of exported JSON
ENGINE_VERSION = __version__

__all__ = ["__version__", "ENGINE_VERSION"]
