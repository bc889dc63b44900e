"""Two-player split-screen tile-claiming arena game built on pygame."""

__version__ = "0.1.0"