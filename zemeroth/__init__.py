"""Rules of a hex-grid turn-based tactics game: hex maps, geometry, screens and campaigns."""

__version__ = "0.1.0"