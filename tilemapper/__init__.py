"""Grid-based tile map editor with profiles, a pygame interface and plain-text map files."""

__version__ = "0.1.0"