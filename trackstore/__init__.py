"""Music track metadata and audio storage backed by JSON files on disk."""

__version__ = "1.0.0"
