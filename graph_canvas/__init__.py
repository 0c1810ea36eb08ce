"""Graph Canvas: persistence and HTTP API for a force-graph editor."""

__version__ = "1.0.0"
