"""HTTP API for Graph Canvas."""

from .main import create_app

__all__ = ["create_app"]
