"""Base classes and shared interfaces."""

from .connection import BaseConnection

__all__ = [
    "BaseConnection",
]
