"""
HTTP surface for medicine lookups.
"""

from .server import create_app

__all__ = ["create_app"]
