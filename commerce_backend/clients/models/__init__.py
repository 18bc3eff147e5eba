"""
PATH: clients/models/__init__.py

Clients models export surface.
"""

from .client import Client

__all__ = ["Client"]
