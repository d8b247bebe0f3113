"""
Domain Interfaces (Ports)
"""

from .repositories import KeyValueStore
from .clients import RemoteDocumentClient

__all__ = [
    "KeyValueStore",
    "RemoteDocumentClient",
]
