"""External API client implementations."""

from .gist_client import HttpGistClient

__all__ = [
    "HttpGistClient",
]
