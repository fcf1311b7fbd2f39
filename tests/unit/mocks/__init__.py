"""Mock classes for unit testing step definers."""

from .mock_host import MockHost

__all__ = [
    "MockHost",
]
