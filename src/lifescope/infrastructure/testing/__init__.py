"""
Testing utilities module.

Provides helpers for testing code that uses lifescope.
"""

from .utilities import RecordingServiceCollection, create_mock_collection

__all__ = [
    "RecordingServiceCollection",
    "create_mock_collection",
]
