"""
Testing utilities module.

Provides helpers and utilities for testing applications using wirebox.
"""

from .utilities import TestContainer, create_mock_container

__all__ = [
    "TestContainer",
    "create_mock_container",
]
