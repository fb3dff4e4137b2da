"""
FastAPI integration module.

Provides helpers for resolving FastAPI dependencies from a wirebox container.
"""

from .integration import create_fastapi_dependency, create_fresh_dependency, provide

__all__ = [
    "create_fastapi_dependency",
    "create_fresh_dependency",
    "provide",
]
