"""
FastAPI integration module.

Provides request-scoped resolution for FastAPI applications using lifescope.
"""

from .integration import (
    ResolverMiddleware,
    create_instance_dependency,
    create_request_dependency,
)

__all__ = [
    "create_instance_dependency",
    "create_request_dependency",
    "ResolverMiddleware",
]
