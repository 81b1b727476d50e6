"""
Domain layer - Core models and contracts.

This layer contains the lifetime tag, the error taxonomy and the capability
contracts the lifetime-policy helpers consume. It has no dependencies on other layers.
"""

from .enums import Lifetime
from .exceptions import (
    CircularDependencyError,
    DIException,
    DisposedResolverError,
    LifetimeError,
    RegistrationError,
    UnresolvableError,
)
from .interfaces import IConstructorInjector, IServiceCollection, IServiceResolver
from .models import Registration, ResolverOptions

# Rebuild Pydantic models to resolve forward references
Registration.model_rebuild()

__all__ = [
    # Enums
    "Lifetime",
    # Exceptions
    "DIException",
    "CircularDependencyError",
    "DisposedResolverError",
    "LifetimeError",
    "RegistrationError",
    "UnresolvableError",
    # Interfaces
    "IConstructorInjector",
    "IServiceCollection",
    "IServiceResolver",
    # Models
    "Registration",
    "ResolverOptions",
]
