"""
lifescope: Transient-by-default registration and scoped resolution helpers.

Public API exports for the lifescope package.
"""

# Application exports
from lifescope.application.lifetime_policy import (
    build_resolver_async,
    get_added_instance,
    get_service_instance,
    register_self,
    register_with_default_lifetime,
    resolve_and_dispose,
    resolve_keeping_resolver_open,
    use_instance,
    use_instance_async,
)
from lifescope.application.service_collection import ServiceCollection
from lifescope.application.service_resolver import ServiceResolver

# Domain exports
from lifescope.domain.enums import Lifetime
from lifescope.domain.exceptions import (
    CircularDependencyError,
    DIException,
    DisposedResolverError,
    LifetimeError,
    RegistrationError,
    UnresolvableError,
)
from lifescope.domain.interfaces import IServiceCollection, IServiceResolver
from lifescope.domain.models import ResolverOptions

__version__ = "0.1.0"

__all__ = [
    # Container
    "ServiceCollection",
    "ServiceResolver",
    "IServiceCollection",
    "IServiceResolver",
    "ResolverOptions",
    # Lifetime policy
    "register_self",
    "register_with_default_lifetime",
    "get_service_instance",
    "resolve_keeping_resolver_open",
    "get_added_instance",
    "resolve_and_dispose",
    "use_instance",
    "use_instance_async",
    "build_resolver_async",
    # Enums
    "Lifetime",
    # Exceptions
    "DIException",
    "CircularDependencyError",
    "DisposedResolverError",
    "LifetimeError",
    "RegistrationError",
    "UnresolvableError",
]
