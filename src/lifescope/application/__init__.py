"""
Application layer - Lifetime policy and the reference host container.

This layer contains the lifetime-policy helpers and the collection/resolver
pair they run against by default. It depends only on the Domain layer.
"""

from .circular_detector import CircularDependencyDetector
from .constructor_injector import ConstructorInjector
from .lifetime_manager import LifetimeManager, is_disposable
from .lifetime_policy import (
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
from .lifetime_validator import LifetimeValidator
from .service_collection import ServiceCollection
from .service_resolver import ServiceResolver

__all__ = [
    # Host container
    "ServiceCollection",
    "ServiceResolver",
    "ConstructorInjector",
    "LifetimeManager",
    "LifetimeValidator",
    "CircularDependencyDetector",
    "is_disposable",
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
]
