import logging
from typing import Dict, Type, TypeVar

from lifescope.application.circular_detector import CircularDependencyDetector
from lifescope.application.lifetime_manager import LifetimeManager
from lifescope.domain import DisposedResolverError, IServiceResolver, Registration, UnresolvableError
from lifescope.domain.exceptions import type_name

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ServiceResolver(IServiceResolver):
    """Resolver built from a snapshot of a service collection.

    Transient contracts are built on every resolution, singletons once per
    resolver. The resolver owns every disposable instance it builds and
    closes them on :meth:`release`. After release it refuses all further use.

    Attributes:
        _registry: Snapshot of the registrations this resolver was built from.
        _lifetime_manager: Component caching singletons and owning disposables.
        _circular_detector: Component detecting circular dependencies.
        _disposed: Whether the resolver has been released.

    Example:
        >>> with services.build_resolver() as resolver:
        ...     handler = resolver.resolve(RequestHandler)
        ... # handler's disposable dependencies are closed here
    """

    def __init__(self, registry: Dict[Type, Registration]) -> None:
        self._registry = registry
        self._lifetime_manager = LifetimeManager()
        self._circular_detector = CircularDependencyDetector()
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def resolve(self, contract: Type[T]) -> T:
        """Resolve and return an instance of the specified contract.

        Args:
            contract: The type to resolve.

        Returns:
            Instance of the requested contract.

        Raises:
            DisposedResolverError: If the resolver was released.
            UnresolvableError: If the contract is not registered or its builder fails.
            CircularDependencyError: If a circular dependency is detected.
        """
        if self._disposed:
            raise DisposedResolverError(f"resolve {type_name(contract)}")

        registration = self._registry.get(contract)
        if registration is None:
            raise UnresolvableError(contract, "No registration found")

        with self._circular_detector.track(contract):
            return self._lifetime_manager.get_or_create(
                registration,
                lambda: registration.builder(self),
            )

    def release(self) -> None:
        """Close owned instances in reverse construction order and mark the resolver disposed.

        Raises:
            DisposedResolverError: If the resolver was already released.
        """
        if self._disposed:
            raise DisposedResolverError("release")

        self._disposed = True
        logger.debug("Releasing resolver with %d owned instance(s)", self._lifetime_manager.owned_count)
        self._lifetime_manager.dispose_all()
