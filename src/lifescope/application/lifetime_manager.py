import logging
from typing import Any, Callable, Dict, List, Optional, Type

from lifescope.domain import DIException, Lifetime, Registration, UnresolvableError

logger = logging.getLogger(__name__)


def is_disposable(instance: Any) -> bool:
    """Return whether ``instance`` follows the ``close()`` convention."""
    return callable(getattr(instance, "close", None))


class LifetimeManager:
    """Caches singletons and owns the disposable instances of one resolver.

    Attributes:
        _singleton_cache: Singleton instances keyed by contract.
        _owned: Disposable instances built by the resolver, in construction order.
    """

    def __init__(self) -> None:
        self._singleton_cache: Dict[Type, Any] = {}
        self._owned: List[Any] = []

    def get_or_create(self, registration: Registration, factory: Callable[[], Any]) -> Any:
        """Get the cached instance or create a new one based on lifetime.

        Args:
            registration: The registration being resolved.
            factory: Function that builds a new instance.

        Returns:
            Instance according to lifetime rules:
            - Singleton: Returns cached instance or creates and caches new one
            - Transient: Always creates new instance

        Raises:
            UnresolvableError: If the factory fails with a non-DI error.
        """
        contract = registration.contract

        if registration.lifetime == Lifetime.SINGLETON:
            if contract not in self._singleton_cache:
                self._singleton_cache[contract] = self._create(registration, factory)
            return self._singleton_cache[contract]

        # Lifetime.TRANSIENT
        return self._create(registration, factory)

    def _create(self, registration: Registration, factory: Callable[[], Any]) -> Any:
        try:
            instance = factory()
        except DIException:
            raise
        except Exception as e:
            raise UnresolvableError(registration.contract, f"Failed to create instance: {str(e)}") from e

        if not registration.externally_owned and is_disposable(instance):
            self._owned.append(instance)
        return instance

    @property
    def owned_count(self) -> int:
        """Number of disposable instances awaiting disposal."""
        return len(self._owned)

    def dispose_all(self) -> None:
        """Close every owned instance in reverse construction order and clear caches.

        All instances are closed even when one ``close()`` fails; the first
        failure is re-raised afterwards.
        """
        first_error: Optional[BaseException] = None
        owned, self._owned = self._owned, []
        self._singleton_cache.clear()

        for instance in reversed(owned):
            try:
                instance.close()
            except Exception as e:
                if first_error is None:
                    first_error = e
                else:
                    logger.warning("Closing %s also failed: %s", type(instance).__name__, e)

        if first_error is not None:
            raise first_error
