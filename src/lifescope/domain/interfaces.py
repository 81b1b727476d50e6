from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from lifescope.domain.enums import Lifetime
from lifescope.domain.models import Registration, ResolverOptions

T = TypeVar("T")


class IServiceResolver(ABC):
    """Abstract interface for a disposable resolver built from a service collection.

    Usable as a context manager: leaving the ``with`` block releases the resolver.
    """

    @abstractmethod
    def resolve(self, contract: Type[T]) -> T:
        """Resolve and return an instance of the requested contract.

        Args:
            contract: The type to resolve.

        Raises:
            UnresolvableError: If the contract is not registered.
            DisposedResolverError: If the resolver was released.
        """

    @abstractmethod
    def release(self) -> None:
        """Close every instance owned by this resolver and mark it disposed.

        Raises:
            DisposedResolverError: If the resolver was already released.
        """

    @property
    @abstractmethod
    def is_disposed(self) -> bool:
        """Whether :meth:`release` has been called."""

    def __enter__(self) -> "IServiceResolver":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.release()
        return False


class IServiceCollection(ABC):
    """Abstract interface for the registration side of a container."""

    @abstractmethod
    def register(
        self,
        contract: Type,
        builder: Callable[[IServiceResolver], Any],
        lifetime: Lifetime,
    ) -> "IServiceCollection":
        """Add or replace the registration of a contract.

        Args:
            contract: The type consumers ask for.
            builder: Factory receiving the resolver and returning an instance.
            lifetime: How long built instances live.
        """

    @abstractmethod
    def register_type(self, contract: Type, implementation: Type, lifetime: Lifetime) -> "IServiceCollection":
        """Register an implementation class built by constructor injection.

        Raises:
            RegistrationError: If ``implementation`` does not satisfy ``contract``.
        """

    @abstractmethod
    def register_instance(self, contract: Type[T], instance: T) -> "IServiceCollection":
        """Register a pre-built, externally owned singleton."""

    @abstractmethod
    def get_registration(self, contract: Type) -> Optional[Registration]:
        """Return the registration for a contract, or None."""

    @abstractmethod
    def get_registry_copy(self) -> Dict[Type, Registration]:
        """Get a copy of the current registrations."""

    @abstractmethod
    def build_resolver(self, options: Optional[ResolverOptions] = None) -> IServiceResolver:
        """Materialize a resolver from a snapshot of the current registrations.

        Args:
            options: Build options; defaults to ``ResolverOptions()``.
        """


class IConstructorInjector(ABC):
    """Abstract interface for building classes from their annotated constructors."""

    @abstractmethod
    def get_dependencies(self, implementation: Type) -> Dict[str, Type]:
        """Map each injectable constructor parameter to its annotated contract.

        Raises:
            UnresolvableError: If a required parameter lacks a type hint.
        """

    @abstractmethod
    def create(self, implementation: Type[T], resolver: IServiceResolver) -> T:
        """Resolve constructor dependencies from ``resolver`` and build the instance.

        Raises:
            UnresolvableError: If a dependency cannot be resolved.
        """
