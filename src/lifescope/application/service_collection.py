import logging
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from lifescope.application.constructor_injector import ConstructorInjector
from lifescope.application.lifetime_validator import LifetimeValidator
from lifescope.application.service_resolver import ServiceResolver
from lifescope.domain import (
    IConstructorInjector,
    IServiceCollection,
    IServiceResolver,
    Lifetime,
    Registration,
    RegistrationError,
    ResolverOptions,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ServiceCollection(IServiceCollection):
    """Registration table from which resolvers are built.

    Registering a contract that is already registered replaces the previous
    registration: the last registration wins.

    Attributes:
        _registry: Dictionary mapping contracts to their registrations.
        _injector: Component building implementation types by constructor injection.
    """

    def __init__(self) -> None:
        """Initialize an empty service collection."""
        self._registry: Dict[Type, Registration] = {}
        self._injector: IConstructorInjector = ConstructorInjector()

    def _add(self, registration: Registration) -> "ServiceCollection":
        previous = self._registry.get(registration.contract)
        if previous is not None:
            logger.debug(
                "Replacing %s registration of %s with %s",
                previous.lifetime,
                registration.contract.__name__,
                registration.lifetime,
            )
        self._registry[registration.contract] = registration
        return self

    def register(
        self,
        contract: Type,
        builder: Callable[[IServiceResolver], Any],
        lifetime: Lifetime,
    ) -> "ServiceCollection":
        """Add or replace the registration of a contract.

        Args:
            contract: The type consumers ask for.
            builder: Factory receiving the resolver and returning an instance.
            lifetime: How long built instances live.

        Returns:
            This collection, for chaining.

        Example:
            >>> services.register(Clock, lambda r: SystemClock(), Lifetime.SINGLETON)
        """
        return self._add(Registration(contract=contract, builder=builder, lifetime=lifetime))

    def register_type(self, contract: Type, implementation: Type, lifetime: Lifetime) -> "ServiceCollection":
        """Register an implementation class built by constructor injection.

        Args:
            contract: The type consumers ask for.
            implementation: Class that is ``contract`` or a subclass of it.
            lifetime: How long built instances live.

        Raises:
            RegistrationError: If ``implementation`` does not satisfy ``contract``.

        Example:
            >>> services.register_type(Greeter, EnglishGreeter, Lifetime.TRANSIENT)
        """
        if not isinstance(implementation, type):
            raise RegistrationError(contract, implementation, "implementation must be a class")
        try:
            satisfied = issubclass(implementation, contract)
        except TypeError as e:
            # Protocols must be runtime_checkable to support issubclass()
            raise RegistrationError(contract, implementation, str(e)) from e
        if not satisfied:
            raise RegistrationError(contract, implementation, f"not a subclass of {contract.__name__}")

        injector = self._injector
        return self._add(
            Registration(
                contract=contract,
                builder=lambda resolver: injector.create(implementation, resolver),
                lifetime=lifetime,
                implementation=implementation,
            )
        )

    def register_instance(self, contract: Type[T], instance: T) -> "ServiceCollection":
        """Register a pre-built singleton the resolver will never close.

        Args:
            contract: The type consumers ask for.
            instance: The exact object every resolution returns.
        """
        return self._add(
            Registration(
                contract=contract,
                builder=lambda resolver: instance,
                lifetime=Lifetime.SINGLETON,
                externally_owned=True,
            )
        )

    def register_singletons(self, dependencies: Dict[Type, Callable[[IServiceResolver], Any]]) -> "ServiceCollection":
        """Register multiple singleton builders at once.

        Example:
            >>> services.register_singletons({
            ...     DatabaseConfig: lambda r: DatabaseConfig.from_env(),
            ...     DatabaseConnection: lambda r: DatabaseConnection(r.resolve(DatabaseConfig)),
            ... })
        """
        for contract, builder in dependencies.items():
            self.register(contract, builder, Lifetime.SINGLETON)
        return self

    def register_transients(self, dependencies: Dict[Type, Callable[[IServiceResolver], Any]]) -> "ServiceCollection":
        """Register multiple transient builders at once."""
        for contract, builder in dependencies.items():
            self.register(contract, builder, Lifetime.TRANSIENT)
        return self

    def get_registration(self, contract: Type) -> Optional[Registration]:
        return self._registry.get(contract)

    def get_registry_copy(self) -> Dict[Type, Registration]:
        """Get a copy of the registry for building resolvers.

        Returns:
            Copy of the current registry.
        """
        return self._registry.copy()

    def build_resolver(self, options: Optional[ResolverOptions] = None) -> ServiceResolver:
        """Materialize a resolver from a snapshot of the current registrations.

        Registrations added afterwards do not affect the returned resolver.

        Args:
            options: Build options; defaults to ``ResolverOptions()``.

        Raises:
            LifetimeError: If lifetime validation is on and a singleton captures a transient.
        """
        options = options or ResolverOptions()
        registry = self.get_registry_copy()

        if options.validate_lifetimes:
            LifetimeValidator(self._injector).validate(registry)

        logger.debug("Building resolver over %d registration(s)", len(registry))
        return ServiceResolver(registry)

    def __contains__(self, contract: object) -> bool:
        return contract in self._registry

    def __len__(self) -> int:
        return len(self._registry)
