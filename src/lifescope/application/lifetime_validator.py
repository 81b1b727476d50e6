from typing import Dict, Type

from lifescope.domain import IConstructorInjector, Lifetime, LifetimeError, Registration, UnresolvableError


class LifetimeValidator:
    """Rejects registration graphs in which a singleton captures a transient.

    Only registrations made from an implementation type can be inspected;
    builder-function registrations are opaque and skipped. So are types whose
    constructor cannot be inspected: resolving them reports the problem.
    """

    def __init__(self, injector: IConstructorInjector) -> None:
        self._injector = injector

    def validate(self, registry: Dict[Type, Registration]) -> None:
        """Check every singleton's direct constructor dependencies.

        Args:
            registry: The registrations a resolver is about to be built from.

        Raises:
            LifetimeError: On the first singleton depending on a transient contract.
        """
        for contract, registration in registry.items():
            if registration.lifetime != Lifetime.SINGLETON or registration.implementation is None:
                continue

            try:
                dependencies = self._injector.get_dependencies(registration.implementation)
            except UnresolvableError:
                continue

            for parameter, dependency in dependencies.items():
                dependency_registration = registry.get(dependency)
                if dependency_registration is not None and dependency_registration.lifetime == Lifetime.TRANSIENT:
                    raise LifetimeError(contract, dependency, parameter)
