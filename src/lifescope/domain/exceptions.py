from typing import List, Optional, Type


def type_name(contract: object) -> str:
    """Readable name of a contract, also for non-class objects."""
    return getattr(contract, "__name__", repr(contract))


class DIException(Exception):
    """Base exception for DI-related errors."""


class RegistrationError(DIException):
    """Raised when an implementation cannot be registered for a contract.

    Attributes:
        contract: The contract the registration targeted.
        implementation: The rejected implementation.
        reason: Why the registration was rejected.
    """

    def __init__(self, contract: Type, implementation: object, reason: str) -> None:
        self.contract = contract
        self.implementation = implementation
        self.reason = reason
        super().__init__(f"Cannot register {type_name(implementation)} for {type_name(contract)}: {reason}")


class CircularDependencyError(DIException):
    """Raised when a circular dependency is detected.

    Attributes:
        dependency_chain: List of contracts involved in the circular dependency.
    """

    def __init__(self, dependency_chain: List[Type]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join([type_name(cls) for cls in dependency_chain])}"
        super().__init__(message)


class UnresolvableError(DIException):
    """Raised when a contract cannot be resolved.

    This occurs when:
    - No registration exists for the requested contract.
    - A constructor parameter lacks a type hint.
    - The registered builder fails.

    Attributes:
        contract: The contract that could not be resolved.
        reason: Optional reason for the failure.
    """

    def __init__(self, contract: Type, reason: Optional[str] = None) -> None:
        self.contract = contract
        self.reason = reason
        message = f"Cannot resolve dependency for type: {type_name(contract)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class DisposedResolverError(DIException):
    """Raised when a released resolver is used again.

    Attributes:
        operation: The operation attempted on the released resolver.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation}: the resolver has already been released")


class LifetimeError(DIException):
    """Raised when a singleton registration captures a transient dependency.

    Attributes:
        singleton: The contract registered as singleton.
        dependency: The transient contract it depends on.
        parameter: The constructor parameter holding the dependency.
    """

    def __init__(self, singleton: Type, dependency: Type, parameter: str) -> None:
        self.singleton = singleton
        self.dependency = dependency
        self.parameter = parameter
        super().__init__(
            f"Singleton {type_name(singleton)} depends on transient {type_name(dependency)} "
            f"(parameter '{parameter}'); the transient would be captured for the resolver's lifetime"
        )
