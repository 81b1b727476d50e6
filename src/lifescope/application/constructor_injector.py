import inspect
from typing import Dict, Type, TypeVar, get_type_hints

from lifescope.domain import DIException, IConstructorInjector, IServiceResolver, UnresolvableError

T = TypeVar("T")


class ConstructorInjector(IConstructorInjector):
    """Builds implementation classes from their type-hinted constructors.

    Every ``__init__`` parameter without a default is resolved by its annotation.
    Parameters with defaults, ``*args`` and ``**kwargs`` are left alone.
    """

    def get_dependencies(self, implementation: Type) -> Dict[str, Type]:
        """Map the injectable constructor parameters of ``implementation`` to contracts.

        Args:
            implementation: The class to inspect.

        Returns:
            Parameter name to annotated contract, in declaration order.

        Raises:
            UnresolvableError: If a required parameter lacks a type hint.

        Example:
            >>> class UserService:
            ...     def __init__(self, repo: UserRepository, retries: int = 3):
            ...         ...
            >>> ConstructorInjector().get_dependencies(UserService)
            {'repo': <class 'UserRepository'>}
        """
        if implementation.__init__ is object.__init__:
            return {}

        try:
            signature = inspect.signature(implementation.__init__)
            type_hints = get_type_hints(implementation.__init__)
        except (NameError, TypeError, ValueError) as e:
            raise UnresolvableError(
                implementation,
                f"Failed to inspect constructor of {implementation.__name__}: {e}",
            ) from e

        dependencies: Dict[str, Type] = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue

            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            if param.default is not inspect.Parameter.empty:
                continue

            if param_name not in type_hints:
                raise UnresolvableError(
                    implementation,
                    f"Parameter '{param_name}' lacks type hint and has no default value.",
                )

            dependencies[param_name] = type_hints[param_name]

        return dependencies

    def create(self, implementation: Type[T], resolver: IServiceResolver) -> T:
        """Resolve constructor dependencies from ``resolver`` and build the instance.

        Args:
            implementation: The class to instantiate.
            resolver: The resolver supplying the dependencies.

        Returns:
            Instance with all dependencies injected.

        Raises:
            UnresolvableError: If a dependency cannot be resolved.
        """
        kwargs = {}
        for param_name, contract in self.get_dependencies(implementation).items():
            try:
                kwargs[param_name] = resolver.resolve(contract)
            except DIException:
                raise
            except Exception as e:
                raise UnresolvableError(
                    implementation,
                    f"Failed to resolve dependency for parameter '{param_name}': {e}",
                ) from e

        return implementation(**kwargs)
