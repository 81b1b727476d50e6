"""Lifetime-policy helpers over the service collection / resolver contract.

Every helper works against ``IServiceCollection`` and ``IServiceResolver`` only,
so any container implementing those contracts can be used.
"""

from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from lifescope.domain import IServiceCollection, IServiceResolver, Lifetime, ResolverOptions

T = TypeVar("T")
R = TypeVar("R")


def register_self(services: IServiceCollection) -> IServiceCollection:
    """Register the collection as a singleton resolvable by ``IServiceCollection``.

    Resolving ``IServiceCollection`` afterwards returns this exact object. The
    registration is externally owned, so releasing a resolver never closes it.
    Calling this twice replaces the first registration: the last one wins and no
    duplicate entry is created.

    Args:
        services: The collection to register with itself.

    Returns:
        ``services``, for chaining.
    """
    return services.register_instance(IServiceCollection, services)


def register_with_default_lifetime(
    services: IServiceCollection,
    contract: Type[T],
    implementation: Optional[Type[T]] = None,
) -> IServiceCollection:
    """Register ``implementation`` for ``contract`` with the transient lifetime.

    With an explicit ``implementation`` the registration is added or replaced. In
    the single-type form (``implementation`` omitted) the contract is registered as
    its own implementation only when it is not registered yet; an existing
    registration, and the lifetime chosen for it, is kept as is.

    Transient is the default because lifetime is a question of state: a transient
    never keeps state longer than the instance itself. A transient injected into a
    singleton is captured by it and silently lives as long as the singleton, so
    singletons should only depend on singletons, while transients may depend on
    anything. Any longer-lived registration must therefore be chosen explicitly.

    Args:
        services: The collection to register into.
        contract: The type consumers ask for.
        implementation: Class satisfying ``contract``; omitted means ``contract`` itself,
            added only if ``contract`` has no registration.

    Returns:
        ``services``, for chaining.

    Raises:
        RegistrationError: If ``implementation`` does not satisfy ``contract``.
    """
    if implementation is None:
        if services.get_registration(contract) is not None:
            return services
        implementation = contract
    return services.register_type(contract, implementation, Lifetime.TRANSIENT)


def get_service_instance(
    services: IServiceCollection,
    contract: Type[T],
    options: Optional[ResolverOptions] = None,
) -> Tuple[IServiceResolver, T]:
    """Build a resolver and resolve an already registered ``contract``.

    The caller owns the returned resolver and must release it. If resolution
    fails, the resolver is released before the error propagates.

    Returns:
        The open resolver and the resolved instance.

    Raises:
        UnresolvableError: If ``contract`` is not registered.
    """
    resolver = services.build_resolver(options)
    try:
        instance = resolver.resolve(contract)
    except BaseException:
        resolver.release()
        raise
    return resolver, instance


def resolve_keeping_resolver_open(
    services: IServiceCollection,
    contract: Type[T],
    implementation: Optional[Type[T]] = None,
    options: Optional[ResolverOptions] = None,
) -> Tuple[IServiceResolver, T]:
    """Register with the default lifetime and resolve, handing the resolver to the caller.

    Disposable instances (the resolved one and its dependencies) are not closed
    until the caller releases the returned resolver, so the instance stays valid
    for as long as the caller needs it.

    Example:
        >>> resolver, greeter = resolve_keeping_resolver_open(services, Greeter, EnglishGreeter)
        >>> with resolver:
        ...     greeter.greet()

    Returns:
        The open resolver and the resolved instance.
    """
    register_with_default_lifetime(services, contract, implementation)
    return get_service_instance(services, contract, options)


def get_added_instance(
    services: IServiceCollection,
    contract: Type[T],
    implementation: Optional[Type[T]] = None,
    options: Optional[ResolverOptions] = None,
) -> Tuple[IServiceResolver, T]:
    """Default way to get an added instance: keeps the resolver open.

    Chosen over :func:`resolve_and_dispose` to make disposal safety the default.
    """
    return resolve_keeping_resolver_open(services, contract, implementation, options)


def resolve_and_dispose(
    services: IServiceCollection,
    contract: Type[T],
    implementation: Optional[Type[T]] = None,
    options: Optional[ResolverOptions] = None,
) -> T:
    """Register with the default lifetime, resolve one instance and release the resolver.

    Warning:
        The instance escapes the resolver's disposal scope. If the instance itself
        or any of its dependencies is disposable, it has already been closed when
        this function returns, and using it is an error. Use
        :func:`resolve_keeping_resolver_open` or :func:`use_instance` to control
        when disposal happens.
    """
    resolver, instance = resolve_keeping_resolver_open(services, contract, implementation, options)
    resolver.release()
    return instance


def use_instance(
    services: IServiceCollection,
    contract: Type[T],
    callback: Callable[[T], R],
    implementation: Optional[Type[T]] = None,
    options: Optional[ResolverOptions] = None,
) -> R:
    """Resolve an instance, pass it to ``callback`` and release the resolver.

    The resolver stays open while ``callback`` runs and is released exactly once
    afterwards, whether the callback returns or raises.

    Returns:
        Whatever ``callback`` returns.

    Example:
        >>> use_instance(services, Greeter, lambda greeter: greeter.greet(), EnglishGreeter)
        'Hello'
    """
    resolver, instance = resolve_keeping_resolver_open(services, contract, implementation, options)
    with resolver:
        return callback(instance)


async def use_instance_async(
    services: IServiceCollection,
    contract: Type[T],
    callback: Callable[[T], Awaitable[R]],
    implementation: Optional[Type[T]] = None,
    options: Optional[ResolverOptions] = None,
) -> R:
    """Asynchronous :func:`use_instance`: awaits ``callback(instance)`` inside the scope.

    Registration and resolution are synchronous; only the callback suspends. The
    resolver is released after the callback finishes, fails or is cancelled.

    Returns:
        The awaited result of ``callback``.
    """
    resolver, instance = resolve_keeping_resolver_open(services, contract, implementation, options)
    with resolver:
        return await callback(instance)


async def build_resolver_async(
    pending_services: Awaitable[IServiceCollection],
    options: Optional[ResolverOptions] = None,
) -> IServiceResolver:
    """Await a service collection being prepared elsewhere and build its resolver."""
    services = await pending_services
    return services.build_resolver(options)

