import logging
from typing import Awaitable, Callable, Iterator, Optional, Type, TypeVar

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from lifescope.application.lifetime_policy import get_service_instance, register_with_default_lifetime
from lifescope.domain import IServiceCollection, IServiceResolver, ResolverOptions

T = TypeVar("T")

logger = logging.getLogger(__name__)


def create_instance_dependency(
    services: IServiceCollection,
    contract: Type[T],
    implementation: Optional[Type[T]] = None,
    options: Optional[ResolverOptions] = None,
) -> Callable[[], Iterator[T]]:
    """Create a FastAPI Depends() generator yielding one instance per request.

    ``implementation`` is registered for ``contract`` with the default transient
    lifetime once, when the dependency is created. Each request then builds its
    own resolver, receives the resolved instance and has the resolver released
    when the request finishes, successfully or not.

    Args:
        services: The collection to register into and build resolvers from.
        contract: The type the endpoint receives.
        implementation: Class satisfying ``contract``; omitted means ``contract`` itself,
            added only if ``contract`` has no registration yet.
        options: Options for each per-request resolver.

    Returns:
        A generator function that FastAPI can use with Depends().

    Example:
        >>> services = ServiceCollection()
        >>> get_greeter = create_instance_dependency(services, Greeter, EnglishGreeter)
        >>>
        >>> @app.get("/greet")
        >>> def greet(greeter: Greeter = Depends(get_greeter)):
        ...     return {"message": greeter.greet()}
    """
    register_with_default_lifetime(services, contract, implementation)

    def dependency() -> Iterator[T]:
        """Resolve the instance and release its resolver after the request."""
        resolver, instance = get_service_instance(services, contract, options)
        with resolver:
            yield instance

    return dependency


def create_request_dependency(contract: Type[T]) -> Callable[[Request], T]:
    """Create a FastAPI dependency that resolves from the request's resolver.

    Requires the ResolverMiddleware to be installed. All dependencies created this
    way share one resolver per request, so singletons are shared within the request
    and every disposable is closed when the request ends.

    Args:
        contract: The type to resolve from the request's resolver.

    Returns:
        A callable that resolves from the request-scoped resolver.

    Example:
        >>> app.add_middleware(ResolverMiddleware, services=services)
        >>>
        >>> get_unit_of_work = create_request_dependency(UnitOfWork)
        >>>
        >>> @app.post("/orders")
        >>> async def create_order(uow: UnitOfWork = Depends(get_unit_of_work)):
        ...     ...
    """

    def request_dependency(request: Request) -> T:
        """Resolve from the request's resolver."""
        if not hasattr(request.state, "di_resolver"):
            raise RuntimeError("Request does not have a DI resolver. Did you forget to add ResolverMiddleware?")
        resolver: IServiceResolver = request.state.di_resolver
        return resolver.resolve(contract)

    return request_dependency


class ResolverMiddleware(BaseHTTPMiddleware):
    """Middleware that builds one resolver per request and releases it afterwards.

    The resolver is accessible via `request.state.di_resolver`.

    The resolver is released as soon as ``call_next`` returns the response
    object. For a ``StreamingResponse`` that is before the body is sent, so
    instances the body generator uses are already closed while it streams.
    Streaming endpoints must build and release their own resolver.

    Attributes:
        services: The collection resolvers are built from.
        options: Options for each per-request resolver.
    """

    def __init__(self, app: FastAPI, services: IServiceCollection, options: Optional[ResolverOptions] = None):
        """Initialize the middleware with the collection to build resolvers from.

        Args:
            app: The FastAPI/Starlette application.
            services: The collection resolvers are built from.
            options: Options for each per-request resolver.
        """
        super().__init__(app)
        self.services = services
        self.options = options

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Build a resolver for the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        resolver = self.services.build_resolver(self.options)
        request.state.di_resolver = resolver

        try:
            return await call_next(request)
        finally:
            logger.debug("Releasing resolver for %s %s", request.method, request.url.path)
            resolver.release()
