"""Unit tests for FastAPI integration."""

import inspect

import pytest

pytest.importorskip("fastapi")

from unittest.mock import Mock

from fastapi import FastAPI, Request
from starlette.responses import Response, StreamingResponse

from lifescope.application import ServiceCollection
from lifescope.domain import Lifetime, UnresolvableError
from lifescope.infrastructure.fastapi_integration.integration import (
    ResolverMiddleware,
    create_instance_dependency,
    create_request_dependency,
)
from lifescope.infrastructure.testing import RecordingServiceCollection


class Greeter:
    def greet(self) -> str:
        return "Hello"


class Session:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class TestCreateInstanceDependency:
    """Test cases for create_instance_dependency."""

    def test_registers_with_default_lifetime_once(self):
        """Test that the registration happens when the dependency is created."""
        services = ServiceCollection()

        create_instance_dependency(services, Greeter)

        assert services.get_registration(Greeter).lifetime == Lifetime.TRANSIENT

    def test_dependency_is_generator_function(self):
        """Test that FastAPI sees a yield dependency."""
        dependency = create_instance_dependency(ServiceCollection(), Greeter)

        assert inspect.isgeneratorfunction(dependency)

    def test_dependency_yields_instance_and_releases_after(self):
        """Test the per-call resolver lifecycle."""
        services = RecordingServiceCollection()
        dependency = create_instance_dependency(services, Session)

        generator = dependency()
        session = next(generator)

        assert isinstance(session, Session)
        assert not services.last_resolver.is_disposed
        assert not session.closed

        with pytest.raises(StopIteration):
            next(generator)

        assert services.last_resolver.is_disposed
        assert session.closed

    def test_dependency_releases_when_endpoint_fails(self):
        """Test that an error thrown into the generator still releases the resolver."""
        services = RecordingServiceCollection()
        generator = create_instance_dependency(services, Session)()
        next(generator)

        with pytest.raises(ValueError):
            generator.throw(ValueError("endpoint failed"))

        assert services.last_resolver.is_disposed

    def test_each_call_gets_its_own_resolver(self):
        """Test that two requests never share a resolver or instance."""
        services = RecordingServiceCollection()
        dependency = create_instance_dependency(services, Greeter)

        first = next(dependency())
        second = next(dependency())

        assert first is not second
        assert len(services.built_resolvers) == 2


class TestCreateRequestDependency:
    """Test cases for create_request_dependency."""

    def test_resolves_from_request_resolver(self):
        """Test resolution through request.state.di_resolver."""
        services = ServiceCollection().register_type(Greeter, Greeter, Lifetime.TRANSIENT)
        request = Mock(spec=Request)
        request.state = Mock()
        request.state.di_resolver = services.build_resolver()

        greeter = create_request_dependency(Greeter)(request)

        assert greeter.greet() == "Hello"

    def test_missing_middleware_raises(self):
        """Test the error when no resolver is attached to the request."""
        request = Mock(spec=Request)
        request.state = Mock(spec=[])

        with pytest.raises(RuntimeError, match="ResolverMiddleware"):
            create_request_dependency(Greeter)(request)

    def test_unregistered_contract_surfaces(self):
        """Test that resolution errors are not swallowed."""
        request = Mock(spec=Request)
        request.state = Mock()
        request.state.di_resolver = ServiceCollection().build_resolver()

        with pytest.raises(UnresolvableError):
            create_request_dependency(Greeter)(request)


class TestResolverMiddleware:
    """Test cases for ResolverMiddleware."""

    def test_middleware_initialization(self):
        """Test that middleware initializes correctly."""
        app = FastAPI()
        services = ServiceCollection()

        middleware = ResolverMiddleware(app, services)

        assert middleware.services is services
        assert middleware.options is None
        assert middleware.app is app

    @pytest.mark.asyncio
    async def test_middleware_attaches_resolver(self):
        """Test that the request carries an open resolver during dispatch."""
        services = RecordingServiceCollection()
        middleware = ResolverMiddleware(FastAPI(), services)

        request = Mock(spec=Request)
        request.state = Mock()
        seen = []

        async def mock_call_next(req):
            seen.append(req.state.di_resolver.is_disposed)
            return Response("OK", status_code=200)

        response = await middleware.dispatch(request, mock_call_next)

        assert response.status_code == 200
        assert seen == [False]
        assert request.state.di_resolver is services.last_resolver

    @pytest.mark.asyncio
    async def test_middleware_releases_after_request(self):
        """Test that the resolver is released once the response is produced."""
        services = RecordingServiceCollection()
        middleware = ResolverMiddleware(FastAPI(), services)
        request = Mock(spec=Request)
        request.state = Mock()

        async def mock_call_next(req):
            return Response("OK", status_code=200)

        await middleware.dispatch(request, mock_call_next)

        assert services.last_resolver.is_disposed

    @pytest.mark.asyncio
    async def test_middleware_releases_on_exception(self):
        """Test that the resolver is released even when the endpoint raises."""
        services = RecordingServiceCollection()
        middleware = ResolverMiddleware(FastAPI(), services)
        request = Mock(spec=Request)
        request.state = Mock()

        async def mock_call_next(req):
            raise ValueError("Test error")

        with pytest.raises(ValueError, match="Test error"):
            await middleware.dispatch(request, mock_call_next)

        assert services.last_resolver.is_disposed
        assert services.open_resolvers() == []

    @pytest.mark.asyncio
    async def test_middleware_releases_before_streaming_body(self):
        """Test that the resolver is released once the response object exists, before any body is sent."""
        services = RecordingServiceCollection()
        middleware = ResolverMiddleware(FastAPI(), services)
        request = Mock(spec=Request)
        request.state = Mock()

        async def body():
            yield b"chunk"

        async def mock_call_next(req):
            return StreamingResponse(body())

        response = await middleware.dispatch(request, mock_call_next)

        assert isinstance(response, StreamingResponse)
        assert services.last_resolver.is_disposed
