"""Unit tests for domain models."""

import pytest
from pydantic import ValidationError

from lifescope.domain.enums import Lifetime
from lifescope.domain.models import Registration, ResolverOptions


class TestRegistration:
    """Test cases for the Registration model."""

    def test_registration_creation_with_valid_data(self):
        """Test creating a Registration with valid data."""

        class TestService:
            pass

        builder = lambda r: TestService()
        registration = Registration(contract=TestService, builder=builder, lifetime=Lifetime.TRANSIENT)

        assert registration.contract is TestService
        assert registration.builder is builder
        assert registration.lifetime == Lifetime.TRANSIENT
        assert registration.implementation is None
        assert registration.externally_owned is False

    def test_registration_is_frozen(self):
        """Test that Registration is immutable (frozen)."""

        class TestService:
            pass

        registration = Registration(
            contract=TestService,
            builder=lambda r: TestService(),
            lifetime=Lifetime.SINGLETON,
        )

        with pytest.raises(ValidationError):
            registration.lifetime = Lifetime.TRANSIENT

    def test_registration_accepts_lifetime_string(self):
        """Test that lifetimes are validated from their string values."""

        class TestService:
            pass

        registration = Registration(contract=TestService, builder=lambda r: TestService(), lifetime="singleton")

        assert registration.lifetime is Lifetime.SINGLETON

    def test_registration_rejects_unknown_lifetime(self):
        """Test that an unknown lifetime is rejected."""

        class TestService:
            pass

        with pytest.raises(ValidationError):
            Registration(contract=TestService, builder=lambda r: TestService(), lifetime="scoped")

    def test_registration_requires_builder(self):
        """Test that a builder is mandatory."""

        class TestService:
            pass

        with pytest.raises(ValidationError):
            Registration(contract=TestService, lifetime=Lifetime.TRANSIENT)

    def test_registration_with_implementation(self):
        """Test that the implementation type is kept for validation."""

        class Contract:
            pass

        class Implementation(Contract):
            pass

        registration = Registration(
            contract=Contract,
            builder=lambda r: Implementation(),
            lifetime=Lifetime.TRANSIENT,
            implementation=Implementation,
        )

        assert registration.implementation is Implementation


class TestResolverOptions:
    """Test cases for the ResolverOptions model."""

    def test_lifetime_validation_is_on_by_default(self):
        """Test the default options."""
        assert ResolverOptions().validate_lifetimes is True

    def test_options_can_disable_validation(self):
        """Test turning lifetime validation off."""
        assert ResolverOptions(validate_lifetimes=False).validate_lifetimes is False

    def test_options_are_frozen(self):
        """Test that options cannot be changed after creation."""
        options = ResolverOptions()

        with pytest.raises(ValidationError):
            options.validate_lifetimes = False
