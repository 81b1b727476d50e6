"""Unit tests for domain enums."""

from lifescope.domain.enums import Lifetime


class TestLifetime:
    """Test cases for the Lifetime enum."""

    def test_lifetime_has_transient_and_singleton(self):
        """Test that only the transient and singleton lifetimes exist."""
        assert {member.name for member in Lifetime} == {"TRANSIENT", "SINGLETON"}

    def test_lifetime_values(self):
        """Test the string values of each lifetime."""
        assert Lifetime.TRANSIENT.value == "transient"
        assert Lifetime.SINGLETON.value == "singleton"

    def test_lifetime_str_returns_value(self):
        """Test that str() gives the plain value."""
        assert str(Lifetime.TRANSIENT) == "transient"
        assert f"{Lifetime.SINGLETON}" == "singleton"

    def test_lifetime_is_string_enum(self):
        """Test that lifetimes compare equal to their string values."""
        assert Lifetime.TRANSIENT == "transient"
        assert Lifetime("singleton") is Lifetime.SINGLETON
