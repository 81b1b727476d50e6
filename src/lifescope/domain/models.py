from typing import TYPE_CHECKING, Any, Callable, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from lifescope.domain.enums import Lifetime

if TYPE_CHECKING:
    from lifescope.domain.interfaces import IServiceResolver


class Registration(BaseModel):
    """Value object describing how a contract is built.

    Attributes:
        contract: The type consumers ask for.
        builder: Factory function that receives the resolver and returns an instance.
        lifetime: How long the built instance should live.
        implementation: Concrete type behind the builder, when registered from a type.
        externally_owned: Whether the instance was built outside the resolver.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    contract: Type = Field(..., description="The contract being registered.")
    builder: Callable[["IServiceResolver"], Any] = Field(
        ..., description="The builder function to create an instance of the contract."
    )
    lifetime: Lifetime = Field(..., description="The lifetime of the registered contract.")
    implementation: Optional[Type] = Field(
        default=None,
        description="Implementation type built by constructor injection, if any.",
    )
    externally_owned: bool = Field(
        default=False,
        description="Pre-built instances are never closed by the resolver.",
    )


class ResolverOptions(BaseModel):
    """Options applied when a resolver is built from a service collection.

    Attributes:
        validate_lifetimes: Reject singletons that depend on transients at build time.
    """

    model_config = ConfigDict(frozen=True)

    validate_lifetimes: bool = Field(
        default=True,
        description="Reject singleton registrations that capture transient dependencies.",
    )
