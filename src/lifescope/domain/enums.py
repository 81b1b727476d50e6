from enum import Enum


class Lifetime(str, Enum):
    """Defines how long a resolved instance lives.

    Attributes:
        TRANSIENT: New instance created on each resolution.
        SINGLETON: One instance per resolver, shared by every resolution.
    """

    TRANSIENT = "transient"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value
