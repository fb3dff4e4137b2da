from enum import Enum


class DefinitionKind(str, Enum):
    """Defines how a definition turns into a value.

    Attributes:
        TYPE_REFERENCE: A class (or the name of one) constructed with injected dependencies.
        FACTORY: A function invoked on every resolution.
        LITERAL: A plain value returned as-is.
        OBJECT: An already-built object returned as-is.
    """

    TYPE_REFERENCE = "type_reference"
    FACTORY = "factory"
    LITERAL = "literal"
    OBJECT = "object"

    def __str__(self) -> str:
        return self.value


class Policy(str, Enum):
    """Defines the caching policy of a resolution.

    Attributes:
        SINGLETON: One instance per id, reused by every ``get``.
        FRESH: A new instance on every ``make``, never cached.
    """

    SINGLETON = "singleton"
    FRESH = "fresh"

    def __str__(self) -> str:
        return self.value


class ProviderState(str, Enum):
    """Lifecycle of the provider registry. Transitions only move forward."""

    UNREGISTERED = "unregistered"
    REGISTERING = "registering"
    REGISTERED = "registered"
    BOOTING = "booting"
    BOOTED = "booted"

    def __str__(self) -> str:
        return self.value
