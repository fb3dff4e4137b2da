from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

if TYPE_CHECKING:
    from wirebox.domain.enums import Policy


class IContainer(ABC):
    """Abstract interface for dependency injection container operations."""

    @abstractmethod
    def set(self, id: Any, definition: Any = ...) -> "IContainer":
        """Add a definition to the container.

        Args:
            id: A class or a non-empty string.
            definition: The class, factory, literal or object bound to the id.
        """

    @abstractmethod
    def set_param(self, name: Any, value: Any = ...) -> "IContainer":
        """Bind a constructor parameter of the most recently set id."""

    @abstractmethod
    def set_method(self, name: str, args: Optional[Dict[Any, Any]] = None) -> "IContainer":
        """Bind a method called after the most recently set id is constructed."""

    @abstractmethod
    def has(self, id: Any) -> bool:
        """Check whether an id has a definition."""

    @abstractmethod
    def get(self, id: Any) -> Any:
        """Resolve an id, reusing the cached instance for classes."""

    @abstractmethod
    def make(self, id: Any) -> Any:
        """Construct a new instance of the class bound to an id, bypassing the cache."""

    @abstractmethod
    def call(self, id: Any, method: str, args: Optional[Dict[Any, Any]] = None) -> Any:
        """Call a method on the instance of an id, injecting its parameters."""

    @abstractmethod
    def call_function(self, factory: Callable[..., Any], args: Optional[Dict[Any, Any]] = None) -> Any:
        """Call a function, injecting its parameters."""

    @abstractmethod
    def register_provider(self, provider: Any) -> None:
        """Register a service provider class."""

    @abstractmethod
    def autowire(self) -> None:
        """Enable autowiring for the rest of the container's lifetime."""


class IResolver(ABC):
    """Abstract interface for dependency resolution operations."""

    @abstractmethod
    def resolve(self, id: Any, policy: "Policy") -> Any:
        """Resolve an id under the given caching policy.

        Raises:
            NotFoundError: If the id is unknown and cannot be autowired.
            ContainerError: If ``Policy.FRESH`` targets a definition that is not a class.
        """

    @abstractmethod
    def invoke_factory(self, factory: Callable[..., Any], args: Optional[Dict[Any, Any]] = None) -> Any:
        """Invoke a factory, injecting its parameters or the container."""

    @abstractmethod
    def call_method(self, instance: Any, method: str, args: Optional[Dict[Any, Any]] = None) -> Any:
        """Invoke a method on an instance, injecting its parameters."""


class IInstanceCache(ABC):
    """Abstract interface for the per-id singleton cache."""

    @abstractmethod
    def get_or_create(self, id: Any, policy: "Policy", factory: Callable[[], Any]) -> Any:
        """Return the cached instance for the id, or build one according to the policy."""

    @abstractmethod
    def invalidate(self, id: Any) -> None:
        """Drop the cached instance of an id, if any."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every cached instance."""


class ServiceProvider(ABC):
    """A deferred unit of registration.

    ``register`` runs for every provider before any ``boot`` runs, the first time
    the container resolves something.
    """

    @abstractmethod
    def register(self, container: IContainer) -> None:
        """Add definitions to the container."""

    @abstractmethod
    def boot(self, container: IContainer) -> None:
        """Use the container once every provider has registered its definitions."""
