import logging
from typing import Any, Callable, Dict

from wirebox.domain import IInstanceCache, Policy

logger = logging.getLogger(__name__)


class InstanceCache(IInstanceCache):
    """Manages instance reuse for the singleton and fresh policies.

    Attributes:
        _instances: Constructed instances by normalised id.
    """

    def __init__(self) -> None:
        """Initialize the cache with no instances."""
        self._instances: Dict[Any, Any] = {}

    def get_or_create(self, id: Any, policy: Policy, factory: Callable[[], Any]) -> Any:
        """Get the cached instance or build a new one according to the policy.

        Args:
            id: Normalised id the instance belongs to.
            policy: ``SINGLETON`` caches on first build, ``FRESH`` never reads or writes the cache.
            factory: Builds a new instance.

        Returns:
            The cached or newly built instance. Errors raised by ``factory``
            propagate and leave the cache untouched.

        Example:
            >>> cache = InstanceCache()
            >>> first = cache.get_or_create("mailer", Policy.SINGLETON, Mailer)
            >>> first is cache.get_or_create("mailer", Policy.SINGLETON, Mailer)
            True
        """
        if policy == Policy.FRESH:
            return factory()

        if id in self._instances:
            logger.debug("Cache hit for %r", id)
            return self._instances[id]

        instance = factory()
        self._instances[id] = instance
        logger.debug("Cached instance of %r", id)
        return instance

    def invalidate(self, id: Any) -> None:
        """Drop the cached instance of an id, if any."""
        if id in self._instances:
            del self._instances[id]
            logger.debug("Invalidated cached instance of %r", id)

    def clear(self) -> None:
        """Drop every cached instance."""
        self._instances.clear()

    def __len__(self) -> int:
        return len(self._instances)
