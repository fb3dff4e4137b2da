"""Application layer - Service provider registration and boot."""

import logging
from typing import Any, List, Sequence, Tuple, Type

from wirebox.application.type_introspector import TypeIntrospector
from wirebox.domain import (
    ContainerError,
    IContainer,
    InvalidArgumentError,
    InvalidProviderError,
    ProviderState,
    ServiceProvider,
)

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Runs service providers in two ordered phases: every ``register``, then every ``boot``.

    The registry moves through ``ProviderState`` forward. Calls to
    ``ensure_registered_and_booted`` made while a phase is running (a provider
    resolving from the container inside ``register`` or ``boot``) return
    immediately instead of starting the loop again.

    When a provider raises, the error propagates and the registry steps back to
    the state before the failed phase. The next call resumes from the provider
    that failed; providers that already completed the phase are not run again.

    Attributes:
        _providers: Provider classes in registration order.
        _instances: Provider instances, created when the registration phase runs.
        _booted: Number of instances whose ``boot`` completed.
        _state: Current lifecycle state.
    """

    def __init__(self, introspector: TypeIntrospector) -> None:
        self._introspector = introspector
        self._providers: List[Type[ServiceProvider]] = []
        self._instances: List[ServiceProvider] = []
        self._booted = 0
        self._state = ProviderState.UNREGISTERED

    @property
    def state(self) -> ProviderState:
        return self._state

    @property
    def providers(self) -> Tuple[Type[ServiceProvider], ...]:
        return tuple(self._providers)

    def add(self, provider: Any) -> None:
        """Add a provider class.

        Args:
            provider: A ``ServiceProvider`` subclass or a type name resolving to one.

        Raises:
            InvalidProviderError: If ``provider`` is not a user-defined ``ServiceProvider`` subclass.
            ContainerError: If the registration phase has already finished.
        """
        cls = self._introspector.find_type(provider) if isinstance(provider, (type, str)) else None
        if cls is None or not self._introspector.is_user_defined_type(cls):
            raise InvalidProviderError(provider, "expected a service provider class or its import path")
        if not issubclass(cls, ServiceProvider):
            raise InvalidProviderError(provider, f"{cls.__name__} does not implement ServiceProvider")
        if self._state not in (ProviderState.UNREGISTERED, ProviderState.REGISTERING):
            raise ContainerError(
                f"Cannot register {cls.__name__}: providers were already registered ({self._state} state)"
            )

        self._providers.append(cls)
        logger.debug("Added service provider %s", cls.__name__)

    def add_all(self, providers: Sequence[Any]) -> None:
        """Add providers in order, stopping at the first invalid one.

        Raises:
            InvalidArgumentError: If ``providers`` is not a non-empty list or tuple.
        """
        if not isinstance(providers, (list, tuple)) or not providers:
            raise InvalidArgumentError("Providers must be passed as a non-empty list of provider classes")
        for provider in providers:
            self.add(provider)

    def ensure_registered_and_booted(self, container: IContainer) -> None:
        """Run the registration phase once, then the boot phase once.

        Args:
            container: The container handed to each provider.

        Raises:
            Exception: Whatever a provider's ``register`` or ``boot`` raised. The failed
                phase is retried from that provider on the next call.
        """
        if not self._providers:
            # Nothing to run yet; providers added later still get both phases
            return
        if self._state == ProviderState.UNREGISTERED:
            self._register_all(container)
        if self._state == ProviderState.REGISTERED:
            self._boot_all(container)

    def _register_all(self, container: IContainer) -> None:
        self._state = ProviderState.REGISTERING
        # Providers registered by an earlier, failed attempt are not registered again
        index = len(self._instances)
        try:
            # A provider's register() may add more providers, which join this phase
            while index < len(self._providers):
                provider = self._providers[index]()
                provider.register(container)
                self._instances.append(provider)
                index += 1
        except Exception:
            self._state = ProviderState.UNREGISTERED
            logger.debug("Registration stopped at %s", self._providers[index].__name__)
            raise
        self._state = ProviderState.REGISTERED
        logger.debug("Registered %d service provider(s)", len(self._instances))

    def _boot_all(self, container: IContainer) -> None:
        self._state = ProviderState.BOOTING
        try:
            while self._booted < len(self._instances):
                self._instances[self._booted].boot(container)
                self._booted += 1
        except Exception:
            self._state = ProviderState.REGISTERED
            logger.debug("Boot stopped at %s", type(self._instances[self._booted]).__name__)
            raise
        self._state = ProviderState.BOOTED
        logger.debug("Booted %d service provider(s)", len(self._instances))
