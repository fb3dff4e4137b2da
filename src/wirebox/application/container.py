import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple, Type

from pydantic import ValidationError

from wirebox.application.definition_store import MISSING, DefinitionStore
from wirebox.application.instance_cache import InstanceCache
from wirebox.application.provider_registry import ProviderRegistry
from wirebox.application.resolver import DependencyResolver
from wirebox.application.type_introspector import TypeIntrospector
from wirebox.domain import (
    ContainerError,
    DefinitionEntry,
    IContainer,
    InvalidArgumentError,
    InvalidDefinitionError,
    Policy,
    ProviderState,
    ServiceProvider,
)

logger = logging.getLogger(__name__)


class DIContainer(IContainer):
    """Main dependency injection container.

    Maps ids (classes, import paths or aliases) to definitions (classes, factories,
    literals or objects) and resolves them on demand, injecting constructor and
    setter dependencies. ``get`` keeps one instance per id, ``make`` always builds
    a new one.

    ``set_param`` and ``set_method`` apply to the id most recently passed to ``set``.

    Attributes:
        _store: Definitions, parameter bindings and method bindings.
        _cache: Instances kept under the singleton policy.
        _providers: Service providers and their lifecycle state.
        _resolver: Component building values and dependency graphs.
        _last_id: Target of ``set_param``/``set_method``.

    Example:
        >>> container = DIContainer()
        >>> container.set(Box).set_param("height", 30).set_param("width", 20)
        >>> container.get(Box).length
        50
    """

    def __init__(
        self,
        definitions: Optional[Any] = None,
        autowiring: bool = False,
    ) -> None:
        """Initialize the container.

        Args:
            definitions: Optional bulk definitions, same shapes as ``set_all``.
            autowiring: Enable autowiring right away.
        """
        self._introspector = TypeIntrospector()
        self._store = DefinitionStore(self._introspector)
        self._cache = InstanceCache()
        self._providers = ProviderRegistry(self._introspector)
        self._resolver = DependencyResolver(self, self._store, self._cache, self._introspector)
        self._last_id: Any = None

        if autowiring:
            self.autowire()
        if definitions is not None:
            self.set_all(definitions)

    def set(self, id: Any, definition: Any = MISSING) -> "DIContainer":
        """Add a definition to the container.

        Re-setting an id replaces its definition, drops its bindings and discards
        any cached instance.

        Args:
            id: A class, an import path or a non-empty alias string.
            definition: A class (or its import path), a factory, a literal or an object.
                When omitted, ``id`` must name a class and is used as the definition too.

        Returns:
            The container, so ``set_param``/``set_method`` can be chained.

        Raises:
            InvalidIdError: If the id is not a class or a non-empty string.
            InvalidDefinitionError: If the definition is omitted and the id does not name a class.

        Example:
            >>> container.set("mailer", Mailer)
            >>> container.set(Mailer)
            >>> container.set("greeting", lambda: "hello")
        """
        key = self._store.normalize_id(id)
        if definition is MISSING:
            if not self._introspector.type_exists(key):
                raise InvalidDefinitionError(
                    f"Invalid definition: {id!r} does not name a class, so it needs an explicit definition"
                )
            definition = key

        self._store.set_definition(key, definition)
        self._cache.invalidate(key)
        self._last_id = key
        logger.debug("Defined %r", key)
        return self

    def set_all(self, definitions: Any) -> None:
        """Add many definitions at once.

        Args:
            definitions: Either a mapping ``{id: entry}``, or a list whose items are
                class names (used as both id and definition) or ``{id: entry}`` mappings.
                An entry is a bare definition or ``{"definition": ..., "params": ..., "methods": ...}``,
                applied in that order.

        Raises:
            InvalidArgumentError: If the input or one of its entries is malformed.

        Example:
            >>> container.set_all({
            ...     Mailer: Mailer,
            ...     "admin": {
            ...         "definition": Admin,
            ...         "params": {"name": "admin", "email": "admin@example.com"},
            ...     },
            ... })
        """
        if isinstance(definitions, Mapping):
            for id, entry in definitions.items():
                self._set_entry(id, entry)
            return

        if not isinstance(definitions, (list, tuple)):
            raise InvalidArgumentError(
                f"Definitions must be a mapping or a list, got {type(definitions).__name__}"
            )

        for item in definitions:
            if isinstance(item, Mapping):
                self.set_all(item)
            elif self._introspector.type_exists(item):
                self.set(item)
            else:
                raise InvalidArgumentError(
                    f"Definition {item!r} has no id and does not name a class"
                )

    def set_param(self, name: Any, value: Any = MISSING) -> "DIContainer":
        """Bind a constructor (or factory) parameter of the most recently set id.

        Args:
            name: The parameter name, or a class name for the shorthand form.
            value: A class (resolved), a factory (invoked), or any other value (passed as-is).
                Omitted means "the class named by ``name``".

        Raises:
            ContainerError: If nothing was set yet, the last definition is neither a class
                nor a factory, or the shorthand name is not a class name.

        Example:
            >>> container.set(User).set_param(Mailer)
            >>> container.set(Admin).set_param("name", "admin").set_param("mailer", Mailer)
        """
        self._store.bind_parameter(self._last_id, name, value)
        self._cache.invalidate(self._last_id)
        return self

    def set_method(self, name: str, args: Optional[Mapping[Any, Any]] = None) -> "DIContainer":
        """Bind a method to be called right after the most recently set id is constructed.

        Methods run in the order they were bound.

        Raises:
            ContainerError: If the last definition is not a class.

        Example:
            >>> container.set(Notification).set_method("set_mailer", {"mailer": Mailer})
        """
        self._store.bind_method(self._last_id, name, args)
        self._cache.invalidate(self._last_id)
        return self

    def has(self, id: Any) -> bool:
        """Check whether an id has a definition."""
        return self._store.has_id(id)

    def get(self, id: Any) -> Any:
        """Resolve an id, reusing the instance built by a previous ``get``.

        Unknown built-in classes are constructed without caching. Unknown user classes
        are constructed (and cached) only when autowiring is enabled.

        Raises:
            NotFoundError: If the id is unknown and cannot be autowired.
        """
        self._providers.ensure_registered_and_booted(self)
        return self._resolver.resolve(id, Policy.SINGLETON)

    def make(self, id: Any) -> Any:
        """Construct a new instance for an id without reading or filling the cache.

        Raises:
            NotFoundError: If the id is unknown and cannot be autowired.
            ContainerError: If the id's definition is not a class.
        """
        self._providers.ensure_registered_and_booted(self)
        return self._resolver.resolve(id, Policy.FRESH)

    def call(self, id: Any, method: str, args: Optional[Mapping[Any, Any]] = None) -> Any:
        """Call a method on the instance of an id, injecting the method's parameters.

        Only ``args`` are used as bindings; methods bound with ``set_method`` are unrelated.

        Raises:
            ContainerError: If the id's definition is not a class.
            ParameterNotFoundError: If the instance has no such method.

        Example:
            >>> container.call(Notification, "push_message_using_mailer", {"name": "ali"})
        """
        if args is not None and not isinstance(args, Mapping):
            raise ContainerError("Method arguments must be a mapping of parameter names to values")

        self._providers.ensure_registered_and_booted(self)
        if self._store.has_id(id) and not self._store.get_definition(id).is_constructible:
            raise ContainerError(f"call only works with class definitions, {id!r} is not one")

        instance = self._resolver.resolve(id, Policy.SINGLETON)
        return self._resolver.call_method(instance, method, dict(args or {}))

    def call_function(self, factory: Callable[..., Any], args: Optional[Mapping[Any, Any]] = None) -> Any:
        """Call a function, injecting its parameters from ``args``.

        Without ``args``, a function declaring parameters receives the container.

        Raises:
            ContainerError: If ``factory`` is not callable or is a class.
        """
        if isinstance(factory, type) or not callable(factory):
            raise ContainerError(f"call_function expects a function, got {factory!r}")
        if args is not None and not isinstance(args, Mapping):
            raise ContainerError("Function arguments must be a mapping of parameter names to values")

        self._providers.ensure_registered_and_booted(self)
        return self._resolver.invoke_factory(factory, dict(args) if args else None)

    def register_provider(self, provider: Any) -> None:
        """Register a service provider class.

        Providers run the first time the container resolves anything: every
        ``register`` first, then every ``boot``, both in registration order.

        Raises:
            InvalidProviderError: If ``provider`` is not a ``ServiceProvider`` subclass.
        """
        self._providers.add(provider)

    def register_providers(self, providers: Sequence[Any]) -> None:
        """Register several service provider classes in order.

        Raises:
            InvalidArgumentError: If ``providers`` is not a non-empty list.
        """
        self._providers.add_all(providers)

    def autowire(self) -> None:
        """Enable autowiring for the rest of the container's lifetime.

        Unknown classes are then constructed from their declared constructor dependencies.
        """
        self._resolver.enable_autowiring()
        logger.debug("Autowiring enabled")

    @property
    def autowiring(self) -> bool:
        return self._resolver.autowiring

    @property
    def providers(self) -> Tuple[Type[ServiceProvider], ...]:
        return self._providers.providers

    def clear(self) -> None:
        """Clear all definitions and cached instances.

        Providers and the autowiring mode are kept.
        """
        self._store.clear()
        self._cache.clear()
        self._last_id = None

    def __contains__(self, id: Any) -> bool:
        return self.has(id)

    def __getitem__(self, id: Any) -> Any:
        return self.get(id)

    def _set_entry(self, id: Any, entry: Any) -> None:
        if not DefinitionEntry.looks_like_entry(entry):
            self.set(id, entry)
            return

        try:
            parsed = DefinitionEntry.model_validate(entry)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid definition entry for {id!r}: {e}") from e

        self.set(id, parsed.definition)

        if isinstance(parsed.params, dict):
            for name, value in parsed.params.items():
                self.set_param(name, value)
        else:
            for name in parsed.params:
                self.set_param(name)

        if isinstance(parsed.methods, dict):
            for method, args in parsed.methods.items():
                self.set_method(method, args)
        else:
            for method in parsed.methods:
                self.set_method(method)

    def _inherit(self, parent: "DIContainer") -> None:
        """Take over a parent's definitions, bindings and autowiring mode, with an empty cache."""
        self._store = parent._store.copy()
        self._cache = InstanceCache()
        self._providers = ProviderRegistry(self._introspector)
        self._resolver = DependencyResolver(self, self._store, self._cache, self._introspector)
        self._last_id = None
        if parent.autowiring:
            self._resolver.enable_autowiring()
        # Providers that already ran left their definitions in the copied store
        if parent._providers.state != ProviderState.UNREGISTERED:
            return
        for provider in parent.providers:
            self._providers.add(provider)
