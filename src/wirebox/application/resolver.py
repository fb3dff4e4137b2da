import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from wirebox.application.definition_store import DefinitionStore
from wirebox.application.instance_cache import InstanceCache
from wirebox.application.type_introspector import TypeIntrospector
from wirebox.domain import (
    ArgumentCountError,
    ContainerError,
    DefinitionKind,
    IContainer,
    IResolver,
    NotFoundError,
    ParameterDescription,
    ParameterNotFoundError,
    Policy,
)

logger = logging.getLogger(__name__)


class DependencyResolver(IResolver):
    """Turns ids into values, building dependency graphs through constructor introspection.

    Each parameter of a constructor, bound method or factory is resolved in
    declaration order:

    1. A binding for the parameter name (or for its declared type) wins. A binding that
       names a class resolves that class, a factory binding is invoked, anything else
       is passed as-is.
    2. Otherwise a parameter declaring a class is resolved from the container.
    3. Otherwise the parameter's own default applies.

    Attributes:
        _container: The container passed to factories that ask for it.
        _store: Definitions and bindings.
        _cache: Instances kept under the singleton policy.
        _introspector: Type lookup and signature description.
        _autowiring: Whether unknown classes are constructed on demand.
    """

    def __init__(
        self,
        container: IContainer,
        store: DefinitionStore,
        cache: InstanceCache,
        introspector: TypeIntrospector,
    ) -> None:
        self._container = container
        self._store = store
        self._cache = cache
        self._introspector = introspector
        self._autowiring = False

    @property
    def autowiring(self) -> bool:
        return self._autowiring

    def enable_autowiring(self) -> None:
        """Turn autowiring on. There is no way to turn it back off."""
        self._autowiring = True

    def resolve(self, id: Any, policy: Policy = Policy.SINGLETON) -> Any:
        """Resolve an id under the given caching policy.

        Args:
            id: A class, a type name, or an alias.
            policy: ``SINGLETON`` reuses instances of classes, ``FRESH`` always builds
                a new one and only accepts class definitions.

        Returns:
            The instance, the factory result, or the literal/object definition itself.

        Raises:
            NotFoundError: If the id is unknown and cannot be autowired.
            ContainerError: If ``FRESH`` is requested for a definition that is not a class.
            ArgumentCountError: If a required primitive parameter has no binding and no default.

        Example:
            >>> container.set("mailer", Mailer)
            >>> resolver.resolve("mailer", Policy.SINGLETON)
            <Mailer object at ...>
        """
        key = self._store.normalize_id(id)
        if not self._store.has_id(key):
            return self._resolve_unknown(id, key, policy)

        definition = self._store.get_definition(key)
        if policy == Policy.FRESH and not definition.is_constructible:
            raise ContainerError(f"make only creates objects, {id!r} is a {definition.kind} definition")

        if definition.kind == DefinitionKind.TYPE_REFERENCE:
            return self._cache.get_or_create(key, policy, lambda: self.build(definition.value, key))

        if definition.kind == DefinitionKind.FACTORY:
            # Factories are never cached
            return self.invoke_factory(definition.value, self._store.params_for(key) or None)

        return definition.value

    def can_resolve(self, id: Any) -> bool:
        """Check whether ``resolve`` would find something for an id without building it."""
        if self._store.has_id(id):
            return True
        cls = self._introspector.find_type(id)
        if cls is None:
            return False
        return self._autowiring or self._introspector.is_builtin_type(cls)

    def build(self, cls: type, key: Any) -> Any:
        """Construct a class with the bindings of ``key``, then apply its bound methods in order."""
        instance = self.construct(cls, self._store.params_for(key))
        for method, args in self._store.methods_for(key).items():
            logger.debug("Calling bound method %s.%s", cls.__name__, method)
            self.call_method(instance, method, args)
        return instance

    def construct(self, cls: type, bindings: Dict[Any, Any]) -> Any:
        """Construct a class, resolving each constructor parameter in declaration order."""
        parameters = self._introspector.describe_constructor(cls)
        args, kwargs = self.resolve_arguments(cls, parameters, bindings)
        return cls(*args, **kwargs)

    def invoke_factory(self, factory: Callable[..., Any], args: Optional[Dict[Any, Any]] = None) -> Any:
        """Invoke a factory.

        A factory without parameters is called with no arguments. A factory with
        parameters gets them resolved from ``args`` when bindings are given, and
        receives the container as its sole argument otherwise.
        """
        if not self._introspector.declares_parameters(factory):
            return factory()

        if args:
            parameters = self._introspector.describe_callable(factory)
            positional, keywords = self.resolve_arguments(factory, parameters, args)
            return factory(*positional, **keywords)

        return factory(self._container)

    def call_method(self, instance: Any, method: str, args: Optional[Dict[Any, Any]] = None) -> Any:
        """Invoke a method on an instance, resolving its parameters against ``args``.

        Raises:
            ParameterNotFoundError: If the instance has no such method.
        """
        if not callable(getattr(instance, method, None)):
            raise ParameterNotFoundError(type(instance), method)

        parameters = self._introspector.describe_method(instance, method)
        bound = getattr(instance, method)
        positional, keywords = self.resolve_arguments(bound, parameters, dict(args or {}))
        return bound(*positional, **keywords)

    def resolve_arguments(
        self,
        target: Any,
        parameters: List[ParameterDescription],
        bindings: Dict[Any, Any],
    ) -> Tuple[List[Any], Dict[str, Any]]:
        """Resolve the arguments of a call.

        Args:
            target: The class or callable about to be invoked (used in error messages).
            parameters: Its parameters, in declaration order.
            bindings: Values by parameter name or declared type.

        Returns:
            Positional arguments (positional-only parameters) and keyword arguments.

        Raises:
            ArgumentCountError: If a required primitive or untyped parameter has no value.
        """
        positional: List[Any] = []
        keywords: Dict[str, Any] = {}

        for parameter in parameters:
            found, value = self._find_binding(parameter, bindings)
            if found:
                value = self.resolve_binding(value)
            elif not parameter.is_primitive and (not parameter.has_default or self.can_resolve(parameter.annotation)):
                value = self.resolve(parameter.annotation, Policy.SINGLETON)
            elif parameter.has_default:
                if parameter.positional_only:
                    positional.append(parameter.default)
                continue
            else:
                raise ArgumentCountError(target, parameter.name)

            if parameter.positional_only:
                positional.append(value)
            else:
                keywords[parameter.name] = value

        return positional, keywords

    def resolve_binding(self, value: Any) -> Any:
        """Turn a bound value into an argument.

        Strings naming a class are always treated as that class, never as text.
        """
        if isinstance(value, (type, str)) and self._introspector.type_exists(value):
            return self.resolve(value, Policy.SINGLETON)
        if self._introspector.is_factory(value):
            return self.invoke_factory(value)
        return value

    def _resolve_unknown(self, id: Any, key: Any, policy: Policy) -> Any:
        cls = self._introspector.find_type(key)
        if cls is not None and self._introspector.is_builtin_type(cls):
            logger.debug("Constructing built-in %s without a definition", cls.__name__)
            return cls()

        if cls is not None and self._autowiring:
            logger.debug("Autowiring %s.%s", cls.__module__, cls.__qualname__)
            return self._cache.get_or_create(key, policy, lambda: self.construct(cls, {}))

        raise NotFoundError(id)

    def _find_binding(self, parameter: ParameterDescription, bindings: Dict[Any, Any]) -> Tuple[bool, Any]:
        if parameter.name in bindings:
            return True, bindings[parameter.name]

        declared = parameter.annotation
        if declared is None or parameter.is_primitive:
            return False, None

        for key, value in bindings.items():
            if key == declared or (isinstance(declared, type) and self._introspector.find_type(key) is declared):
                return True, value
        return False, None
