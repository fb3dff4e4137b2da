"""Application layer - Storage of definitions and their bindings."""

import logging
from typing import Any, Dict, Iterator, Mapping, Optional

from wirebox.application.type_introspector import TypeIntrospector
from wirebox.domain import (
    ContainerError,
    Definition,
    DefinitionKind,
    InvalidIdError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

MISSING: Any = object()

LITERAL_TYPES = (type(None), bool, int, float, complex, str, bytes, bytearray, list, tuple, dict, set, frozenset)


class DefinitionStore:
    """Holds id -> definition, id -> parameter bindings and id -> method bindings.

    Ids naming a class are normalised to the class itself, so ``"pkg.mod.Mailer"``
    and ``Mailer`` address the same entry.

    Attributes:
        _definitions: Definitions by normalised id.
        _params: Parameter bindings by normalised id, then parameter name or type.
        _methods: Method bindings by normalised id, in declaration order.
    """

    def __init__(self, introspector: TypeIntrospector) -> None:
        self._introspector = introspector
        self._definitions: Dict[Any, Definition] = {}
        self._params: Dict[Any, Dict[Any, Any]] = {}
        self._methods: Dict[Any, Dict[str, Dict[Any, Any]]] = {}

    def normalize_id(self, id: Any) -> Any:
        """Validate an id and return the key it is stored under.

        Raises:
            InvalidIdError: If the id is neither a class nor a non-empty string.
        """
        if isinstance(id, type):
            return id
        if not isinstance(id, str) or not id:
            raise InvalidIdError(id)
        return self._introspector.find_type(id) or id

    def classify(self, value: Any) -> Definition:
        """Wrap a raw definition value with its kind."""
        if isinstance(value, (type, str)):
            cls = self._introspector.find_type(value)
            if cls is not None:
                return Definition(kind=DefinitionKind.TYPE_REFERENCE, value=cls)
        if self._introspector.is_factory(value):
            return Definition(kind=DefinitionKind.FACTORY, value=value)
        if isinstance(value, LITERAL_TYPES):
            return Definition(kind=DefinitionKind.LITERAL, value=value)
        return Definition(kind=DefinitionKind.OBJECT, value=value)

    def set_definition(self, id: Any, value: Any) -> Any:
        """Store a definition, replacing any previous one and its bindings.

        Returns:
            The normalised id.
        """
        key = self.normalize_id(id)
        definition = self.classify(value)
        if key in self._definitions:
            logger.debug("Redefining %r as %s", key, definition.kind)
        self._definitions[key] = definition
        self._params.pop(key, None)
        self._methods.pop(key, None)
        return key

    def get_definition(self, id: Any) -> Definition:
        key = self.normalize_id(id)
        try:
            return self._definitions[key]
        except KeyError:
            raise NotFoundError(id) from None

    def has_id(self, id: Any) -> bool:
        try:
            return self.normalize_id(id) in self._definitions
        except InvalidIdError:
            return False

    def bind_parameter(self, id: Any, name: Any, value: Any = MISSING) -> None:
        """Attach a value to a constructor (or factory) parameter of an id.

        Args:
            id: The owning id.
            name: Parameter name, or a type name for the shorthand form.
            value: The binding; omitted means "the type named by ``name``".

        Raises:
            ContainerError: If the id has no definition, the definition is neither a
                class nor a factory, or the shorthand name is not a type name.
        """
        definition = self._require_definition(id, "bind a parameter")
        if not definition.accepts_params:
            raise ContainerError(
                f"Parameters can only be bound to classes and factories, {id!r} is a {definition.kind} definition"
            )
        if not isinstance(name, (str, type)) or name == "":
            raise ContainerError(f"Invalid parameter name {name!r}")
        if value is MISSING:
            if not self._introspector.type_exists(name):
                raise ContainerError(f"Parameter {name!r} has no value and does not name a class")
            value = name

        self._params.setdefault(self.normalize_id(id), {})[name] = value

    def bind_method(self, id: Any, method: str, args: Optional[Mapping[Any, Any]] = None) -> None:
        """Register a method to be called right after the id's instance is constructed.

        Raises:
            ContainerError: If the id has no class definition or ``args`` is not a mapping.
        """
        definition = self._require_definition(id, "bind a method")
        if not definition.is_constructible:
            raise ContainerError(f"Methods can only be bound to classes, {id!r} is a {definition.kind} definition")
        if not isinstance(method, str) or not method:
            raise ContainerError(f"Invalid method name {method!r}")
        if args is None:
            args = {}
        if not isinstance(args, Mapping):
            raise ContainerError(f"Arguments of method '{method}' must be a mapping of parameter names to values")

        self._methods.setdefault(self.normalize_id(id), {})[method] = dict(args)

    def params_for(self, id: Any) -> Dict[Any, Any]:
        return dict(self._params.get(self.normalize_id(id), {}))

    def methods_for(self, id: Any) -> Dict[str, Dict[Any, Any]]:
        return dict(self._methods.get(self.normalize_id(id), {}))

    def copy(self) -> "DefinitionStore":
        """Return an independent store holding the same definitions and bindings."""
        clone = DefinitionStore(self._introspector)
        clone._definitions = dict(self._definitions)
        clone._params = {key: dict(params) for key, params in self._params.items()}
        clone._methods = {key: dict(methods) for key, methods in self._methods.items()}
        return clone

    def clear(self) -> None:
        self._definitions.clear()
        self._params.clear()
        self._methods.clear()

    def __iter__(self) -> Iterator[Any]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def _require_definition(self, id: Any, action: str) -> Definition:
        if id is None:
            raise ContainerError(f"Cannot {action}: no definition has been set yet")
        key = self.normalize_id(id)
        if key not in self._definitions:
            raise ContainerError(f"Cannot {action}: the id {id!r} has no definition")
        return self._definitions[key]
