"""Application layer - Type lookup and signature introspection."""

import builtins
import functools
import importlib
import inspect
import logging
import types
import typing
from typing import Any, Callable, Dict, List, Optional, Union, get_args, get_origin, get_type_hints

from wirebox.domain import ParameterDescription

logger = logging.getLogger(__name__)

PRIMITIVE_TYPES = frozenset(
    {
        int,
        float,
        complex,
        bool,
        str,
        bytes,
        bytearray,
        list,
        tuple,
        dict,
        set,
        frozenset,
        object,
        type(None),
    }
)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class TypeIntrospector:
    """Looks up classes by name and describes the parameters of callables.

    A type name is a class object, a dotted import path such as
    ``"package.module.ClassName"``, or the name of a class in ``builtins``.
    Declared parameter types are read with ``inspect.signature`` and
    ``typing.get_type_hints``; unions resolve to their first listed member.
    """

    def find_type(self, name: Any) -> Optional[type]:
        """Return the class a type name refers to, or None.

        Args:
            name: A class, or a string that may name one.

        Returns:
            The class, or None if ``name`` does not name a class.

        Example:
            >>> introspector.find_type("collections.OrderedDict")
            <class 'collections.OrderedDict'>
            >>> introspector.find_type("mailer") is None
            True
        """
        if isinstance(name, type):
            return name
        if not isinstance(name, str) or not name:
            return None

        parts = name.split(".")
        if not all(part.isidentifier() for part in parts):
            return None

        if len(parts) == 1:
            candidate = getattr(builtins, name, None)
            return candidate if isinstance(candidate, type) else None

        # Longest importable module prefix wins, the rest is an attribute chain
        for index in range(len(parts) - 1, 0, -1):
            try:
                target: Any = importlib.import_module(".".join(parts[:index]))
            except ImportError:
                continue
            except Exception:
                # A module failing at import time names no usable class
                logger.debug("Import failed, %r is not a type name", name, exc_info=True)
                return None
            try:
                for attribute in parts[index:]:
                    target = getattr(target, attribute)
            except AttributeError:
                return None
            return target if isinstance(target, type) else None
        return None

    def type_exists(self, name: Any) -> bool:
        return self.find_type(name) is not None

    def is_user_defined_type(self, name: Any) -> bool:
        """Check whether a name refers to a class outside of ``builtins``."""
        cls = self.find_type(name)
        return cls is not None and cls.__module__ != "builtins"

    def is_builtin_type(self, name: Any) -> bool:
        cls = self.find_type(name)
        return cls is not None and cls.__module__ == "builtins"

    @staticmethod
    def is_factory(value: Any) -> bool:
        """Check whether a value is a function-like factory.

        Callable instances (objects defining ``__call__``) and classes are not factories.
        """
        return inspect.isfunction(value) or inspect.ismethod(value) or isinstance(value, functools.partial)

    def describe_constructor(self, type_name: Any) -> List[ParameterDescription]:
        """Describe the constructor parameters of a class, in declaration order.

        Args:
            type_name: A class or a type name.

        Returns:
            Parameter descriptions, without ``self``, ``*args`` and ``**kwargs``.

        Raises:
            ValueError: If ``type_name`` does not name a class.
        """
        cls = self._require_type(type_name)
        initializer = cls.__init__
        if initializer is object.__init__:
            return []

        try:
            signature = inspect.signature(initializer)
        except (TypeError, ValueError):
            # C-implemented initializers (e.g. Exception) have no usable signature
            return []

        parameters = list(signature.parameters.values())[1:]
        return self._describe_parameters(parameters, self._type_hints(initializer))

    def describe_method(self, owner: Any, method_name: str) -> List[ParameterDescription]:
        """Describe the parameters of a method on a class or an instance.

        Args:
            owner: A class, a type name, or an instance.
            method_name: Name of the method.

        Raises:
            AttributeError: If the method does not exist.
        """
        if isinstance(owner, type) or (isinstance(owner, str) and self.type_exists(owner)):
            cls = self._require_type(owner)
            raw = inspect.getattr_static(cls, method_name)
            function = getattr(cls, method_name)
            parameters = list(inspect.signature(function).parameters.values())
            if not isinstance(raw, (staticmethod, classmethod)):
                parameters = parameters[1:]
            return self._describe_parameters(parameters, self._type_hints(function))

        return self.describe_callable(getattr(owner, method_name))

    def describe_callable(self, function: Callable[..., Any]) -> List[ParameterDescription]:
        """Describe the parameters of a factory or bound method."""
        try:
            signature = inspect.signature(function)
        except (TypeError, ValueError):
            return []
        return self._describe_parameters(list(signature.parameters.values()), self._type_hints(function))

    def declares_parameters(self, function: Callable[..., Any]) -> bool:
        """Check whether a callable declares at least one parameter of any kind."""
        try:
            return bool(inspect.signature(function).parameters)
        except (TypeError, ValueError):
            return False

    def declared_type(self, annotation: Any) -> Any:
        """Reduce an annotation to the single type the container resolves.

        ``Union``/``Optional``/``|`` pick their first listed member, ``Annotated``
        and parametrised generics reduce to their origin. Unresolved string
        annotations are looked up as type names and kept as strings otherwise.
        """
        if annotation is inspect.Parameter.empty or annotation is None:
            return None

        origin = get_origin(annotation)
        if origin is Union or origin is types.UnionType:
            return self.declared_type(get_args(annotation)[0])
        if origin is typing.Annotated:
            return self.declared_type(get_args(annotation)[0])
        if isinstance(origin, type):
            return origin

        if isinstance(annotation, str):
            return self.find_type(annotation) or annotation
        return annotation

    @staticmethod
    def is_primitive(declared_type: Any) -> bool:
        if isinstance(declared_type, str):
            return False
        if declared_type is Any or not isinstance(declared_type, type):
            # Untyped, Any, TypeVar and other typing constructs
            return True
        return declared_type in PRIMITIVE_TYPES

    def _describe_parameters(
        self,
        parameters: List[inspect.Parameter],
        hints: Dict[str, Any],
    ) -> List[ParameterDescription]:
        descriptions = []
        for parameter in parameters:
            if parameter.kind in _SKIPPED_KINDS:
                continue

            declared_type = self.declared_type(hints.get(parameter.name, parameter.annotation))
            has_default = parameter.default is not inspect.Parameter.empty
            descriptions.append(
                ParameterDescription(
                    name=parameter.name,
                    annotation=declared_type,
                    is_primitive=self.is_primitive(declared_type),
                    has_default=has_default,
                    default=parameter.default if has_default else None,
                    positional_only=parameter.kind == inspect.Parameter.POSITIONAL_ONLY,
                )
            )
        return descriptions

    @staticmethod
    def _type_hints(function: Callable[..., Any]) -> Dict[str, Any]:
        try:
            return get_type_hints(function, include_extras=True)
        except (NameError, TypeError, AttributeError):
            # Fall back to the raw annotations kept on each inspect.Parameter
            return {}

    def _require_type(self, type_name: Any) -> type:
        cls = self.find_type(type_name)
        if cls is None:
            raise ValueError(f"{type_name!r} does not name a class")
        return cls
