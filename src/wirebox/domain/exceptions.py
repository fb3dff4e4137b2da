from typing import Any, Optional


def _describe(value: Any) -> str:
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    return repr(value)


class DIException(Exception):
    """Base exception for DI-related errors."""


class ContainerError(DIException):
    """Raised when the container is used incorrectly.

    This occurs when:
    - An id or definition has an invalid shape.
    - A parameter or method is bound to an id that cannot take it.
    - ``make`` or ``call`` target an id that is not a class.
    - ``call_function`` receives something that is not callable.
    """


class InvalidIdError(ContainerError):
    """Raised when an id is not a class or a non-empty string.

    Attributes:
        id: The rejected id.
    """

    def __init__(self, id: Any) -> None:
        self.id = id
        super().__init__(f"Invalid id {id!r}. Ids can only be classes or non-empty strings.")


class InvalidDefinitionError(ContainerError):
    """Raised when a definition cannot be accepted.

    The only rejected case is the single-argument ``set`` whose id is not a type name.
    """


class InvalidProviderError(ContainerError):
    """Raised when a provider reference is not a ``ServiceProvider`` subclass.

    Attributes:
        provider: The rejected reference.
    """

    def __init__(self, provider: Any, reason: Optional[str] = None) -> None:
        self.provider = provider
        message = f"Invalid service provider: {_describe(provider)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class InvalidArgumentError(ContainerError, ValueError):
    """Raised for malformed batch input (bulk definitions, provider lists)."""


class NotFoundError(ContainerError, LookupError):
    """Raised when an id is absent from the container and cannot be autowired.

    Attributes:
        id: The id that could not be found.
    """

    def __init__(self, id: Any, reason: Optional[str] = None) -> None:
        self.id = id
        message = f"The id {_describe(id)} is not found in the container"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class ParameterNotFoundError(NotFoundError):
    """Raised when ``call`` names a method the resolved object does not have.

    Attributes:
        id: The id whose instance was searched.
        method: The missing method name.
    """

    def __init__(self, id: Any, method: str) -> None:
        self.method = method
        super().__init__(id, f"method '{method}' does not exist")


class ArgumentCountError(DIException, TypeError):
    """Raised when a required argument has neither a binding nor a default.

    Only primitive or untyped parameters can end up here: class-typed parameters are
    always resolved from the container.

    Attributes:
        target: The class or callable being invoked.
        parameter: Name of the missing parameter.
    """

    def __init__(self, target: Any, parameter: str) -> None:
        self.target = target
        self.parameter = parameter
        name = getattr(target, "__qualname__", None) or _describe(target)
        super().__init__(f"Too few arguments to {name}: missing required parameter '{parameter}'")
