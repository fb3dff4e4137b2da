"""
Domain layer - Core models and rules.

This layer contains the fundamental models and rules for dependency injection.
It has no dependencies on other layers.
"""

from .enums import DefinitionKind, Policy, ProviderState
from .exceptions import (
    ArgumentCountError,
    ContainerError,
    DIException,
    InvalidArgumentError,
    InvalidDefinitionError,
    InvalidIdError,
    InvalidProviderError,
    NotFoundError,
    ParameterNotFoundError,
)
from .interfaces import IContainer, IInstanceCache, IResolver, ServiceProvider
from .models import Definition, DefinitionEntry, ParameterDescription

__all__ = [
    # Enums
    "DefinitionKind",
    "Policy",
    "ProviderState",
    # Exceptions
    "DIException",
    "ContainerError",
    "InvalidIdError",
    "InvalidDefinitionError",
    "InvalidProviderError",
    "InvalidArgumentError",
    "NotFoundError",
    "ParameterNotFoundError",
    "ArgumentCountError",
    # Interfaces
    "IContainer",
    "IResolver",
    "IInstanceCache",
    "ServiceProvider",
    # Models
    "Definition",
    "DefinitionEntry",
    "ParameterDescription",
]
