"""
wirebox: Dependency injection container with constructor/setter injection,
service providers and opt-in autowiring.

Public API exports for the wirebox package.
"""

# Application exports
from wirebox.application.container import DIContainer

# Domain exports
from wirebox.domain.enums import DefinitionKind, Policy, ProviderState
from wirebox.domain.exceptions import (
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
from wirebox.domain.interfaces import IContainer, ServiceProvider

__version__ = "0.1.0"

__all__ = [
    # Container
    "DIContainer",
    "IContainer",
    "ServiceProvider",
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
]
