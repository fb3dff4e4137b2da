"""
Application layer - Use cases and orchestration.

This layer contains the use cases that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .container import DIContainer
from .definition_store import DefinitionStore
from .instance_cache import InstanceCache
from .provider_registry import ProviderRegistry
from .resolver import DependencyResolver
from .type_introspector import TypeIntrospector

__all__ = [
    "DIContainer",
    "DefinitionStore",
    "DependencyResolver",
    "InstanceCache",
    "ProviderRegistry",
    "TypeIntrospector",
]
