"""Unit tests for FastAPI integration."""

import pytest
from fastapi import params

from sample_services.mailer import Mailer
from wirebox.application.container import DIContainer
from wirebox.domain.exceptions import ContainerError, NotFoundError
from wirebox.infrastructure.fastapi_integration.integration import (
    create_fastapi_dependency,
    create_fresh_dependency,
    provide,
)


class TestCreateFastAPIDependency:
    """Test cases for create_fastapi_dependency function."""

    def test_creates_dependency_function(self):
        """Test that create_fastapi_dependency returns a callable."""
        container = DIContainer()
        container.set(Mailer)

        dependency_func = create_fastapi_dependency(container, Mailer)

        assert callable(dependency_func)

    def test_dependency_function_resolves_shared_instance(self):
        """Test that the dependency resolves the container's shared instance."""
        container = DIContainer()
        container.set(Mailer)

        dependency_func = create_fastapi_dependency(container, Mailer)

        assert dependency_func() is container.get(Mailer)
        assert dependency_func() is dependency_func()

    def test_dependency_function_resolves_aliases(self):
        """Test that aliases bound to literals are returned as-is."""
        container = DIContainer()
        container.set("app_name", "wirebox")

        assert create_fastapi_dependency(container, "app_name")() == "wirebox"

    def test_resolution_is_lazy(self):
        """Test that the id only needs a definition when the dependency is called."""
        container = DIContainer()
        dependency_func = create_fastapi_dependency(container, Mailer)

        with pytest.raises(NotFoundError):
            dependency_func()

        container.set(Mailer)
        assert isinstance(dependency_func(), Mailer)


class TestCreateFreshDependency:
    """Test cases for create_fresh_dependency function."""

    def test_builds_new_instance_per_call(self):
        """Test that each call builds a new instance."""
        container = DIContainer()
        container.set(Mailer)

        dependency_func = create_fresh_dependency(container, Mailer)

        assert dependency_func() is not dependency_func()
        assert dependency_func() is not container.get(Mailer)

    def test_rejects_non_class_definitions(self):
        """Test that make semantics apply."""
        container = DIContainer()
        container.set("app_name", "wirebox")

        with pytest.raises(ContainerError):
            create_fresh_dependency(container, "app_name")()


class TestProvide:
    """Test cases for provide function."""

    def test_returns_depends_marker(self):
        """Test that provide wraps the dependency in Depends()."""
        container = DIContainer()
        container.set(Mailer)

        marker = provide(container, Mailer)

        assert isinstance(marker, params.Depends)
        assert marker.dependency() is container.get(Mailer)

    def test_fresh_marker(self):
        """Test that fresh=True builds a new instance per call."""
        container = DIContainer()
        container.set(Mailer)

        marker = provide(container, Mailer, fresh=True)

        assert marker.dependency() is not marker.dependency()
