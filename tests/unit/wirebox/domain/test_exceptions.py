"""Unit tests for domain exceptions."""

import pytest

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


class TestDIException:
    """Test cases for the base DIException class."""

    def test_di_exception_is_exception(self):
        """Test that DIException inherits from Exception."""
        assert issubclass(DIException, Exception)

    def test_di_exception_can_be_raised(self):
        """Test that DIException can be raised with a message."""
        with pytest.raises(DIException, match="Test error"):
            raise DIException("Test error")


class TestContainerErrorHierarchy:
    """Test cases for the invalid-usage branch of the hierarchy."""

    @pytest.mark.parametrize(
        "error_class",
        [InvalidIdError, InvalidDefinitionError, InvalidProviderError, InvalidArgumentError, NotFoundError],
    )
    def test_usage_errors_are_container_errors(self, error_class):
        """Test that every usage error can be caught as ContainerError."""
        assert issubclass(error_class, ContainerError)
        assert issubclass(error_class, DIException)

    def test_not_found_error_is_lookup_error(self):
        """Test that NotFoundError can also be caught as LookupError."""
        assert issubclass(NotFoundError, LookupError)

    def test_invalid_argument_error_is_value_error(self):
        """Test that InvalidArgumentError can also be caught as ValueError."""
        assert issubclass(InvalidArgumentError, ValueError)

    def test_argument_count_error_is_not_a_usage_error(self):
        """Test that construction failures are a distinct kind from usage errors."""
        assert issubclass(ArgumentCountError, DIException)
        assert issubclass(ArgumentCountError, TypeError)
        assert not issubclass(ArgumentCountError, ContainerError)


class TestErrorMessages:
    """Test cases for error attributes and messages."""

    def test_invalid_id_error_keeps_id(self):
        """Test that InvalidIdError exposes the rejected id."""
        error = InvalidIdError(123)

        assert error.id == 123
        assert "123" in str(error)

    def test_not_found_error_with_string_id(self):
        """Test NotFoundError message for an alias id."""
        error = NotFoundError("mailer")

        assert error.id == "mailer"
        assert "'mailer' is not found" in str(error)

    def test_not_found_error_with_class_id(self):
        """Test NotFoundError message uses the qualified class name."""

        class Service:
            pass

        error = NotFoundError(Service, "autowiring is disabled")

        assert error.id is Service
        assert "Service" in str(error)
        assert "Reason: autowiring is disabled" in str(error)

    def test_parameter_not_found_error(self):
        """Test ParameterNotFoundError names the missing method."""
        error = ParameterNotFoundError("mailer", "deliver")

        assert isinstance(error, NotFoundError)
        assert error.method == "deliver"
        assert "method 'deliver' does not exist" in str(error)

    def test_invalid_provider_error(self):
        """Test InvalidProviderError keeps the rejected provider."""
        error = InvalidProviderError(42, "not a class")

        assert error.provider == 42
        assert "Reason: not a class" in str(error)

    def test_argument_count_error(self):
        """Test ArgumentCountError names the target and the parameter."""

        class Box:
            pass

        error = ArgumentCountError(Box, "height")

        assert error.target is Box
        assert error.parameter == "height"
        assert "Box" in str(error)
        assert "'height'" in str(error)
