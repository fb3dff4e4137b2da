"""Unit tests for domain models."""

import pytest
from pydantic import ValidationError

from wirebox.domain.enums import DefinitionKind
from wirebox.domain.models import Definition, DefinitionEntry, ParameterDescription


class TestDefinition:
    """Test cases for the Definition model."""

    def test_type_reference_is_constructible(self):
        """Test that only type references are constructible."""

        class Service:
            pass

        definition = Definition(kind=DefinitionKind.TYPE_REFERENCE, value=Service)

        assert definition.value is Service
        assert definition.is_constructible
        assert definition.accepts_params

    def test_factory_accepts_params_but_is_not_constructible(self):
        """Test that factories take parameters but cannot be made."""
        definition = Definition(kind=DefinitionKind.FACTORY, value=lambda: 1)

        assert not definition.is_constructible
        assert definition.accepts_params

    @pytest.mark.parametrize("kind", [DefinitionKind.LITERAL, DefinitionKind.OBJECT])
    def test_values_take_no_params(self, kind):
        """Test that literal and object definitions reject bindings."""
        definition = Definition(kind=kind, value=object())

        assert not definition.is_constructible
        assert not definition.accepts_params

    def test_definition_keeps_identity_of_value(self):
        """Test that the wrapped value is not copied."""
        payload = {"key": "value"}

        definition = Definition(kind=DefinitionKind.LITERAL, value=payload)

        assert definition.value is payload

    def test_definition_is_frozen(self):
        """Test that definitions are immutable."""
        definition = Definition(kind=DefinitionKind.LITERAL, value=1)

        with pytest.raises(ValidationError):
            definition.value = 2


class TestParameterDescription:
    """Test cases for the ParameterDescription model."""

    def test_defaults(self):
        """Test an untyped required parameter."""
        parameter = ParameterDescription(name="name")

        assert parameter.annotation is None
        assert parameter.is_primitive
        assert not parameter.has_default
        assert not parameter.positional_only


class TestDefinitionEntry:
    """Test cases for the bulk DefinitionEntry model."""

    def test_minimal_entry(self):
        """Test that params and methods default to empty mappings."""
        entry = DefinitionEntry.model_validate({"definition": "value"})

        assert entry.definition == "value"
        assert entry.params == {}
        assert entry.methods == {}

    def test_params_list_shorthand(self):
        """Test that params may be a list of type names."""

        class Mailer:
            pass

        entry = DefinitionEntry.model_validate({"definition": object, "params": [Mailer]})

        assert entry.params == [Mailer]

    def test_methods_without_arguments(self):
        """Test that a method may be bound without arguments."""
        entry = DefinitionEntry.model_validate({"definition": object, "methods": {"setup": None}})

        assert entry.methods == {"setup": None}

    def test_extra_keys_are_rejected(self):
        """Test that unknown keys fail validation."""
        with pytest.raises(ValidationError):
            DefinitionEntry.model_validate({"definition": object, "lifetime": "singleton"})

    def test_missing_definition_is_rejected(self):
        """Test that the definition key is required."""
        with pytest.raises(ValidationError):
            DefinitionEntry.model_validate({"params": {}})

    def test_invalid_params_type_is_rejected(self):
        """Test that params must be a mapping or a list."""
        with pytest.raises(ValidationError):
            DefinitionEntry.model_validate({"definition": object, "params": 5})

    @pytest.mark.parametrize(
        "value, expected",
        [
            ({"definition": int}, True),
            ({"definition": int, "params": {}, "methods": {}}, True),
            ({"definition": int, "other": 1}, False),
            ({"params": {}}, False),
            ({"host": "localhost"}, False),
            ("definition", False),
            (["definition"], False),
        ],
    )
    def test_looks_like_entry(self, value, expected):
        """Test telling entries apart from literal mappings."""
        assert DefinitionEntry.looks_like_entry(value) is expected
