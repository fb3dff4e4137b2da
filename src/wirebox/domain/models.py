from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from wirebox.domain.enums import DefinitionKind

ENTRY_KEYS = frozenset({"definition", "params", "methods"})


class Definition(BaseModel):
    """Value object representing the recipe bound to an id.

    Attributes:
        kind: How the value is turned into the resolved value.
        value: The class, factory, literal or object itself.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: DefinitionKind = Field(..., description="How the definition is resolved.")
    value: Any = Field(default=None, description="The class, factory, literal or object.")

    @property
    def is_constructible(self) -> bool:
        return self.kind == DefinitionKind.TYPE_REFERENCE

    @property
    def accepts_params(self) -> bool:
        return self.kind in (DefinitionKind.TYPE_REFERENCE, DefinitionKind.FACTORY)


class ParameterDescription(BaseModel):
    """Describes one parameter of a constructor, method or factory.

    Attributes:
        name: The parameter name.
        annotation: Declared type (a class, or an unresolved type name), None if untyped.
        is_primitive: True for built-in scalar/container types and untyped parameters.
        has_default: Whether the parameter declares a default value.
        default: The default value, if any.
        positional_only: Whether the parameter must be passed positionally.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="The parameter name.")
    annotation: Any = Field(default=None, description="The declared type, if any.")
    is_primitive: bool = Field(default=True, description="Whether the type is primitive or missing.")
    has_default: bool = Field(default=False, description="Whether a default value exists.")
    default: Any = Field(default=None, description="The default value.")
    positional_only: bool = Field(default=False, description="Whether the parameter is positional-only.")


class DefinitionEntry(BaseModel):
    """One entry of the bulk definition form.

    Attributes:
        definition: The definition itself.
        params: Parameter bindings by name, or a list of type names (shorthand form).
        methods: Method bindings by name, or a list of method names without arguments.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    definition: Any = Field(..., description="The definition to set.")
    params: Union[Dict[Any, Any], List[Any]] = Field(default_factory=dict, description="Parameter bindings.")
    methods: Union[Dict[str, Optional[Dict[Any, Any]]], List[str]] = Field(
        default_factory=dict,
        description="Methods called right after construction.",
    )

    @classmethod
    def looks_like_entry(cls, value: Any) -> bool:
        """Tell a ``{definition, params?, methods?}`` entry apart from a literal mapping."""
        if not isinstance(value, dict) or "definition" not in value:
            return False
        return all(isinstance(key, str) for key in value) and set(value) <= ENTRY_KEYS
