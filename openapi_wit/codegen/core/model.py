"""
Generated model representations handed to the templating stage.

``build_model`` performs the generic property extraction for a named
schema. Language generators enrich the result with their own metadata.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .schema import SchemaKind, SchemaNode


TypeDeclaration = Callable[[Optional[SchemaNode]], str]


@dataclass
class CodegenProperty:
    """A single property of a generated model."""

    name: str
    base_name: str
    data_type: str
    required: bool = False
    description: Optional[str] = None
    complex_type: Optional[str] = None
    is_model: bool = False
    is_array: bool = False
    is_map: bool = False
    is_enum: bool = False
    items: Optional["CodegenProperty"] = None
    vendor_extensions: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CodegenModel:
    """A named model ready for templating."""

    name: str
    class_name: str
    data_type: str
    declaration: str
    description: Optional[str] = None
    vars: List[CodegenProperty] = field(default_factory=list)
    is_enum: bool = False
    allowable_values: Dict[str, Any] = field(default_factory=dict)
    discriminator: Optional[Dict[str, Any]] = None
    has_additional_properties: bool = False
    vendor_extensions: Dict[str, Any] = field(default_factory=dict)

    def get_var(self, name: str) -> Optional[CodegenProperty]:
        """Get property by name."""
        for var in self.vars:
            if var.name == name:
                return var
        return None


@dataclass
class CodegenParameter:
    """A single operation parameter."""

    param_name: str
    base_name: str
    data_type: str
    location: str = "query"
    required: bool = False
    is_enum: bool = False
    allowable_values: List[Any] = field(default_factory=list)
    description: Optional[str] = None


@dataclass
class CodegenOperation:
    """An API operation with its parameters and return type."""

    operation_id: str
    http_method: str
    path: str
    all_params: List[CodegenParameter] = field(default_factory=list)
    return_type: Optional[str] = None
    summary: Optional[str] = None
    vendor_extensions: Dict[str, Any] = field(default_factory=dict)


def build_property(
    name: str,
    schema: SchemaNode,
    type_declaration: TypeDeclaration,
    required: bool = False,
) -> CodegenProperty:
    """Create a property descriptor from its schema."""
    prop = CodegenProperty(
        name=name,
        base_name=name,
        data_type=type_declaration(schema),
        required=required,
        description=schema.description,
        is_array=schema.kind == SchemaKind.ARRAY,
        is_map=schema.kind == SchemaKind.MAP,
        is_enum=schema.is_enum,
    )

    # Arrays and maps describe their element through the items descriptor
    if schema.kind == SchemaKind.ARRAY and schema.items is not None:
        prop.items = build_property(name, schema.items, type_declaration)
    elif schema.kind == SchemaKind.MAP and schema.value_schema is not None:
        prop.items = build_property(name, schema.value_schema, type_declaration)

    return prop


def build_model(
    name: str,
    schema: SchemaNode,
    type_declaration: TypeDeclaration,
    class_name: Optional[str] = None,
) -> CodegenModel:
    """
    Extract a model and its properties from a named schema.

    Args:
        name: Schema name as declared in the document
        schema: Schema node
        type_declaration: Function translating a schema node into a type expression
        class_name: Declared identifier of the model; defaults to ``name``

    Returns:
        CodegenModel with one CodegenProperty per direct property
    """
    declaration = type_declaration(schema)
    model = CodegenModel(
        name=name,
        class_name=class_name or name,
        data_type=declaration,
        declaration=declaration,
        description=schema.description,
    )

    required = set(schema.required)
    for prop_name, prop_schema in schema.properties.items():
        model.vars.append(
            build_property(
                prop_name, prop_schema, type_declaration, prop_name in required
            )
        )

    return model
