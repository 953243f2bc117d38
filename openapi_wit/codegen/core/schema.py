"""
Core schema representation for code generation.

OpenAPI schema objects are converted into ``SchemaNode`` trees (see
``openapi.py``) so that generators can work with one consistent shape.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union
from enum import Enum


class SchemaKind(Enum):
    """Shape of a schema node. Exactly one applies to every node."""

    PRIMITIVE = "primitive"
    ARRAY = "array"
    MAP = "map"
    OBJECT = "object"
    COMPOSED = "composed"
    REFERENCE = "reference"


class CompositionKind(Enum):
    """Composition keyword of a composed schema."""

    ALL_OF = "allOf"
    ONE_OF = "oneOf"
    ANY_OF = "anyOf"


@dataclass
class SchemaNode:
    """
    A single schema in the API description.

    The shape payload depends on ``kind``; the remaining attributes are
    facets that may accompany any shape.
    """

    kind: SchemaKind
    name: Optional[str] = None
    type_name: Optional[str] = None  # declared type, e.g. "integer" or "date-time"

    # ARRAY
    items: Optional["SchemaNode"] = None

    # OBJECT / MAP
    properties: Dict[str, "SchemaNode"] = field(default_factory=dict)
    additional_properties: Union["SchemaNode", bool, None] = None
    required: List[str] = field(default_factory=list)

    # COMPOSED
    composition: Optional[CompositionKind] = None
    members: List["SchemaNode"] = field(default_factory=list)
    # Every composition keyword present, in CompositionKind order
    compositions: List[CompositionKind] = field(default_factory=list)

    # REFERENCE
    ref: Optional[str] = None

    # Facets
    enum: Optional[List[Any]] = None
    nullable: Optional[bool] = None
    format: Optional[str] = None
    pattern: Optional[str] = None
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    exclusive_minimum: Optional[Union[int, float, bool]] = None
    exclusive_maximum: Optional[Union[int, float, bool]] = None
    discriminator: Optional[Dict[str, Any]] = None
    description: Optional[str] = None

    @property
    def target_name(self) -> Optional[str]:
        """Name of the referenced model (last segment of ``$ref``)."""
        if not self.ref:
            return None
        return self.ref.rsplit("/", 1)[-1]

    @property
    def schema_type(self) -> Optional[str]:
        """Type name used for primitive lookup; a reference yields its target."""
        if self.kind == SchemaKind.REFERENCE:
            return self.target_name
        return self.type_name

    @property
    def value_schema(self) -> Optional["SchemaNode"]:
        """Value schema of a map, None when additionalProperties is a flag."""
        if isinstance(self.additional_properties, SchemaNode):
            return self.additional_properties
        return None

    @property
    def is_enum(self) -> bool:
        return bool(self.enum)

    @property
    def is_reference(self) -> bool:
        return self.kind == SchemaKind.REFERENCE

    def walk(self) -> Iterator["SchemaNode"]:
        """
        Yield this node and every inline node below it.

        References are not followed. Each node is yielded once even if the
        tree shares or loops back to it.
        """
        seen = set()
        stack = [self]
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            yield node

            children: List[SchemaNode] = list(node.members)
            children.extend(node.properties.values())
            if node.items is not None:
                children.append(node.items)
            if node.value_schema is not None:
                children.append(node.value_schema)
            stack.extend(reversed(children))


def primitive(type_name: Optional[str], **facets: Any) -> SchemaNode:
    """Shorthand for a primitive schema node."""
    return SchemaNode(kind=SchemaKind.PRIMITIVE, type_name=type_name, **facets)


def array_of(items: Optional[SchemaNode], **facets: Any) -> SchemaNode:
    """Shorthand for an array schema node."""
    return SchemaNode(kind=SchemaKind.ARRAY, type_name="array", items=items, **facets)


def map_of(value_schema: Union[SchemaNode, bool, None], **facets: Any) -> SchemaNode:
    """Shorthand for a map schema node."""
    return SchemaNode(
        kind=SchemaKind.MAP,
        type_name="object",
        additional_properties=value_schema,
        **facets,
    )


def reference(ref: str, **facets: Any) -> SchemaNode:
    """Shorthand for a ``$ref`` schema node; accepts a bare model name."""
    if "/" not in ref:
        ref = f"#/components/schemas/{ref}"
    node = SchemaNode(kind=SchemaKind.REFERENCE, ref=ref, **facets)
    if node.name is None:
        node.name = node.target_name
    return node
