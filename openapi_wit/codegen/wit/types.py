"""
WIT type system for code generation.

Maps schema nodes to WIT type expressions and declarations: lists, map
records, enums, variants for oneOf, flattened records for allOf and
primitive lookups for everything else.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from ...logging_config import get_logger
from ..core.generator import CyclicSchemaError, UnsupportedCompositionError
from ..core.naming import NameSanitizer
from ..core.schema import CompositionKind, SchemaKind, SchemaNode
from .naming import create_wit_sanitizer

logger = get_logger(__name__)


VOID_TYPE = "void"
ANY_OF_PLACEHOLDER = "record"

# Schema type and format names to WIT type tokens
WIT_TYPE_MAPPING: Dict[str, str] = {
    "string": "string",
    "integer": "s32",
    "long": "s64",
    "float": "float32",
    "double": "float64",
    "boolean": "bool",
    "array": "list",
    "map": "record",
    "date": "string",
    "date-time": "string",
    "binary": "list<u8>",
    "file": "list<u8>",
    "UUID": "string",
    "URI": "string",
    "object": "record",
    "null": "option<string>",
    "any": "string",
}


@dataclass
class WitTypeConfig:
    """Configuration for WIT type translation behavior."""

    # Deduplicate allOf fields and enum arms, reject anyOf
    strict_mode: bool = False

    # Fail on a schema node that contains itself
    detect_cycles: bool = True

    indent: str = "    "


class WitTypeTranslator:
    """
    Central engine for translating schema nodes into WIT types.

    ``translate`` is the single recursive entry point. Output for
    unsupported shapes degrades to a placeholder instead of failing unless
    strict mode is enabled.
    """

    def __init__(
        self,
        config: Optional[WitTypeConfig] = None,
        sanitizer: Optional[NameSanitizer] = None,
    ):
        """Initialize with type configuration."""
        self.config = config or WitTypeConfig()
        self.sanitizer = sanitizer or create_wit_sanitizer()
        self.type_mapping = dict(WIT_TYPE_MAPPING)

    def translate(self, schema: Optional[SchemaNode]) -> str:
        """
        Translate a schema node into a WIT type expression.

        Args:
            schema: Schema to translate; None yields ``void``

        Returns:
            WIT type expression or declaration
        """
        return self._translate(schema, set())

    def _translate(self, schema: Optional[SchemaNode], active: Set[int]) -> str:
        if schema is None:
            return VOID_TYPE

        if self.config.detect_cycles:
            if id(schema) in active:
                raise CyclicSchemaError(
                    f"Schema '{schema.name or schema.kind.value}' contains itself"
                )
            active.add(id(schema))

        try:
            return self._dispatch(schema, active)
        finally:
            active.discard(id(schema))

    def _dispatch(self, schema: SchemaNode, active: Set[int]) -> str:
        if schema.kind == SchemaKind.ARRAY:
            return f"list<{self._translate(schema.items, active)}>"

        if schema.kind == SchemaKind.MAP:
            value_type = self._translate(schema.value_schema, active)
            return self.map_record(value_type)

        if schema.is_enum:
            return self._generate_enum_declaration(schema)

        if schema.kind == SchemaKind.COMPOSED:
            return self._handle_composed_schema(schema, active)

        return self.map_primitive(schema.schema_type)

    def map_primitive(self, type_name: Optional[str]) -> str:
        """Look up a schema type name; unknown names become model references."""
        mapped = self.type_mapping.get(type_name) if type_name else None
        if mapped is not None:
            return mapped
        return self.sanitizer.to_type_name(type_name)

    def map_record(self, value_type: str) -> str:
        """Maps have no native WIT form and are encoded as an entry list."""
        return (
            "record {\n"
            f"{self.config.indent}entries: list<tuple<string, {value_type}>>\n"
            "}"
        )

    def _generate_enum_declaration(self, schema: SchemaNode) -> str:
        return self.enum_declaration(
            self.sanitizer.to_type_name(schema.name), schema.enum
        )

    def enum_declaration(self, name: str, values: List[object]) -> str:
        """Emit an enum under a type name that is already in WIT form."""
        arms = [self.sanitizer.sanitize_name(str(value)) for value in values]
        if self.config.strict_mode:
            arms = _unique(arms)

        separator = f",\n{self.config.indent}"
        return f"enum {name} {{\n{self.config.indent}{separator.join(arms)}\n}}"

    def _handle_composed_schema(self, schema: SchemaNode, active: Set[int]) -> str:
        if schema.composition == CompositionKind.ONE_OF and schema.members:
            return self._generate_variant_type(schema, active)
        if schema.composition == CompositionKind.ALL_OF and schema.members:
            return self._generate_record_type(schema, active)

        if self.config.strict_mode:
            raise UnsupportedCompositionError(
                f"Composition '{_composition_label(schema)}' of schema "
                f"'{schema.name}' has no WIT representation"
            )
        logger.debug(
            "Schema %s uses %s, emitting placeholder record",
            schema.name,
            _composition_label(schema),
        )
        return ANY_OF_PLACEHOLDER

    def _generate_variant_type(self, schema: SchemaNode, active: Set[int]) -> str:
        lines = [f"variant {self.sanitizer.to_type_name(schema.name)} {{"]
        for member in schema.members:
            arm_name = self.sanitizer.sanitize_name(member.name)
            arm_type = self._translate(member, active)
            lines.append(f"{self.config.indent}{arm_name}({arm_type}),")
        lines.append("}")
        return "\n".join(lines)

    def _generate_record_type(self, schema: SchemaNode, active: Set[int]) -> str:
        fields = self.flattened_fields(schema, active)
        if self.config.strict_mode:
            fields = _unique_fields(fields)

        lines = [f"record {self.sanitizer.to_type_name(schema.name)} {{"]
        for field_name, field_type in fields:
            lines.append(f"{self.config.indent}{field_name}: {field_type},")
        lines.append("}")
        return "\n".join(lines)

    def flattened_fields(
        self, schema: SchemaNode, active: Optional[Set[int]] = None
    ) -> List[Tuple[str, str]]:
        """
        Collect the direct properties of every allOf member, in order.

        Only each member's own properties are read; members' compositions
        and references are not expanded. Repeated names are kept.
        """
        if active is None:
            active = set()

        fields = []
        for member in schema.members:
            for prop_name, prop_schema in member.properties.items():
                fields.append(
                    (
                        self.sanitizer.sanitize_name(prop_name),
                        self._translate(prop_schema, active),
                    )
                )
        return fields


def _composition_label(schema: SchemaNode) -> str:
    if schema.composition is None:
        return "composition"
    return schema.composition.value


def _unique(values: List[str]) -> List[str]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def _unique_fields(fields: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
    seen = set()
    result = []
    for field_name, field_type in fields:
        if field_name not in seen:
            seen.add(field_name)
            result.append((field_name, field_type))
    return result
