"""
Model enrichment for WIT templates.

Adds WIT-specific metadata to models produced by the generic property
extraction. The pass only adds attributes, it never removes any.
"""

from typing import Optional

from ..core.model import CodegenModel, CodegenProperty, build_model
from ..core.schema import CompositionKind, SchemaKind, SchemaNode
from .types import WitTypeTranslator

RESPONSE_SUFFIX = "Response"
RESPONSE_DATA_PROPERTY = "data"

# Numeric facets and the vendor extension each one is copied to
NUMERIC_CONSTRAINTS = (
    ("maximum", "x-maximum"),
    ("minimum", "x-minimum"),
    ("exclusive_maximum", "x-exclusive-maximum"),
    ("exclusive_minimum", "x-exclusive-minimum"),
)


class ModelEnricher:
    """Builds and enriches one model per named schema."""

    def __init__(self, translator: WitTypeTranslator):
        self.translator = translator
        self.sanitizer = translator.sanitizer

    def from_model(self, name: str, schema: SchemaNode) -> CodegenModel:
        """
        Create the enriched model for a named schema.

        Args:
            name: Schema name as declared in the document
            schema: Schema node of the model

        Returns:
            CodegenModel carrying the translated declaration and metadata
        """
        model = build_model(
            name,
            schema,
            self.translator.translate,
            class_name=self.sanitizer.to_type_name(name),
        )
        return self.enrich(model, name, schema)

    def enrich(self, model: CodegenModel, name: str, schema: SchemaNode) -> CodegenModel:
        """Attach metadata to a model built by the property extraction."""
        if schema.discriminator is not None:
            model.discriminator = schema.discriminator
            model.vendor_extensions["x-has-discriminator"] = True

        for prop_name, prop_schema in schema.properties.items():
            prop = model.get_var(prop_name)
            if prop is not None:
                self._process_property(prop, prop_schema)

        if schema.additional_properties is not None:
            model.has_additional_properties = True
            if isinstance(schema.additional_properties, SchemaNode):
                model.vendor_extensions["x-additional-property-type"] = (
                    self.translator.translate(schema.additional_properties)
                )

        composed_type = _composed_type(schema)
        if composed_type is not None:
            model.vendor_extensions["x-composed-type"] = composed_type

        if schema.is_enum:
            model.is_enum = True
            model.data_type = "enum"
            model.allowable_values = {"values": list(schema.enum)}

        if schema.nullable:
            model.vendor_extensions["x-is-nullable"] = True

        if schema.format is not None:
            model.vendor_extensions["x-format"] = schema.format

        if schema.pattern is not None:
            model.vendor_extensions["x-pattern"] = schema.pattern

        for attribute, extension in NUMERIC_CONSTRAINTS:
            value = getattr(schema, attribute)
            if value is not None:
                model.vendor_extensions[extension] = value

        if name.endswith(RESPONSE_SUFFIX):
            model.vendor_extensions["x-is-response"] = True
            self._handle_response_model(model, schema)

        return model

    def _process_property(self, prop: CodegenProperty, schema: SchemaNode):
        if schema.is_reference:
            self._mark_model_reference(prop, schema.target_name)
        elif schema.kind == SchemaKind.ARRAY:
            self._process_container_element(prop, schema.items)
        elif schema.kind == SchemaKind.MAP:
            self._process_container_element(prop, schema.value_schema)
        elif schema.kind == SchemaKind.COMPOSED and schema.composition is not None:
            prop.vendor_extensions["x-composed-type"] = _composed_type(schema)

        if schema.nullable:
            prop.vendor_extensions["x-is-nullable"] = True

    def _process_container_element(
        self, prop: CodegenProperty, element: Optional[SchemaNode]
    ):
        if element is None or not element.is_reference:
            return
        if prop.items is None:
            prop.items = CodegenProperty(
                name=prop.name, base_name=prop.base_name, data_type=""
            )
        self._mark_model_reference(prop.items, element.target_name)

    def _mark_model_reference(self, prop: CodegenProperty, model_name: str):
        prop.data_type = self.sanitizer.to_type_name(model_name)
        prop.complex_type = model_name
        prop.is_model = True

    def _handle_response_model(self, model: CodegenModel, schema: SchemaNode):
        # Unwrap the payload of a response envelope
        data_schema = schema.properties.get(RESPONSE_DATA_PROPERTY)
        if data_schema is not None:
            model.vendor_extensions["x-response-type"] = self.translator.translate(
                data_schema
            )


def _composed_type(schema: SchemaNode) -> Optional[str]:
    """Composition tag of a schema: allOf, then oneOf, then anyOf.

    This precedence differs from the translator, which picks oneOf first
    when classifying the schema.
    """
    if schema.kind != SchemaKind.COMPOSED:
        return None
    for kind in CompositionKind:
        if kind in schema.compositions:
            return kind.value
    if schema.composition is not None:
        return schema.composition.value
    return None
