"""
Conversion of parsed OpenAPI documents into schema nodes and operations.

Only local ``#/...`` references are followed when looking up parameters,
request bodies and responses. Schema ``$ref`` values are kept as
REFERENCE nodes and never inlined.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ...logging_config import get_logger
from .model import CodegenOperation, CodegenParameter
from .naming import NameSanitizer
from .schema import CompositionKind, SchemaKind, SchemaNode

logger = get_logger(__name__)

# Response models with this suffix wrap their payload in a "data" property
ENVELOPE_SUFFIX = "Response"

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

JSON_MEDIA_TYPES = ("application/json", "application/problem+json", "*/*")

# Formats that override the declared type for type mapping
FORMAT_TYPE_NAMES = {
    "date": "date",
    "date-time": "date-time",
    "binary": "binary",
    "uuid": "UUID",
    "uri": "URI",
    "int64": "long",
    "float": "float",
    "double": "double",
}

# Declared types without a direct entry in the type mapping
TYPE_ALIASES = {
    "number": "double",
}

MAX_REF_DEPTH = 16


@dataclass
class ApiDocument:
    """Schemas and operations extracted from one API description."""

    title: str
    version: str
    description: Optional[str] = None
    schemas: Dict[str, SchemaNode] = field(default_factory=dict)
    operations: List[CodegenOperation] = field(default_factory=list)


def convert_schema(raw: Any, name: Optional[str] = None) -> SchemaNode:
    """
    Convert a raw OpenAPI schema object into a SchemaNode.

    Args:
        raw: Schema object (dict) or boolean schema
        name: Name given to the node (component name, property name, ...)

    Returns:
        SchemaNode with exactly one shape
    """
    if not isinstance(raw, dict):
        # Boolean schemas and missing schemas accept anything
        return SchemaNode(kind=SchemaKind.PRIMITIVE, name=name, type_name="any")

    facets = _extract_facets(raw)
    declared_type = facets.pop("type_name")

    ref = raw.get("$ref")
    if ref:
        node = SchemaNode(kind=SchemaKind.REFERENCE, name=name, ref=ref, **facets)
        if node.name is None:
            node.name = node.target_name
        return node

    for composition in (
        CompositionKind.ONE_OF,
        CompositionKind.ALL_OF,
        CompositionKind.ANY_OF,
    ):
        if composition.value in raw:
            members = [
                convert_schema(member, _member_name(member))
                for member in raw.get(composition.value) or []
            ]
            return SchemaNode(
                kind=SchemaKind.COMPOSED,
                name=name,
                composition=composition,
                members=members,
                compositions=[kind for kind in CompositionKind if kind.value in raw],
                properties=_convert_properties(raw),
                required=list(raw.get("required") or []),
                **facets,
            )

    if declared_type == "array" or "items" in raw:
        return SchemaNode(
            kind=SchemaKind.ARRAY,
            name=name,
            type_name="array",
            items=convert_schema(raw.get("items"), _member_name(raw.get("items"))),
            **facets,
        )

    additional = raw.get("additionalProperties")
    is_object = declared_type in (None, "object")

    if is_object and additional not in (None, False) and not raw.get("properties"):
        return SchemaNode(
            kind=SchemaKind.MAP,
            name=name,
            type_name="object",
            additional_properties=convert_schema(additional, _member_name(additional)),
            **facets,
        )

    if declared_type == "object" or "properties" in raw:
        if isinstance(additional, dict):
            additional = convert_schema(additional, _member_name(additional))
        return SchemaNode(
            kind=SchemaKind.OBJECT,
            name=name,
            type_name="object",
            properties=_convert_properties(raw),
            additional_properties=additional,
            required=list(raw.get("required") or []),
            **facets,
        )

    return SchemaNode(
        kind=SchemaKind.PRIMITIVE,
        name=name,
        type_name=_primitive_type_name(declared_type, raw.get("format")),
        **facets,
    )


def _extract_facets(raw: Dict[str, Any]) -> Dict[str, Any]:
    declared_type = raw.get("type")
    nullable = raw.get("nullable")

    # OpenAPI 3.1 spells nullability as a type list
    if isinstance(declared_type, list):
        types = [t for t in declared_type if t != "null"]
        if len(types) < len(declared_type):
            nullable = True
        declared_type = types[0] if types else "null"

    enum = raw.get("enum")
    return {
        "type_name": declared_type,
        "enum": list(enum) if enum else None,
        "nullable": nullable,
        "format": raw.get("format"),
        "pattern": raw.get("pattern"),
        "minimum": raw.get("minimum"),
        "maximum": raw.get("maximum"),
        "exclusive_minimum": raw.get("exclusiveMinimum"),
        "exclusive_maximum": raw.get("exclusiveMaximum"),
        "discriminator": raw.get("discriminator"),
        "description": raw.get("description"),
    }


def _primitive_type_name(declared_type: Optional[str], schema_format: Optional[str]) -> str:
    if schema_format in FORMAT_TYPE_NAMES:
        return FORMAT_TYPE_NAMES[schema_format]
    if declared_type is None:
        return "any"
    return TYPE_ALIASES.get(declared_type, declared_type)


def _convert_properties(raw: Dict[str, Any]) -> Dict[str, SchemaNode]:
    properties = raw.get("properties") or {}
    return {
        prop_name: convert_schema(prop_schema, _member_name(prop_schema) or prop_name)
        for prop_name, prop_schema in properties.items()
    }


def _member_name(raw: Any) -> Optional[str]:
    """Inline schemas are named by title, references by their target."""
    if not isinstance(raw, dict):
        return None
    if raw.get("title"):
        return raw["title"]
    ref = raw.get("$ref")
    if ref:
        return ref.rsplit("/", 1)[-1]
    return None


def extract_component_schemas(document: Dict[str, Any]) -> Dict[str, SchemaNode]:
    """
    Convert every schema under ``components/schemas``.

    Returns:
        Dict mapping schema name to SchemaNode, in document order
    """
    raw_schemas = (document.get("components") or {}).get("schemas") or {}
    return {name: convert_schema(raw, name) for name, raw in raw_schemas.items()}


def resolve_local_ref(document: Dict[str, Any], obj: Any) -> Any:
    """
    Follow ``#/...`` references until a concrete object is reached.

    External references are returned unchanged.
    """
    depth = 0
    while isinstance(obj, dict) and "$ref" in obj and depth < MAX_REF_DEPTH:
        ref = obj["$ref"]
        if not isinstance(ref, str) or not ref.startswith("#/"):
            logger.debug("Leaving external reference %s unresolved", ref)
            return obj

        target: Any = document
        for part in ref[2:].split("/"):
            part = part.replace("~1", "/").replace("~0", "~")
            if not isinstance(target, dict) or part not in target:
                logger.debug("Reference %s does not resolve", ref)
                return obj
            target = target[part]

        obj = target
        depth += 1
    return obj


def extract_operations(
    document: Dict[str, Any],
    type_declaration: Callable[[Optional[SchemaNode]], str],
    sanitizer: Optional[NameSanitizer] = None,
) -> List[CodegenOperation]:
    """
    Build one CodegenOperation per path item method.

    Args:
        document: Parsed API description
        type_declaration: Function translating a schema node into a type expression
        sanitizer: Sanitizer used for generated operation ids

    Returns:
        Operations in document order
    """
    sanitizer = sanitizer or NameSanitizer()
    operations = []

    for path, path_item in (document.get("paths") or {}).items():
        path_item = resolve_local_ref(document, path_item) or {}
        shared_parameters = path_item.get("parameters") or []

        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue

            operation_id = operation.get("operationId") or sanitizer.sanitize_name(
                f"{method}-{path}"
            )
            params = [
                _build_parameter(document, raw_param, type_declaration)
                for raw_param in [*shared_parameters, *(operation.get("parameters") or [])]
            ]

            body = _build_body_parameter(document, operation, type_declaration)
            if body is not None:
                params.append(body)

            operations.append(
                CodegenOperation(
                    operation_id=operation_id,
                    http_method=method.upper(),
                    path=path,
                    all_params=params,
                    return_type=_response_type(document, operation, type_declaration),
                    summary=operation.get("summary") or operation.get("description"),
                )
            )

    logger.debug("Extracted %d operations", len(operations))
    return operations


def _build_parameter(
    document: Dict[str, Any],
    raw_param: Dict[str, Any],
    type_declaration: Callable[[Optional[SchemaNode]], str],
) -> CodegenParameter:
    raw_param = resolve_local_ref(document, raw_param)
    name = raw_param.get("name")
    schema = convert_schema(raw_param.get("schema"), name)

    # Enum parameters are typed by name and declared by the rewriter
    data_type = schema.name if schema.is_enum else type_declaration(schema)

    return CodegenParameter(
        param_name=name,
        base_name=name,
        data_type=data_type,
        location=raw_param.get("in", "query"),
        required=bool(raw_param.get("required", False)),
        is_enum=schema.is_enum,
        allowable_values=list(schema.enum or []),
        description=raw_param.get("description"),
    )


def _build_body_parameter(
    document: Dict[str, Any],
    operation: Dict[str, Any],
    type_declaration: Callable[[Optional[SchemaNode]], str],
) -> Optional[CodegenParameter]:
    request_body = resolve_local_ref(document, operation.get("requestBody"))
    if not isinstance(request_body, dict):
        return None

    raw_schema = _content_schema(request_body.get("content"))
    if raw_schema is None:
        return None

    schema = convert_schema(raw_schema, _member_name(raw_schema))
    return CodegenParameter(
        param_name="body",
        base_name="body",
        data_type=type_declaration(schema),
        location="body",
        required=bool(request_body.get("required", False)),
        description=request_body.get("description"),
    )


def _response_type(
    document: Dict[str, Any],
    operation: Dict[str, Any],
    type_declaration: Callable[[Optional[SchemaNode]], str],
) -> Optional[str]:
    responses = operation.get("responses") or {}
    # YAML loads status codes as integers
    success_responses = sorted(
        (
            (str(code), response)
            for code, response in responses.items()
            if str(code).startswith("2")
        ),
        key=lambda item: item[0],
    )

    for _, response in success_responses:
        response = resolve_local_ref(document, response)
        if not isinstance(response, dict):
            continue

        raw_schema = _content_schema(response.get("content"))
        if raw_schema is None:
            return None

        # Envelopes keep their declared name so the payload can be unwrapped
        target = raw_schema.get("$ref", "").rsplit("/", 1)[-1]
        if target.endswith(ENVELOPE_SUFFIX):
            return target
        return type_declaration(convert_schema(raw_schema, _member_name(raw_schema)))

    return None


def _content_schema(content: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(content, dict) or not content:
        return None

    for media_type in JSON_MEDIA_TYPES:
        if media_type in content:
            return (content[media_type] or {}).get("schema")

    first = next(iter(content.values())) or {}
    return first.get("schema")


def parse_document(
    document: Dict[str, Any],
    type_declaration: Callable[[Optional[SchemaNode]], str],
    sanitizer: Optional[NameSanitizer] = None,
) -> ApiDocument:
    """Extract schemas and operations from a parsed API description."""
    info = document.get("info") or {}
    return ApiDocument(
        title=str(info.get("title", "API")),
        version=str(info.get("version", "0.0.0")),
        description=info.get("description"),
        schemas=extract_component_schemas(document),
        operations=extract_operations(document, type_declaration, sanitizer),
    )
