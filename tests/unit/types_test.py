"""Tests for the recursive WIT type translator."""

import pytest

from openapi_wit.codegen.core.generator import (
    CyclicSchemaError,
    UnsupportedCompositionError,
)
from openapi_wit.codegen.core.schema import (
    CompositionKind,
    SchemaKind,
    SchemaNode,
    array_of,
    map_of,
    primitive,
    reference,
)
from openapi_wit.codegen.wit.types import (
    ANY_OF_PLACEHOLDER,
    VOID_TYPE,
    WitTypeConfig,
    WitTypeTranslator,
)


def composed(name, composition, members, **facets):
    return SchemaNode(
        kind=SchemaKind.COMPOSED,
        name=name,
        composition=composition,
        members=members,
        **facets,
    )


def obj(**properties):
    return SchemaNode(kind=SchemaKind.OBJECT, type_name="object", properties=properties)


@pytest.fixture
def strict_translator():
    return WitTypeTranslator(WitTypeConfig(strict_mode=True))


class TestPrimitiveMapping:
    """Table lookup from schema type names to WIT tokens."""

    @pytest.mark.parametrize(
        ("type_name", "expected"),
        [
            ("integer", "s32"),
            ("long", "s64"),
            ("float", "float32"),
            ("double", "float64"),
            ("boolean", "bool"),
            ("string", "string"),
            ("date", "string"),
            ("date-time", "string"),
            ("binary", "list<u8>"),
            ("file", "list<u8>"),
            ("UUID", "string"),
            ("URI", "string"),
            ("null", "option<string>"),
            ("any", "string"),
            ("object", "record"),
        ],
    )
    def test_mapped(self, translator, type_name, expected):
        assert translator.translate(primitive(type_name)) == expected

    @pytest.mark.parametrize(
        ("type_name", "expected"),
        [("Customer", "Customer"), ("pet-store", "PetStore"), ("record", "record_type")],
    )
    def test_unmapped_names_become_model_references(self, translator, type_name, expected):
        assert translator.translate(primitive(type_name)) == expected

    def test_missing_schema_is_void(self, translator):
        assert translator.translate(None) == VOID_TYPE

    def test_reference_uses_target_name(self, translator):
        assert translator.translate(reference("Order")) == "Order"
        assert translator.translate(reference("#/components/schemas/pet-store")) == "PetStore"


class TestContainers:
    """Arrays become lists and maps become entry records."""

    def test_array(self, translator):
        assert translator.translate(array_of(primitive("string"))) == "list<string>"

    def test_array_of_references(self, translator):
        assert translator.translate(array_of(reference("Pet"))) == "list<Pet>"

    def test_map(self, translator):
        assert translator.translate(map_of(primitive("integer"))) == (
            "record {\n    entries: list<tuple<string, s32>>\n}"
        )

    def test_nested_containers(self, translator):
        schema = array_of(array_of(map_of(primitive("boolean"))))
        assert translator.translate(schema) == (
            "list<list<record {\n    entries: list<tuple<string, bool>>\n}>>"
        )

    def test_map_indent_follows_config(self):
        translator = WitTypeTranslator(WitTypeConfig(indent="  "))
        assert translator.translate(map_of(primitive("string"))) == (
            "record {\n  entries: list<tuple<string, string>>\n}"
        )

    @pytest.mark.parametrize(
        "items", [primitive("integer"), reference("Pet"), map_of(primitive("any"))]
    )
    def test_array_wraps_item_translation(self, translator, items):
        assert translator.translate(array_of(items)) == f"list<{translator.translate(items)}>"


class TestEnums:
    """Enum values become sanitized enum cases."""

    def test_enum_declaration(self, translator):
        schema = primitive("string", name="Status", enum=["active", "inactive"])
        assert translator.translate(schema) == "enum Status {\n    active,\n    inactive\n}"

    def test_enum_declaration_keeps_resolved_name(self, translator):
        assert (
            translator.enum_declaration("SortOrder", ["asc", "desc"])
            == "enum SortOrder {\n    asc,\n    desc\n}"
        )

    def test_duplicates_are_kept(self, translator):
        schema = primitive("string", name="Letters", enum=["A", "a b", "A"])
        assert translator.translate(schema) == "enum Letters {\n    a,\n    a-b,\n    a\n}"

    def test_strict_mode_drops_duplicates(self, strict_translator):
        schema = primitive("string", name="Letters", enum=["A", "a b", "A"])
        assert strict_translator.translate(schema) == "enum Letters {\n    a,\n    a-b\n}"

    def test_non_string_values(self, translator):
        schema = primitive("integer", name="level", enum=[1, 2])
        assert translator.translate(schema) == "enum Level {\n    1,\n    2\n}"

    def test_enum_wins_over_composition(self, translator):
        schema = composed(
            "Mode", CompositionKind.ONE_OF, [reference("A")], enum=["fast", "slow"]
        )
        assert translator.translate(schema).startswith("enum Mode {")

    def test_array_wins_over_enum(self, translator):
        schema = array_of(primitive("string"), enum=["a"])
        assert translator.translate(schema) == "list<string>"


class TestCompositions:
    """oneOf becomes a variant, allOf a flattened record, anyOf a placeholder."""

    def test_one_of_variant(self, translator):
        schema = composed(
            "Shape",
            CompositionKind.ONE_OF,
            [reference("Circle"), reference("Square"), primitive("string", name="label")],
        )
        assert translator.translate(schema) == (
            "variant Shape {\n"
            "    circle(Circle),\n"
            "    square(Square),\n"
            "    label(string),\n"
            "}"
        )

    def test_one_of_keeps_member_count_and_order(self, translator):
        members = [reference(name) for name in ("C", "A", "B", "A")]
        result = translator.translate(composed("U", CompositionKind.ONE_OF, members))
        arms = result.split("\n")[1:-1]
        assert arms == ["    c(C),", "    a(A),", "    b(B),", "    a(A),"]

    def test_all_of_record(self, translator):
        schema = composed(
            "Item",
            CompositionKind.ALL_OF,
            [obj(id=primitive("integer")), obj(name=primitive("string"))],
        )
        assert translator.translate(schema) == (
            "record Item {\n    id: s32,\n    name: string,\n}"
        )

    def test_all_of_keeps_duplicate_fields(self, translator):
        schema = composed(
            "Item",
            CompositionKind.ALL_OF,
            [
                obj(id=primitive("integer")),
                obj(id=primitive("string"), name=primitive("string")),
            ],
        )
        assert translator.translate(schema) == (
            "record Item {\n    id: s32,\n    id: string,\n    name: string,\n}"
        )
        assert len(translator.flattened_fields(schema)) == 3

    def test_strict_mode_merges_duplicate_fields(self, strict_translator):
        schema = composed(
            "Item",
            CompositionKind.ALL_OF,
            [
                obj(id=primitive("integer")),
                obj(id=primitive("string"), name=primitive("string")),
            ],
        )
        assert strict_translator.translate(schema) == (
            "record Item {\n    id: s32,\n    name: string,\n}"
        )

    def test_all_of_reads_only_direct_properties(self, translator):
        nested = composed("Inner", CompositionKind.ALL_OF, [obj(hidden=primitive("string"))])
        schema = composed(
            "Outer", CompositionKind.ALL_OF, [reference("Base"), nested, obj(x=primitive("double"))]
        )
        assert translator.translate(schema) == "record Outer {\n    x: float64,\n}"

    def test_field_names_are_sanitized(self, translator):
        schema = composed(
            "Item", CompositionKind.ALL_OF, [obj(**{"createdAt": primitive("date-time")})]
        )
        assert "    createdat: string," in translator.translate(schema)

    def test_any_of_placeholder(self, translator):
        schema = composed(
            "Loose", CompositionKind.ANY_OF, [primitive("string"), primitive("integer")]
        )
        assert translator.translate(schema) == ANY_OF_PLACEHOLDER == "record"

    @pytest.mark.parametrize("kind", [CompositionKind.ONE_OF, CompositionKind.ALL_OF])
    def test_empty_composition_placeholder(self, translator, kind):
        assert translator.translate(composed("Empty", kind, [])) == "record"

    def test_strict_mode_rejects_any_of(self, strict_translator):
        schema = composed("Loose", CompositionKind.ANY_OF, [primitive("string")])
        with pytest.raises(UnsupportedCompositionError, match="anyOf"):
            strict_translator.translate(schema)

    def test_nested_composition_inside_array(self, translator):
        schema = array_of(composed("Pick", CompositionKind.ONE_OF, [reference("A")]))
        assert translator.translate(schema) == "list<variant Pick {\n    a(A),\n}>"


class TestCycleGuard:
    """In-memory cycles fail fast instead of recursing forever."""

    def test_self_containing_array(self, translator):
        node = array_of(None)
        node.items = node
        with pytest.raises(CyclicSchemaError):
            translator.translate(node)

    def test_shared_nodes_are_not_cycles(self, translator):
        shared = primitive("string")
        schema = composed(
            "Pair", CompositionKind.ALL_OF, [obj(a=shared), obj(b=shared)]
        )
        assert translator.translate(schema) == "record Pair {\n    a: string,\n    b: string,\n}"

    def test_references_do_not_recurse(self, translator):
        node = obj(parent=reference("Node"))
        node.name = "Node"
        schema = composed("Tree", CompositionKind.ALL_OF, [node])
        assert translator.translate(schema) == "record Tree {\n    parent: Node,\n}"

    def test_translation_is_repeatable(self, translator):
        schema = composed("Shape", CompositionKind.ONE_OF, [reference("Circle")])
        assert translator.translate(schema) == translator.translate(schema)
