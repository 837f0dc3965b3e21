"""
Tests for the schema analyzer: name normalization, ordering and
reference resolution into the IR.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from toml_rpc_codegen.pipeline.analyzer import IR, EntityRef, SchemaAnalyzer
from toml_rpc_codegen.pipeline.config import CodeGeneratorConfig, FieldOrder, VariantOrder
from toml_rpc_codegen.pipeline.errors import SchemaTypeError, ViolationKind
from toml_rpc_codegen.pipeline.schema_ast import EntityKind, SchemaParser, load_schema, loads_schema

TEST_DATA = Path(__file__).parent / "test_data"


def analyze(text: str, config: CodeGeneratorConfig | None = None) -> IR:
    ast = SchemaParser().parse(loads_schema(text))
    return SchemaAnalyzer(config).analyze(ast)


def analyze_error(text: str) -> SchemaTypeError:
    with pytest.raises(SchemaTypeError) as exc_info:
        analyze(text)
    return exc_info.value


class TestBuildMessages:
    """Tests for message building."""

    def test_sample(self):
        """Test the sample message, enum and service."""
        ast = SchemaParser().parse(load_schema(TEST_DATA / "sample.toml"))
        ir = SchemaAnalyzer().analyze(ast, "sample.toml")

        assert ir.source_name == "sample.toml"
        message = ir.messages[0]
        assert message.name == "MyMessage"
        assert [(f.tag, f.name, f.type_name) for f in message.fields] == [(1, "a", "String"), (2, "b", "u32")]

        enum = ir.enums[0]
        assert enum.name == "MyEnum"
        assert [(v.name, v.value) for v in enum.variants] == [("OptionA", 1), ("OptionB", 2)]

        method = ir.services[0].methods[0]
        assert ir.services[0].name == "MyService"
        assert method.name == "my_call"
        assert method.input == EntityRef(EntityKind.MESSAGE, "MyMessage")
        assert method.output == EntityRef(EntityKind.ENUM, "MyEnum")

    def test_names_are_normalized(self):
        """Test PascalCase entity names and snake_case member names."""
        ir = analyze(
            '[message.chat_request]\n"1" = ["roomId", "u32"]\n\n'
            "[enum.reply_status]\nrate_limited = 1\n\n"
            '[rpc.chat_service]\nSendMessage = ["message.chat_request", "enum.reply_status"]\n'
        )
        assert ir.messages[0].name == "ChatRequest"
        assert ir.messages[0].original_name == "chat_request"
        assert ir.messages[0].fields[0].name == "room_id"
        assert ir.messages[0].fields[0].original_name == "roomId"
        assert ir.enums[0].name == "ReplyStatus"
        assert ir.enums[0].variants[0].name == "RateLimited"
        assert ir.services[0].name == "ChatService"
        assert ir.services[0].methods[0].name == "send_message"

    def test_fields_sorted_by_tag(self):
        """Test that fields are ordered by ascending tag by default."""
        ir = analyze('[message.A]\n"3" = ["c", "u32"]\n"1" = ["a", "u32"]\n"2" = ["b", "u32"]\n')
        assert [f.name for f in ir.messages[0].fields] == ["a", "b", "c"]

    def test_tags_sort_numerically(self):
        """Test that tag order is numeric rather than lexicographic."""
        ir = analyze('[message.A]\n"10" = ["ten", "u32"]\n"9" = ["nine", "u32"]\n')
        assert [f.tag for f in ir.messages[0].fields] == [9, 10]

    def test_fields_in_schema_order(self):
        """Test that schema field order can be kept."""
        config = CodeGeneratorConfig(field_order=FieldOrder.SCHEMA)
        ir = analyze('[message.A]\n"3" = ["c", "u32"]\n"1" = ["a", "u32"]\n', config)
        assert [f.name for f in ir.messages[0].fields] == ["c", "a"]

    def test_empty_message(self):
        """Test a message without fields."""
        ir = analyze("[message.Empty]\n")
        assert ir.messages[0].fields == ()

    def test_messages_keep_schema_order(self):
        """Test that messages are emitted in document order."""
        ir = analyze('[message.Zeta]\n"1" = ["a", "u32"]\n\n[message.Alpha]\n"1" = ["a", "u32"]\n')
        assert [m.name for m in ir.messages] == ["Zeta", "Alpha"]

    def test_duplicate_tag_is_a_warning(self, caplog):
        """Test that a tag shared by two fields is accepted with a warning."""
        ir = analyze('[message.A]\n"1" = ["a", "u32"]\n"+1" = ["b", "u32"]\n')
        assert [f.name for f in ir.messages[0].fields] == ["a", "b"]
        assert "tag 1 is used by both 'a' and 'b'" in caplog.text

    def test_duplicate_field_name(self):
        """Test fields whose names collide once normalized."""
        error = analyze_error('[message.A]\n"1" = ["myField", "u32"]\n"2" = ["my_field", "u32"]\n')
        assert error.kind == ViolationKind.DUPLICATE_NAME
        assert error.path == "message.A.2"
        assert "message.A.1" in error.message


class TestBuildEnums:
    """Tests for enum building."""

    def test_variants_keep_schema_order(self):
        """Test that variants keep document order by default."""
        ir = analyze("[enum.E]\nB = 2\nA = 1\n")
        assert [v.name for v in ir.enums[0].variants] == ["B", "A"]

    def test_variants_sorted_by_value(self):
        """Test that variants can be ordered by value."""
        config = CodeGeneratorConfig(variant_order=VariantOrder.VALUE)
        ir = analyze("[enum.E]\nB = 2\nA = 1\n", config)
        assert [v.name for v in ir.enums[0].variants] == ["A", "B"]

    def test_duplicate_value_is_a_warning(self, caplog):
        """Test that a value shared by two variants is accepted with a warning."""
        ir = analyze("[enum.E]\nFirst = 1\nAlias = 1\n")
        assert [v.value for v in ir.enums[0].variants] == [1, 1]
        assert "value 1 is used by both 'First' and 'Alias'" in caplog.text

    def test_duplicate_variant_name(self):
        """Test variants whose names collide once normalized."""
        error = analyze_error("[enum.E]\nOK = 1\nok = 2\n")
        assert error.kind == ViolationKind.DUPLICATE_NAME
        assert error.path == "enum.E.ok"


class TestBuildServices:
    """Tests for service building and reference resolution."""

    def test_references_are_normalized(self):
        """Test that references match entities after PascalCase normalization."""
        ir = analyze(
            '[message.chat_request]\n"1" = ["a", "u32"]\n\n'
            "[enum.reply_status]\nOk = 0\n\n"
            '[rpc.S]\nget = ["message.ChatRequest", "enum.reply_status"]\n'
        )
        method = ir.services[0].methods[0]
        assert method.input.name == "ChatRequest"
        assert method.output.name == "ReplyStatus"

    def test_unresolved_reference(self):
        """Test a reference to a message that does not exist."""
        error = analyze_error('[message.A]\n"1" = ["a", "u32"]\n\n[rpc.S]\ncall = ["message.A", "message.Missing"]\n')
        assert error.kind == ViolationKind.UNRESOLVED_REFERENCE
        assert error.path == "rpc.S.call"
        assert error.message == "message not found: 'Missing'"

    def test_reference_kind_must_match(self):
        """Test that a message is not found through an enum reference."""
        error = analyze_error('[message.A]\n"1" = ["a", "u32"]\n\n[rpc.S]\ncall = ["message.A", "enum.A"]\n')
        assert error.kind == ViolationKind.UNRESOLVED_REFERENCE
        assert error.message == "enum not found: 'A'"

    def test_self_referencing_method(self):
        """Test a method whose input and output are the same entity."""
        ir = analyze('[enum.Status]\nUp = 1\n\n[rpc.Health]\nping = ["enum.Status", "enum.Status"]\n')
        method = ir.services[0].methods[0]
        assert method.input == method.output == EntityRef(EntityKind.ENUM, "Status")

    def test_duplicate_method_name(self):
        """Test methods whose names collide once normalized."""
        error = analyze_error(
            '[message.A]\n"1" = ["a", "u32"]\n\n[rpc.S]\n' 'doIt = ["message.A", "message.A"]\ndo_it = ["message.A", "message.A"]\n'
        )
        assert error.kind == ViolationKind.DUPLICATE_NAME
        assert error.path == "rpc.S.do_it"

    def test_empty_service(self):
        """Test a service without methods."""
        ir = analyze("[rpc.Idle]\n")
        assert ir.services[0].name == "Idle"
        assert ir.services[0].methods == ()


class TestNameValidation:
    """Tests for names that cannot become identifiers."""

    @pytest.mark.parametrize(
        "text, path",
        [
            ('[message."2fa"]\n"1" = ["a", "u32"]\n', "message.2fa"),
            ('[message."___"]\n"1" = ["a", "u32"]\n', "message.___"),
            ('[message.A]\n"1" = ["_", "u32"]\n', "message.A.1"),
            ('[message.A]\n"1" = ["1st", "u32"]\n', "message.A.1"),
            ("[enum.\"-\"]\nA = 1\n", "enum.-"),
            ("[enum.E]\n\"9\" = 1\n", "enum.E.9"),
            ("[rpc.\"_\"]\n", "rpc._"),
            ('[enum.E]\nA = 1\n\n[rpc.S]\n"--" = ["enum.E", "enum.E"]\n', "rpc.S.--"),
        ],
    )
    def test_invalid_name(self, text, path):
        """Test names that normalize to nothing or start with a digit."""
        error = analyze_error(text)
        assert error.kind == ViolationKind.INVALID_NAME
        assert error.path == path

    def test_field_name_without_letters(self):
        """Test a valid non-ASCII message whose field name is only a separator."""
        error = analyze_error('[message."名前"]\n"1" = ["_", "u32"]\n')
        assert error.kind == ViolationKind.INVALID_NAME
        assert error.path == "message.名前.1"
        assert "field name '_'" in error.message

    def test_non_ascii_names(self):
        """Test that letters outside ASCII survive normalization."""
        ir = analyze('[message."Café"]\n"1" = ["prénom", "String"]\n\n[message."Cafè"]\n"1" = ["nom", "String"]\n')
        assert [m.name for m in ir.messages] == ["Café", "Cafè"]
        assert ir.messages[0].fields[0].name == "prénom"

    def test_digits_inside_names(self):
        """Test that digits after the first character are accepted."""
        ir = analyze('[message.v2_request]\n"1" = ["field1", "u32"]\n')
        assert ir.messages[0].name == "V2Request"
        assert ir.messages[0].fields[0].name == "field1"


class TestTypeNamespace:
    """Tests for collisions between generated type names."""

    def test_message_and_enum_collide(self):
        """Test a message and an enum with the same normalized name."""
        error = analyze_error('[message.user]\n"1" = ["a", "u32"]\n\n[enum.User]\nA = 1\n')
        assert error.kind == ViolationKind.DUPLICATE_NAME
        assert error.path == "enum.User"
        assert "message.user" in error.message

    def test_two_messages_collide(self):
        """Test two messages that normalize to the same name."""
        error = analyze_error('[message.my_msg]\n"1" = ["a", "u32"]\n\n[message.MyMsg]\n"1" = ["a", "u32"]\n')
        assert error.kind == ViolationKind.DUPLICATE_NAME
        assert error.path == "message.MyMsg"

    def test_service_and_message_collide(self):
        """Test a service named like a message."""
        error = analyze_error('[message.A]\n"1" = ["a", "u32"]\n\n[rpc.A]\ncall = ["message.A", "message.A"]\n')
        assert error.kind == ViolationKind.DUPLICATE_NAME
        assert error.path == "rpc.A"

    def test_ir_is_immutable(self):
        """Test that IR nodes cannot be modified."""
        ir = analyze('[message.A]\n"1" = ["a", "u32"]\n')
        with pytest.raises(AttributeError):
            ir.messages[0].name = "B"


if __name__ == "__main__":
    pytest.main([__file__])
