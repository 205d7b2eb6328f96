import pytest

from apexe.models import (
    HelpFormat,
    ScannedArg,
    ScannedCommand,
    ScannedFlag,
    StructuredOutputInfo,
    ValueType,
)
from apexe.schema import build_input_schema, build_output_schema


def make_flag(
    long_name,
    description="",
    value_type=ValueType.STRING,
    required=False,
    default=None,
    enum_values=None,
    repeatable=False,
):
    return ScannedFlag(
        long_name=long_name,
        short_name=None,
        description=description,
        value_type=value_type,
        required=required,
        default=default,
        enum_values=enum_values,
        repeatable=repeatable,
        value_name=None,
    )


def make_command(flags=(), args=()):
    return ScannedCommand(
        name="test",
        full_command="tool test",
        description="A test command",
        flags=list(flags),
        positional_args=list(args),
        help_format=HelpFormat.GNU,
        structured_output=StructuredOutputInfo(),
    )


def test_schema_string_flag():
    cmd = make_command([make_flag("--output", "Output file")])
    schema = build_input_schema(cmd, [])
    assert schema["properties"]["output"]["type"] == "string"
    assert schema["properties"]["output"]["description"] == "Output file"


def test_schema_boolean_flag():
    cmd = make_command([make_flag("--verbose", "Enable verbose", ValueType.BOOLEAN)])
    schema = build_input_schema(cmd, [])
    assert schema["properties"]["verbose"]["type"] == "boolean"
    assert schema["properties"]["verbose"]["default"] is False


def test_schema_enum_flag():
    flag = make_flag("--format", "Output format", ValueType.ENUM, enum_values=["json", "text"])
    schema = build_input_schema(make_command([flag]), [])
    assert schema["properties"]["format"]["type"] == "string"
    assert schema["properties"]["format"]["enum"] == ["json", "text"]


def test_schema_required_flag():
    flag = make_flag("--name", "The name", required=True)
    schema = build_input_schema(make_command([flag]), [])
    assert "name" in schema["required"]


def test_schema_repeatable_flag():
    flag = make_flag("--include", "Include pattern", repeatable=True)
    schema = build_input_schema(make_command([flag]), [])
    assert schema["properties"]["include"]["type"] == "array"
    assert schema["properties"]["include"]["items"]["type"] == "string"


def test_schema_positional_arg():
    arg = ScannedArg("file", "Input file", ValueType.PATH, required=True, variadic=False)
    schema = build_input_schema(make_command(args=[arg]), [])
    assert schema["properties"]["file"]["type"] == "string"
    assert "file" in schema["required"]


def test_schema_variadic_arg():
    arg = ScannedArg("files", "Input files", ValueType.STRING, required=False, variadic=True)
    schema = build_input_schema(make_command(args=[arg]), [])
    assert schema["properties"]["files"]["type"] == "array"
    assert schema["properties"]["files"]["items"]["type"] == "string"


def test_schema_global_flags_included():
    cmd_flag = make_flag("--local", "Local flag", ValueType.BOOLEAN)
    global_flag = make_flag("--verbose", "Global verbose", ValueType.BOOLEAN)
    global_collision = make_flag("--local", "Global local", ValueType.STRING)
    schema = build_input_schema(make_command([cmd_flag]), [global_flag, global_collision])
    assert schema["properties"]["verbose"]["type"] == "boolean"
    assert schema["properties"]["local"]["type"] == "boolean"
    assert schema["properties"]["local"]["description"] == "Local flag"


def test_schema_output_json():
    cmd = make_command()
    cmd.structured_output = StructuredOutputInfo(supported=True, flag="--json", format="json")
    schema = build_output_schema(cmd)
    assert schema["properties"]["json_output"]["type"] == "object"
    assert schema["properties"]["stdout"]["type"] == "string"


def test_schema_output_raw():
    schema = build_output_schema(make_command())
    assert schema["properties"]["stdout"]["type"] == "string"
    assert schema["properties"]["stderr"]["type"] == "string"
    assert schema["properties"]["exit_code"]["type"] == "integer"
    assert "json_output" not in schema["properties"]
    assert schema["required"] == ["stdout", "stderr", "exit_code"]


def test_schema_path_flag_has_format():
    flag = make_flag("--config", "Config file", ValueType.PATH)
    schema = build_input_schema(make_command([flag]), [])
    assert schema["properties"]["config"]["type"] == "string"
    assert schema["properties"]["config"]["format"] == "path"


def test_schema_url_flag_has_format():
    flag = make_flag("--url", "Remote URL", ValueType.URL)
    schema = build_input_schema(make_command([flag]), [])
    assert schema["properties"]["url"]["type"] == "string"
    assert schema["properties"]["url"]["format"] == "uri"


def test_schema_no_required_key_when_nothing_required():
    schema = build_input_schema(make_command([make_flag("--opt")]), [])
    assert "required" not in schema
    assert schema["additionalProperties"] is False
    assert schema["type"] == "object"


@pytest.mark.parametrize(
    ("value_type", "default", "expected"),
    [
        (ValueType.INTEGER, "5", 5),
        (ValueType.INTEGER, "-12", -12),
        (ValueType.INTEGER, "abc", "abc"),
        (ValueType.INTEGER, " 5", " 5"),
        (ValueType.FLOAT, "1.5", 1.5),
        (ValueType.FLOAT, "x1", "x1"),
        (ValueType.BOOLEAN, "true", True),
        (ValueType.BOOLEAN, "false", False),
        (ValueType.BOOLEAN, "yes", False),
        (ValueType.STRING, "hello", "hello"),
        (ValueType.PATH, "/tmp", "/tmp"),
    ],
)
def test_schema_default_coercion(value_type, default, expected):
    flag = make_flag("--value", value_type=value_type, default=default)
    schema = build_input_schema(make_command([flag]), [])
    assert schema["properties"]["value"]["default"] == expected
    assert type(schema["properties"]["value"]["default"]) is type(expected)


def test_schema_string_flag_without_default_has_no_default():
    schema = build_input_schema(make_command([make_flag("--name")]), [])
    assert "default" not in schema["properties"]["name"]


def test_schema_repeatable_flag_ignores_default_and_format():
    flag = make_flag("--dir", value_type=ValueType.PATH, default="/tmp", repeatable=True)
    schema = build_input_schema(make_command([flag]), [])
    assert schema["properties"]["dir"] == {"type": "array", "items": {"type": "string"}}


def test_schema_positional_name_normalised():
    arg = ScannedArg("INPUT-FILE", "", ValueType.STRING, required=True, variadic=False)
    schema = build_input_schema(make_command(args=[arg]), [])
    assert schema["properties"]["input_file"] == {"type": "string"}
    assert schema["required"] == ["input_file"]


def test_schema_required_global_flag():
    global_flag = make_flag("--token-file", required=True)
    schema = build_input_schema(make_command(), [global_flag])
    assert schema["required"] == ["token_file"]