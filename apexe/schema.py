"""JSON Schemas describing the inputs and outputs of a scanned command."""

from __future__ import annotations

import math
import re
from typing import Any

from apexe.models import ScannedArg, ScannedCommand, ScannedFlag, ValueType

_JSON_TYPES = {
    ValueType.STRING: "string",
    ValueType.INTEGER: "integer",
    ValueType.FLOAT: "number",
    ValueType.BOOLEAN: "boolean",
    ValueType.PATH: "string",
    ValueType.ENUM: "string",
    ValueType.URL: "string",
    ValueType.UNKNOWN: "string",
}

_FORMAT_HINTS = {ValueType.PATH: "path", ValueType.URL: "uri"}

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _parse_integer(text: str) -> int | None:
    if not _INTEGER_RE.fullmatch(text):
        return None
    value = int(text)
    if _I64_MIN <= value <= _I64_MAX:
        return value
    return None


def _parse_float(text: str) -> float | None:
    if not text or "_" in text or any(ch.isspace() for ch in text):
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _coerce_default(flag: ScannedFlag) -> Any:
    """The flag's default converted to a JSON value of its type."""
    default = flag.default
    if flag.value_type is ValueType.INTEGER:
        number = _parse_integer(default)
        return default if number is None else number
    if flag.value_type is ValueType.FLOAT:
        number = _parse_float(default)
        if number is None:
            return default
        # Non-finite numbers have no JSON representation.
        return number if math.isfinite(number) else None
    if flag.value_type is ValueType.BOOLEAN:
        return default == "true"
    return default


def _array_schema(base_type: str, description: str) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "array", "items": {"type": base_type}}
    if description:
        schema["description"] = description
    return schema


def _scalar_schema(value_type: ValueType, description: str) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": _JSON_TYPES[value_type]}
    hint = _FORMAT_HINTS.get(value_type)
    if hint is not None:
        schema["format"] = hint
    if description:
        schema["description"] = description
    return schema


def _flag_schema(flag: ScannedFlag) -> dict[str, Any]:
    if flag.repeatable:
        return _array_schema(_JSON_TYPES[flag.value_type], flag.description)

    schema = _scalar_schema(flag.value_type, flag.description)
    if flag.default is not None:
        schema["default"] = _coerce_default(flag)
    elif flag.value_type is ValueType.BOOLEAN:
        schema["default"] = False
    if flag.enum_values is not None:
        schema["enum"] = list(flag.enum_values)
    return schema


def _arg_schema(arg: ScannedArg) -> dict[str, Any]:
    if arg.variadic:
        return _array_schema(_JSON_TYPES[arg.value_type], arg.description)
    return _scalar_schema(arg.value_type, arg.description)


def build_input_schema(
    command: ScannedCommand, global_flags: list[ScannedFlag]
) -> dict[str, Any]:
    """Input schema merging command flags, global flags and positional arguments.

    Command flags take precedence; a global flag is included only when its
    canonical name does not collide with a command flag.
    """
    properties: dict[str, Any] = {}
    required: list[str] = []

    for flag in command.flags:
        name = flag.canonical_name()
        properties[name] = _flag_schema(flag)
        if flag.required:
            required.append(name)

    for flag in global_flags:
        name = flag.canonical_name()
        if name in properties:
            continue
        properties[name] = _flag_schema(flag)
        if flag.required:
            required.append(name)

    for arg in command.positional_args:
        name = arg.name.lower().replace("-", "_")
        properties[name] = _arg_schema(arg)
        if arg.required:
            required.append(name)

    schema: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
    }
    if required:
        schema["required"] = required
    return schema


def build_output_schema(command: ScannedCommand) -> dict[str, Any]:
    """Output schema: stdout, stderr, exit code, and parsed JSON when supported."""
    properties: dict[str, Any] = {
        "stdout": {
            "type": "string",
            "description": "Standard output from the command",
        },
        "stderr": {
            "type": "string",
            "description": "Standard error output from the command",
        },
        "exit_code": {
            "type": "integer",
            "description": "Process exit code (0 = success)",
        },
    }
    if command.structured_output.supported:
        properties["json_output"] = {
            "type": "object",
            "description": "Parsed JSON output (when structured output is available)",
        }
    return {
        "type": "object",
        "properties": properties,
        "required": ["stdout", "stderr", "exit_code"],
    }