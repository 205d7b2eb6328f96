"""Data types describing scanned CLI tools and the modules built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValueType(str, Enum):
    """Type classification for CLI flag and argument values."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    PATH = "path"
    ENUM = "enum"
    URL = "url"
    UNKNOWN = "unknown"


class HelpFormat(str, Enum):
    """Detected help output format."""

    GNU = "gnu"
    CLICK = "click"
    ARGPARSE = "argparse"
    COBRA = "cobra"
    CLAP = "clap"
    UNKNOWN = "unknown"


def _optional_list(value: Any) -> list[str] | None:
    return None if value is None else list(value)


@dataclass
class ScannedFlag:
    """A single CLI flag parsed from help output."""

    long_name: str | None = None
    short_name: str | None = None
    description: str = ""
    value_type: ValueType = ValueType.STRING
    required: bool = False
    default: str | None = None
    enum_values: list[str] | None = None
    repeatable: bool = False
    value_name: str | None = None

    def canonical_name(self) -> str:
        """Preferred property key: long form without dashes, hyphens as underscores."""
        if self.long_name is not None:
            return self.long_name.lstrip("-").replace("-", "_")
        if self.short_name is not None:
            return self.short_name.lstrip("-")
        return "unknown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "long_name": self.long_name,
            "short_name": self.short_name,
            "description": self.description,
            "value_type": self.value_type.value,
            "required": self.required,
            "default": self.default,
            "enum_values": _optional_list(self.enum_values),
            "repeatable": self.repeatable,
            "value_name": self.value_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScannedFlag:
        return cls(
            long_name=data.get("long_name"),
            short_name=data.get("short_name"),
            description=data["description"],
            value_type=ValueType(data["value_type"]),
            required=bool(data["required"]),
            default=data.get("default"),
            enum_values=_optional_list(data.get("enum_values")),
            repeatable=bool(data["repeatable"]),
            value_name=data.get("value_name"),
        )


@dataclass
class ScannedArg:
    """A positional argument parsed from help output."""

    name: str
    description: str = ""
    value_type: ValueType = ValueType.STRING
    required: bool = False
    variadic: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "value_type": self.value_type.value,
            "required": self.required,
            "variadic": self.variadic,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScannedArg:
        return cls(
            name=data["name"],
            description=data["description"],
            value_type=ValueType(data["value_type"]),
            required=bool(data["required"]),
            variadic=bool(data["variadic"]),
        )


@dataclass
class StructuredOutputInfo:
    """Whether and how a CLI tool can emit structured output."""

    supported: bool = False
    flag: str | None = None
    format: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"supported": self.supported, "flag": self.flag, "format": self.format}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StructuredOutputInfo:
        return cls(
            supported=bool(data["supported"]),
            flag=data.get("flag"),
            format=data.get("format"),
        )


@dataclass
class ScannedCommand:
    """A CLI command or subcommand with its parsed metadata."""

    name: str
    full_command: str
    description: str = ""
    flags: list[ScannedFlag] = field(default_factory=list)
    positional_args: list[ScannedArg] = field(default_factory=list)
    subcommands: list[ScannedCommand] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    help_format: HelpFormat = HelpFormat.UNKNOWN
    structured_output: StructuredOutputInfo = field(default_factory=StructuredOutputInfo)
    raw_help: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "full_command": self.full_command,
            "description": self.description,
            "flags": [flag.to_dict() for flag in self.flags],
            "positional_args": [arg.to_dict() for arg in self.positional_args],
            "subcommands": [cmd.to_dict() for cmd in self.subcommands],
            "examples": list(self.examples),
            "help_format": self.help_format.value,
            "structured_output": self.structured_output.to_dict(),
            "raw_help": self.raw_help,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScannedCommand:
        return cls(
            name=data["name"],
            full_command=data["full_command"],
            description=data["description"],
            flags=[ScannedFlag.from_dict(f) for f in data["flags"]],
            positional_args=[ScannedArg.from_dict(a) for a in data["positional_args"]],
            subcommands=[cls.from_dict(c) for c in data["subcommands"]],
            examples=list(data["examples"]),
            help_format=HelpFormat(data["help_format"]),
            structured_output=StructuredOutputInfo.from_dict(data["structured_output"]),
            raw_help=data["raw_help"],
        )


@dataclass
class ScannedCLITool:
    """Complete scan result for a single CLI tool."""

    name: str
    binary_path: str
    version: str | None = None
    subcommands: list[ScannedCommand] = field(default_factory=list)
    global_flags: list[ScannedFlag] = field(default_factory=list)
    structured_output: StructuredOutputInfo = field(default_factory=StructuredOutputInfo)
    scan_tier: int = 1
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "binary_path": self.binary_path,
            "version": self.version,
            "subcommands": [cmd.to_dict() for cmd in self.subcommands],
            "global_flags": [flag.to_dict() for flag in self.global_flags],
            "structured_output": self.structured_output.to_dict(),
            "scan_tier": self.scan_tier,
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScannedCLITool:
        return cls(
            name=data["name"],
            binary_path=data["binary_path"],
            version=data.get("version"),
            subcommands=[ScannedCommand.from_dict(c) for c in data["subcommands"]],
            global_flags=[ScannedFlag.from_dict(f) for f in data["global_flags"]],
            structured_output=StructuredOutputInfo.from_dict(data["structured_output"]),
            scan_tier=int(data["scan_tier"]),
            warnings=list(data["warnings"]),
        )


@dataclass
class ScannedModule:
    """A module description produced from one leaf command of a scanned tool."""

    module_id: str
    description: str
    input_schema: dict[str, Any]
    output_schema: dict[str, Any]
    tags: list[str]
    target: str
    version: str = "1.0.0"
    annotations: Any = None
    documentation: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)