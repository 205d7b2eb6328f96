"""Conversion of scanned CLI tools into modules, one per leaf command."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import replace
from typing import Any

from apexe import annotations, schema
from apexe.models import (
    HelpFormat,
    ScannedCLITool,
    ScannedCommand,
    ScannedModule,
)

logger = logging.getLogger(__name__)

_MAX_ALIAS_LENGTH = 64
_MCP_ALIAS_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")
_MCP_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]")


class DisplayResolver:
    """Fills ``metadata["display"]`` with per-surface names for each module."""

    def resolve(self, modules: Iterable[ScannedModule]) -> list[ScannedModule]:
        """Return copies of ``modules`` carrying display metadata.

        Raises ``ValueError`` when an alias is longer than 64 characters or is
        not a valid MCP tool name once sanitised.
        """
        return [self._resolve_one(module) for module in modules]

    def _resolve_one(self, module: ScannedModule) -> ScannedModule:
        alias = module.metadata.get("suggested_alias") or module.module_id
        mcp_alias = _MCP_UNSAFE_RE.sub("_", alias)

        if len(alias) > _MAX_ALIAS_LENGTH or len(mcp_alias) > _MAX_ALIAS_LENGTH:
            raise ValueError(
                f"Alias '{alias}' for module '{module.module_id}' exceeds "
                f"{_MAX_ALIAS_LENGTH} characters"
            )
        if not _MCP_ALIAS_RE.fullmatch(mcp_alias):
            raise ValueError(
                f"Alias '{mcp_alias}' for module '{module.module_id}' is not a valid "
                "tool name"
            )

        description = module.description
        display: dict[str, Any] = {
            "alias": alias,
            "description": description,
            "tags": list(module.tags),
            "cli": {"alias": alias, "description": description},
            "mcp": {"alias": mcp_alias, "description": description},
            "a2a": {"alias": alias, "description": description},
        }
        metadata = dict(module.metadata)
        metadata["display"] = display
        return replace(module, metadata=metadata)


def _help_format_tag(help_format: HelpFormat) -> str:
    return help_format.value


def _iter_leaves(
    commands: Iterable[ScannedCommand], path: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], ScannedCommand]]:
    """Yield ``(path, command)`` for every command that has no subcommands."""
    for command in commands:
        command_path = (*path, command.name)
        if command.subcommands:
            yield from _iter_leaves(command.subcommands, command_path)
        else:
            yield command_path, command


def _synthesize_root_command(tool: ScannedCLITool) -> ScannedCommand:
    return ScannedCommand(
        name=tool.name,
        full_command=tool.name,
        help_format=HelpFormat.UNKNOWN,
        structured_output=replace(tool.structured_output),
    )


class CliToolConverter:
    """Converts scanned CLI tools into :class:`ScannedModule` instances."""

    def __init__(self, namespace: str = "cli") -> None:
        self.namespace = namespace

    def convert(self, tool: ScannedCLITool) -> list[ScannedModule]:
        """One module per leaf command, or one for the root if there are none."""
        if tool.subcommands:
            modules = [
                self._build_module(tool, path, command)
                for path, command in _iter_leaves(tool.subcommands)
            ]
        else:
            modules = [self._build_module(tool, (), None)]
        return self._apply_display_resolver(modules)

    def convert_all(self, tools: Iterable[ScannedCLITool]) -> list[ScannedModule]:
        """Convert several tools, concatenating their modules in order."""
        return [module for tool in tools for module in self.convert(tool)]

    def _build_module(
        self,
        tool: ScannedCLITool,
        path: tuple[str, ...],
        command: ScannedCommand | None,
    ) -> ScannedModule:
        module_id = ".".join((self.namespace, tool.name, *path))

        source = command if command is not None else _synthesize_root_command(tool)
        if source.description:
            description = source.description
        elif command is not None:
            description = f"Execute {command.full_command}"
        else:
            description = f"Execute {tool.name}"

        help_format = _help_format_tag(
            command.help_format if command is not None else HelpFormat.UNKNOWN
        )

        tags = ["cli", tool.name, help_format]
        if (command is not None and command.structured_output.supported) or (
            command is None and tool.structured_output.supported
        ):
            tags.append("structured-output")

        if path:
            target = f"exec://{tool.binary_path} {source.full_command}"
        else:
            target = f"exec://{tool.binary_path}"

        suggested_alias = "_".join((tool.name, *path))
        metadata: dict[str, Any] = {
            "scan_tier": tool.scan_tier,
            "help_format": help_format,
            "binary_path": tool.binary_path,
            "suggested_alias": suggested_alias,
        }

        return ScannedModule(
            module_id=module_id,
            description=description,
            input_schema=schema.build_input_schema(source, tool.global_flags),
            output_schema=schema.build_output_schema(source),
            tags=tags,
            target=target,
            version=tool.version if tool.version is not None else "unknown",
            annotations=annotations.infer(source),
            documentation=source.raw_help or None,
            metadata=metadata,
            warnings=list(tool.warnings),
        )

    @staticmethod
    def _apply_display_resolver(modules: list[ScannedModule]) -> list[ScannedModule]:
        try:
            return DisplayResolver().resolve(modules)
        except ValueError as exc:
            logger.warning("DisplayResolver failed, skipping display metadata: %s", exc)
            return modules