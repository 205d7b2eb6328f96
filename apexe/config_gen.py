"""Configuration snippets for registering the MCP server with client apps."""

from __future__ import annotations

import json
from typing import Any


def _pretty(config: dict[str, Any]) -> str:
    return json.dumps(config, indent=2, ensure_ascii=False)


def generate_claude_config_stdio(name: str) -> str:
    """Claude Desktop configuration for the stdio transport."""
    return _pretty(
        {
            "mcpServers": {
                name: {"command": "apexe", "args": ["serve", "--transport", "stdio"]}
            }
        }
    )


def generate_claude_config_http(name: str, host: str, port: int) -> str:
    """Claude Desktop configuration for an HTTP transport."""
    return _pretty({"mcpServers": {name: {"url": f"http://{host}:{port}/mcp"}}})


def generate_cursor_config(name: str) -> str:
    """Cursor MCP configuration."""
    return _pretty({"mcpServers": {name: {"command": "apexe", "args": ["serve"]}}})


def generate_config(format: str, name: str, transport: str, host: str, port: int) -> str:
    """Generate the snippet for a client format and transport."""
    if format == "claude-desktop":
        if transport == "stdio":
            return generate_claude_config_stdio(name)
        return generate_claude_config_http(name, host, port)
    if format == "cursor":
        return generate_cursor_config(name)
    return f"Unknown config format: {format}"