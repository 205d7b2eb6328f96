"""Command-line interface: argument parsing and the ``config`` command."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import yaml

from apexe.config import ApexeConfig

_PROG = "apexe"
_VERSION = "0.2.0"
_DESCRIPTION = (
    "apexe -- Outside-In CLI-to-Agent Bridge. "
    "Wraps CLI tools into governed apcore modules served via MCP/A2A."
)


def _depth(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{text}'") from None
    if not 1 <= value <= 5:
        raise argparse.ArgumentTypeError(f"{value} is not in 1..=5")
    return value


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{text}'") from None
    if not 1 <= value <= 65535:
        raise argparse.ArgumentTypeError(f"{value} is not in 1..=65535")
    return value


def _add_log_level(parser: argparse.ArgumentParser, default: object) -> None:
    parser.add_argument(
        "--log-level",
        default=default,
        help="Log level (trace, debug, info, warn, error)",
    )


def _add_scan(subparsers: argparse._SubParsersAction) -> None:
    scan = subparsers.add_parser(
        "scan",
        help="Scan CLI tools and generate apcore binding files.",
        description="Scan CLI tools and generate apcore binding files.",
    )
    _add_log_level(scan, argparse.SUPPRESS)
    scan.add_argument("tools", nargs="+", metavar="TOOLS", help="CLI tool names to scan")
    scan.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory for binding files (default: ~/.apexe/modules/)",
    )
    scan.add_argument(
        "--depth", type=_depth, default=2, help="Maximum subcommand recursion depth (1-5)"
    )
    scan.add_argument("--no-cache", action="store_true", help="Force re-scan, bypassing cache")
    scan.add_argument(
        "--format",
        choices=("json", "yaml", "table"),
        default="table",
        help="Output format for scan results",
    )


def _add_serve(subparsers: argparse._SubParsersAction) -> None:
    serve = subparsers.add_parser(
        "serve",
        help="Start MCP server for scanned CLI tools.",
        description="Start MCP server for scanned CLI tools.",
    )
    _add_log_level(serve, argparse.SUPPRESS)
    serve.add_argument(
        "--transport",
        choices=("stdio", "http", "sse"),
        default="stdio",
        help="MCP transport type",
    )
    serve.add_argument("--host", default="127.0.0.1", help="Host for HTTP transports")
    serve.add_argument(
        "--port", type=_port, default=8000, help="Port for HTTP transports (1-65535)"
    )
    serve.add_argument(
        "--explorer",
        action="store_true",
        help="Enable browser-based Tool Explorer UI (HTTP only)",
    )
    serve.add_argument(
        "--modules-dir", type=Path, default=None, help="Directory containing binding files"
    )
    serve.add_argument("--name", default="apexe", help="MCP server name")
    serve.add_argument(
        "--show-config",
        default=None,
        help="Print integration config snippet (claude-desktop, cursor)",
    )
    serve.add_argument(
        "--tags", default=None, help="Filter exposed tools by tags (comma-separated, AND logic)"
    )
    serve.add_argument("--prefix", default=None, help="Filter exposed tools by module ID prefix")
    serve.add_argument("--acl", type=Path, default=None, help="Path to ACL policy YAML file")
    serve.add_argument(
        "--enable-approval",
        action="store_true",
        help="Enable approval handler for destructive commands",
    )
    serve.add_argument(
        "--no-logging", action="store_true", help="Disable structured logging middleware"
    )
    serve.add_argument(
        "--skip-validation",
        action="store_true",
        help="Skip input validation against tool schemas",
    )


def _add_list(subparsers: argparse._SubParsersAction) -> None:
    list_parser = subparsers.add_parser(
        "list",
        help="List previously scanned CLI tools and their modules.",
        description="List previously scanned CLI tools and their modules.",
    )
    _add_log_level(list_parser, argparse.SUPPRESS)
    list_parser.add_argument(
        "--format", choices=("json", "table"), default="table", help="Output format"
    )
    list_parser.add_argument(
        "--modules-dir", type=Path, default=None, help="Directory containing binding files"
    )


def _add_config(subparsers: argparse._SubParsersAction) -> None:
    config = subparsers.add_parser(
        "config",
        help="Show or initialize apexe configuration.",
        description="Show or initialize apexe configuration.",
    )
    _add_log_level(config, argparse.SUPPRESS)
    config.add_argument("--show", action="store_true", help="Show current configuration")
    config.add_argument("--init", action="store_true", help="Initialize default config file")


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the ``apexe`` command and its subcommands."""
    parser = argparse.ArgumentParser(prog=_PROG, description=_DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"{_PROG} {_VERSION}")
    _add_log_level(parser, "info")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True
    _add_scan(subparsers)
    _add_serve(subparsers)
    _add_list(subparsers)
    _add_config(subparsers)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments; invalid input exits with status 2."""
    return build_parser().parse_args(argv)


def execute_config(config: ApexeConfig, show: bool, init: bool) -> None:
    """Show the configuration as YAML and/or write a default config file."""
    if show:
        print(yaml.safe_dump(config.to_dict(), sort_keys=False))
    if init:
        config_path = Path(config.config_dir) / "config.yaml"
        if config_path.exists():
            print(f"Config already exists at {config_path}")
        else:
            text = yaml.safe_dump(ApexeConfig().to_dict(), sort_keys=False)
            config_path.write_text(text, encoding="utf-8")
            print(f"Config written to {config_path}")