"""Behavioural annotations inferred from a command's name and flags."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from apexe.models import ScannedCommand

READONLY_PATTERNS = frozenset(
    {
        "list", "ls", "show", "get", "status", "info", "version", "help", "describe",
        "view", "cat", "log", "diff", "search", "find", "check", "inspect", "display",
        "print", "whoami", "env", "top", "ps",
    }
)

DESTRUCTIVE_PATTERNS = frozenset(
    {
        "delete", "rm", "remove", "destroy", "purge", "drop", "kill", "prune", "clean",
        "reset", "format", "wipe", "erase",
    }
)

IDEMPOTENT_PATTERNS = frozenset(
    {"get", "list", "show", "status", "info", "describe", "version", "help", "check"}
)

# Flags that escalate a command to requiring approval.
APPROVAL_FLAGS = frozenset(
    {
        "--force", "-f", "--hard", "--recursive", "-r", "--all", "--prune",
        "--no-preserve-root", "--cascade", "--purge", "--yes", "-y",
    }
)

# Flags that indicate idempotent behaviour.
IDEMPOTENT_FLAGS = frozenset(
    {"--dry-run", "--check", "--diff", "--noop", "--simulate", "--whatif", "--plan"}
)


@dataclass
class ModuleAnnotations:
    """Behavioural hints attached to a module."""

    readonly: bool = False
    destructive: bool = False
    idempotent: bool = False
    requires_approval: bool = False
    open_world: bool = True
    streaming: bool = False
    cacheable: bool = False
    cache_ttl: int = 0
    cache_key_fields: list[str] | None = None
    paginated: bool = False
    pagination_style: str = "cursor"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModuleAnnotations:
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        if values.get("cache_key_fields") is not None:
            values["cache_key_fields"] = list(values["cache_key_fields"])
        return cls(**values)


def infer(command: ScannedCommand) -> ModuleAnnotations:
    """Infer behavioural annotations from a command's name and flags."""
    name = command.name.lower()

    destructive = name in DESTRUCTIVE_PATTERNS
    readonly = not destructive and name in READONLY_PATTERNS
    idempotent = name in IDEMPOTENT_PATTERNS
    requires_approval = destructive

    for flag in command.flags:
        names = {flag.long_name or "", flag.short_name or ""}
        if names & APPROVAL_FLAGS:
            requires_approval = True
        if names & IDEMPOTENT_FLAGS:
            idempotent = True

    return ModuleAnnotations(
        readonly=readonly,
        destructive=destructive,
        idempotent=idempotent,
        requires_approval=requires_approval,
        open_world=True,
        streaming=False,
        cacheable=readonly and idempotent,
        cache_ttl=0,
        cache_key_fields=None,
        paginated=False,
        pagination_style="cursor",
    )