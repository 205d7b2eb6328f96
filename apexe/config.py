"""Global apexe configuration and its layered resolution."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1
_SCAN_DEPTH_RANGE = range(1, 6)


def _apexe_home() -> Path:
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        home = Path(".")
    return home / ".apexe"


def _parse_unsigned(text: str, limit: int) -> int | None:
    """Parse a non-negative integer no larger than ``limit``, else ``None``."""
    if not _UNSIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    return value if value <= limit else None


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value


def _require_uint(data: Mapping[str, Any], key: str, limit: int) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= limit:
        raise TypeError(f"'{key}' must be a non-negative integer")
    return value


def _require_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise TypeError(f"'{key}' must be a boolean")
    return value


@dataclass
class ApexeConfig:
    """Global apexe configuration.

    Resolution priority: CLI overrides > environment variables > config file > defaults.
    """

    modules_dir: Path = field(default_factory=lambda: _apexe_home() / "modules")
    cache_dir: Path = field(default_factory=lambda: _apexe_home() / "cache")
    config_dir: Path = field(default_factory=_apexe_home)
    audit_log: Path = field(default_factory=lambda: _apexe_home() / "audit.jsonl")
    log_level: str = "info"
    default_timeout: int = 30
    scan_depth: int = 2
    json_output_preference: bool = True
    core_config: dict[str, Any] | None = field(default=None, compare=False)

    def ensure_dirs(self) -> None:
        """Create the modules, cache and config directories if missing."""
        for directory in (self.modules_dir, self.cache_dir, self.config_dir):
            Path(directory).mkdir(parents=True, exist_ok=True)

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form; ``core_config`` is not included."""
        return {
            "modules_dir": str(self.modules_dir),
            "cache_dir": str(self.cache_dir),
            "config_dir": str(self.config_dir),
            "audit_log": str(self.audit_log),
            "log_level": self.log_level,
            "default_timeout": self.default_timeout,
            "scan_depth": self.scan_depth,
            "json_output_preference": self.json_output_preference,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApexeConfig:
        """Build from a mapping holding every field; raises on missing or mistyped ones."""
        if not isinstance(data, Mapping):
            raise TypeError("configuration must be a mapping")
        return cls(
            modules_dir=Path(_require_str(data, "modules_dir")),
            cache_dir=Path(_require_str(data, "cache_dir")),
            config_dir=Path(_require_str(data, "config_dir")),
            audit_log=Path(_require_str(data, "audit_log")),
            log_level=_require_str(data, "log_level"),
            default_timeout=_require_uint(data, "default_timeout", _U64_MAX),
            scan_depth=_require_uint(data, "scan_depth", _U32_MAX),
            json_output_preference=_require_bool(data, "json_output_preference"),
        )


def _load_file(config: ApexeConfig, file_path: Path) -> ApexeConfig:
    contents = file_path.read_text(encoding="utf-8")
    try:
        return ApexeConfig.from_dict(yaml.safe_load(contents))
    except (yaml.YAMLError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Malformed config file %s, using defaults: %s", file_path, exc)
        return config


def _apply_env(config: ApexeConfig) -> None:
    env = os.environ
    if "APEXE_MODULES_DIR" in env:
        config.modules_dir = Path(env["APEXE_MODULES_DIR"])
    if "APEXE_CACHE_DIR" in env:
        config.cache_dir = Path(env["APEXE_CACHE_DIR"])
    if "APEXE_LOG_LEVEL" in env:
        config.log_level = env["APEXE_LOG_LEVEL"]
    if "APEXE_TIMEOUT" in env:
        raw = env["APEXE_TIMEOUT"]
        timeout = _parse_unsigned(raw, _U64_MAX)
        if timeout is None:
            logger.warning("Invalid APEXE_TIMEOUT value: %s, using default", raw)
        else:
            config.default_timeout = timeout
    if "APEXE_SCAN_DEPTH" in env:
        depth = _parse_unsigned(env["APEXE_SCAN_DEPTH"], _U32_MAX)
        if depth is not None and depth in _SCAN_DEPTH_RANGE:
            config.scan_depth = depth
        else:
            logger.warning("Invalid APEXE_SCAN_DEPTH value, using default")


def _apply_overrides(config: ApexeConfig, overrides: Mapping[str, str]) -> None:
    if "modules_dir" in overrides:
        config.modules_dir = Path(overrides["modules_dir"])
    if "log_level" in overrides:
        config.log_level = overrides["log_level"]
    if "scan_depth" in overrides:
        depth = _parse_unsigned(overrides["scan_depth"], _U32_MAX)
        if depth is not None:
            if depth in _SCAN_DEPTH_RANGE:
                config.scan_depth = depth
            else:
                logger.warning("Invalid scan_depth override: %d, must be 1-5", depth)
    if "timeout" in overrides:
        timeout = _parse_unsigned(overrides["timeout"], _U64_MAX)
        if timeout is not None:
            if timeout > 0:
                config.default_timeout = timeout
            else:
                logger.warning("Invalid timeout override: %d, must be > 0", timeout)


def _load_core_config(config: ApexeConfig) -> None:
    core_path = Path(config.config_dir) / "apcore.yaml"
    if not core_path.exists():
        return
    try:
        data = yaml.safe_load(core_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Failed to load apcore config %s: %s", core_path, exc)
        return
    if isinstance(data, dict):
        config.core_config = data
    elif data is None:
        config.core_config = {}
    else:
        logger.warning("Failed to load apcore config %s: not a mapping", core_path)


def load_config(
    config_path: str | Path | None = None,
    cli_overrides: Mapping[str, str] | None = None,
) -> ApexeConfig:
    """Resolve configuration from defaults, file, environment and CLI overrides.

    A malformed config file is ignored with a warning; an unreadable one raises
    ``OSError``.
    """
    config = ApexeConfig()

    file_path = Path(config_path) if config_path is not None else config.config_dir / "config.yaml"
    if file_path.exists():
        config = _load_file(config, file_path)

    _apply_env(config)

    if cli_overrides is not None:
        _apply_overrides(config, cli_overrides)

    _load_core_config(config)
    return config