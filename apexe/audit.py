"""Append-only JSONL audit log of module executions."""

from __future__ import annotations

import hashlib
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class AuditManager:
    """Writes one JSON line per module execution, hashing inputs with a salt."""

    def __init__(self, audit_path: str | Path) -> None:
        self._path = Path(audit_path)
        self._salt = os.urandom(16)

    def _hash_input(self, input_data: Any) -> str:
        canonical = json.dumps(input_data, sort_keys=True, separators=(",", ":"), default=str)
        digest = hashlib.sha256()
        digest.update(self._salt)
        digest.update(canonical.encode("utf-8"))
        return digest.hexdigest()

    def log_execution(
        self,
        module_id: str,
        input_data: Any,
        status: str,
        exit_code: int,
        duration_ms: int,
    ) -> None:
        """Append an execution record; write failures are logged, not raised."""
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "module_id": module_id,
            "input_hash": self._hash_input(input_data),
            "status": status,
            "exit_code": exit_code,
            "duration_ms": duration_ms,
        }
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(entry) + "\n")
        except OSError as exc:
            logger.warning("Failed to write audit log %s: %s", self._path, exc)

    def log_path(self) -> Path:
        """The configured log file path."""
        return self._path