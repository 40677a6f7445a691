"""Run log: one JSON object per line in ``<run_dir>/run_log.jsonl``."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

LOGGER = logging.getLogger(__name__)

RUN_LOG_NAME = "run_log.jsonl"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def log_event(log_path: Path, event_type: str, payload: Optional[Dict[str, Any]] = None) -> None:
    """Append ``event_type`` with its payload to the run log at ``log_path``."""
    record = {
        "timestamp": _utc_timestamp(),
        "event_type": event_type,
        "payload": payload or {},
    }
    LOGGER.debug("%s %s", event_type, record["payload"])
    log_path.parent.mkdir(parents=True, exist_ok=True)
    with log_path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record, ensure_ascii=True, sort_keys=True) + "\n")


def read_events(log_path: Path) -> List[Dict[str, Any]]:
    with log_path.open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]
