"""Run report helpers for the command-line tools."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any

DEFAULT_REPORT_DIR = "output/run_reports"


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = DEFAULT_REPORT_DIR,
    tool: str | None = None,
) -> str:
    """Write a JSON run report and return its path.

    The file is named ``<tool>-<run_id>.json`` (or ``<run_id>.json`` without
    a tool name). ``run_id`` and a UTC timestamp are added unless the report
    already carries them.
    """
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    if tool:
        payload.setdefault("tool", tool)
        filename = f"{tool}-{run_id}.json"
    else:
        filename = f"{run_id}.json"
    path = os.path.join(output_dir, filename)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    return path
