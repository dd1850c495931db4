"""Utilities for appending structured layout-run records."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from promocal.calendar.window import CalendarWindow, format_local_date


def append_jsonl(path: str | Path, record: Mapping[str, Any]) -> None:
    """Append a JSON record as a single line to the given path."""
    path = Path(path)
    if not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        json.dump(record, handle, ensure_ascii=False, separators=(",", ":"))
        handle.write("\n")


def layout_run_record(
    window: CalendarWindow,
    *,
    campaigns: int,
    assigned: int | None = None,
    max_rows: int | None = None,
    source: str | None = None,
) -> dict[str, Any]:
    """Summarise one layout computation for the run log.

    ``assigned`` and ``max_rows`` stay ``None`` for month runs, which place no lanes.
    """
    return {
        "record_type": "layout",
        "schema_version": "1.0",
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "view": window.kind,
        "window_start": format_local_date(window.first),
        "window_end": format_local_date(window.last),
        "campaigns": campaigns,
        "assigned": assigned,
        "max_rows": max_rows,
        "source": source,
    }


__all__ = ["append_jsonl", "layout_run_record"]
