"""Calendar bundle loading utilities (YAML metadata + CSV tables)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

import pandas as pd
import yaml
from pydantic import TypeAdapter

from promocal.calendar.models import (
    CampaignInterval,
    ContextEvent,
    WeatherForecast,
    validate_date_range,
)
from promocal.calendar.window import parse_local_date
from promocal.core.errors import PromoCalValueError

__all__ = [
    "CalendarBundle",
    "load_bundle",
    "load_campaigns",
    "load_events",
    "load_weather",
    "read_csv",
]


@dataclass(slots=True)
class CalendarBundle:
    """Campaigns, events and forecasts scoped to one brand/company."""

    name: str
    campaigns: list[CampaignInterval] = field(default_factory=list)
    events: list[ContextEvent] = field(default_factory=list)
    weather: list[WeatherForecast] = field(default_factory=list)
    source: Path | None = None


def read_csv(path: Path) -> pd.DataFrame:
    """Load a CSV file using pandas with UTF-8 defaults, keeping dates as strings."""
    return pd.read_csv(path, dtype=str, keep_default_na=True)


def _as_optional_value(value: object) -> object | None:
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if pd.isna(cast("Any", value)):
        return None
    return value


def _resolve_path(root: Path, value: str) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = root / path
    if not path.exists():
        raise FileNotFoundError(path)
    return path


def _rows_from_source(source: object, root: Path) -> list[dict[str, object]]:
    if source is None:
        return []
    if isinstance(source, str):
        frame = read_csv(_resolve_path(root, source))
        records = frame.to_dict(orient="records")
    elif isinstance(source, list):
        records = source
    else:
        raise PromoCalValueError(
            f"Expected a CSV path or a list of rows, got {type(source).__name__}"
        )
    rows: list[dict[str, object]] = []
    for record in records:
        if not isinstance(record, dict):
            raise PromoCalValueError(f"Row must be a mapping, got {record!r}")
        cleaned = {str(key): _as_optional_value(value) for key, value in record.items()}
        rows.append({key: value for key, value in cleaned.items() if value is not None})
    return rows


def _check_ranges(rows: Sequence[dict[str, object]], start_key: str, end_key: str) -> None:
    for row in rows:
        start = row.get(start_key)
        end = row.get(end_key)
        if start is None or end is None:
            continue
        try:
            first, last = parse_local_date(str(start)), parse_local_date(str(end))
        except ValueError:
            # left for the model validation to report
            continue
        validate_date_range(
            first,
            last,
            item_id=str(row.get("id")) if row.get("id") is not None else None,
        )


def _check_unique_ids(kind: str, ids: Sequence[str]) -> None:
    seen: set[str] = set()
    duplicates: set[str] = set()
    for item_id in ids:
        if item_id in seen:
            duplicates.add(item_id)
        seen.add(item_id)
    if duplicates:
        raise PromoCalValueError(f"Duplicate {kind} ids: {sorted(duplicates)}")


def load_campaigns(source: object, root: Path = Path(".")) -> list[CampaignInterval]:
    """Validate campaign rows from a CSV path (relative to ``root``) or inline list."""
    rows = _rows_from_source(source, root)
    _check_ranges(rows, "start_date", "end_date")
    campaigns = TypeAdapter(list[CampaignInterval]).validate_python(rows)
    _check_unique_ids("campaign", [campaign.id for campaign in campaigns])
    return campaigns


def load_events(source: object, root: Path = Path(".")) -> list[ContextEvent]:
    rows = _rows_from_source(source, root)
    _check_ranges(rows, "event_date", "end_date")
    events = TypeAdapter(list[ContextEvent]).validate_python(rows)
    _check_unique_ids("event", [event.id for event in events])
    return events


def load_weather(source: object, root: Path = Path(".")) -> list[WeatherForecast]:
    rows = _rows_from_source(source, root)
    return TypeAdapter(list[WeatherForecast]).validate_python(rows)


def load_bundle(path: str | Path) -> CalendarBundle:
    """Load a calendar bundle from YAML.

    The file holds a ``name`` and a ``data`` mapping whose ``campaigns``, ``events`` and
    ``weather`` entries are either CSV paths (relative to the YAML file) or inline row lists.
    Every section is optional; a missing one yields an empty list.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        meta = yaml.safe_load(handle) or {}
    if not isinstance(meta, dict):
        raise PromoCalValueError(f"Bundle {path} must be a YAML mapping")
    data = meta.get("data") or {}
    if not isinstance(data, dict):
        raise PromoCalValueError(f"Bundle {path} 'data' section must be a mapping")
    root = path.parent
    return CalendarBundle(
        name=str(meta.get("name") or path.stem),
        campaigns=load_campaigns(data.get("campaigns"), root),
        events=load_events(data.get("events"), root),
        weather=load_weather(data.get("weather"), root),
        source=path,
    )
