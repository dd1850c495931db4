from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Annotated

import click
import pandas as pd
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from promocal.calendar import (
    CalendarAnchor,
    format_local_date,
    month_window,
    parse_local_date,
    shift_anchor,
    week_start_for,
)
from promocal.cli.profiles import ViewProfile, get_profile, list_profiles
from promocal.core.errors import PromoCalValueError
from promocal.io import CalendarBundle, load_bundle
from promocal.layout import MonthCell, WeekProjection, month_grid, week_projection
from promocal.telemetry import append_jsonl, layout_run_record

app = typer.Typer(add_completion=False, no_args_is_help=True, help="Promotional calendar layouts.")
console = Console()
VIEW_CHOICE = click.Choice(["day", "4days", "week", "month"], case_sensitive=False)


def _enable_rich_tracebacks():
    """Enable rich tracebacks with local variables and customized formatting."""
    try:
        import rich.traceback as _rt

        _rt.install(show_locals=True, width=140, extra_lines=2)
    except Exception:
        pass


def _load(bundle_path: Path) -> CalendarBundle:
    try:
        return load_bundle(bundle_path)
    except FileNotFoundError as exc:
        raise typer.BadParameter(f"File not found: {exc}") from exc
    except (PromoCalValueError, ValidationError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def _resolve_profile(name: str) -> ViewProfile:
    try:
        return get_profile(name)
    except KeyError as exc:
        raise typer.BadParameter(str(exc.args[0])) from exc


def _resolve_today(value: str | None) -> date:
    if value is None:
        return date.today()
    try:
        return parse_local_date(value)
    except ValueError as exc:
        raise typer.BadParameter(f"--today expects YYYY-MM-DD (got '{value}')") from exc


def _badges(labels: list[str], cap: int) -> list[str]:
    shown = labels[:cap]
    if len(labels) > cap:
        shown.append(f"+{len(labels) - cap} more")
    return shown


def _month_cell_text(cell: MonthCell, profile: ViewProfile) -> str:
    number = str(cell.date.day)
    if cell.is_today:
        number = f"[bold reverse]{number}[/]"
    elif not cell.is_current_month:
        number = f"[dim]{number}[/]"
    lines = [number]
    lines.extend(_badges([campaign.id for campaign in cell.campaigns], profile.max_badges))
    lines.extend(
        f"[magenta]{label}[/]"
        for label in _badges([event.name or event.id for event in cell.events], profile.max_badges)
    )
    if profile.show_weather and cell.weather is not None:
        lines.append(
            f"[cyan]{cell.weather.temperature_min:.0f}-{cell.weather.temperature_max:.0f}°[/]"
        )
    return "\n".join(lines)


def _print_month(title: str, cells: list[MonthCell], profile: ViewProfile) -> None:
    table = Table(title=title, show_lines=True)
    for name in profile.weekday_names:
        table.add_column(name, justify="left", vertical="top")
    for week in range(6):
        table.add_row(*[_month_cell_text(cell, profile) for cell in cells[week * 7 : week * 7 + 7]])
    console.print(table)


def _print_week(title: str, projection: WeekProjection, profile: ViewProfile) -> None:
    table = Table(title=title, show_lines=True)
    table.add_column("Lane", justify="right")
    for day in projection.week_days:
        header = f"{day.day_name} {day.day_number}"
        table.add_column(f"[bold]{header}[/]" if day.is_today else header)

    event_row = [
        "\n".join(_badges([event.name or event.id for event in day.events], profile.max_badges))
        for day in projection.week_days
    ]
    table.add_row("events", *event_row)

    for row in range(projection.max_rows):
        cells = [""] * len(projection.week_days)
        for block in projection.blocks:
            if block.assignment.row != row:
                continue
            for column in block.assignment.columns():
                label = block.campaign.id
                if column == block.assignment.start_column and block.starts_before_window:
                    label = f"< {label}"
                if column == block.assignment.end_column and block.ends_after_window:
                    label = f"{label} >"
                cells[column] = label
        table.add_row(str(row), *cells)
    console.print(table)


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    console.print(f"Wrote layout JSON to {path}")


@app.command()
def month(
    bundle: Path = typer.Argument(..., help="Path to calendar bundle YAML."),
    year: Annotated[int, typer.Option("--year", "-y", help="Calendar year")] = date.today().year,
    month_number: Annotated[
        int, typer.Option("--month", "-m", help="Month (1-12, rolls over when out of range)")
    ] = date.today().month,
    today: Annotated[
        str | None, typer.Option("--today", help="Override today's date (YYYY-MM-DD).")
    ] = None,
    profile: Annotated[str, typer.Option("--profile", "-p", help="View profile name.")] = "es",
    out_json: Annotated[
        Path | None, typer.Option("--json", help="Optional path to write the 42-cell grid as JSON.")
    ] = None,
    telemetry_log: Annotated[
        Path | None,
        typer.Option("--telemetry-log", help="Append a JSONL run record to this file."),
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Verbose tracebacks")] = False,
) -> None:
    """Print the 6x7 month grid with per-day campaign, event and weather buckets."""
    if debug:
        _enable_rich_tracebacks()
    view_profile = _resolve_profile(profile)
    data = _load(bundle)
    current = _resolve_today(today)
    window = month_window(year, month_number)
    cells = month_grid(
        window.year, window.month, data.campaigns, data.events, data.weather, today=current
    )
    _print_month(
        f"{data.name}: {window.year}-{window.month:02d}", cells, view_profile
    )
    active = {campaign.id for cell in cells for campaign in cell.campaigns}
    console.print(f"[cyan]Campaigns in view:[/] {len(active)}")

    if out_json:
        _write_json(
            out_json,
            {
                "bundle": data.name,
                "window_start": format_local_date(window.first),
                "window_end": format_local_date(window.last),
                "cells": [cell.to_dict() for cell in cells],
            },
        )
    if telemetry_log:
        append_jsonl(
            telemetry_log,
            layout_run_record(window, campaigns=len(data.campaigns), source=str(bundle)),
        )


@app.command()
def week(
    bundle: Path = typer.Argument(..., help="Path to calendar bundle YAML."),
    year: Annotated[int, typer.Option("--year", "-y", help="Calendar year")] = date.today().year,
    month_number: Annotated[
        int, typer.Option("--month", "-m", help="Month (rolls over when out of range)")
    ] = date.today().month,
    day: Annotated[
        int, typer.Option("--day", "-d", help="Any day of the week to show")
    ] = date.today().day,
    today: Annotated[
        str | None, typer.Option("--today", help="Override today's date (YYYY-MM-DD).")
    ] = None,
    profile: Annotated[str, typer.Option("--profile", "-p", help="View profile name.")] = "es",
    out_json: Annotated[
        Path | None, typer.Option("--json", help="Optional path to write the week projection JSON.")
    ] = None,
    lanes_csv: Annotated[
        Path | None, typer.Option("--lanes-csv", help="Optional path to write lane assignments CSV.")
    ] = None,
    telemetry_log: Annotated[
        Path | None,
        typer.Option("--telemetry-log", help="Append a JSONL run record to this file."),
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Verbose tracebacks")] = False,
) -> None:
    """Print the Monday-first week strip with campaigns stacked into lanes."""
    if debug:
        _enable_rich_tracebacks()
    view_profile = _resolve_profile(profile)
    data = _load(bundle)
    current = _resolve_today(today)
    projection = week_projection(
        year,
        month_number,
        day,
        data.campaigns,
        data.events,
        data.weather,
        today=current,
        weekday_names=view_profile.weekday_names,
    )
    window = projection.window
    _print_week(
        f"{data.name}: {format_local_date(window.first)} .. {format_local_date(window.last)}",
        projection,
        view_profile,
    )
    console.print(
        f"[cyan]Lanes:[/] {projection.max_rows} for {len(projection.lane_assignments)} campaign(s)"
    )

    if out_json:
        _write_json(out_json, {"bundle": data.name, **projection.to_dict()})
    if lanes_csv:
        lanes_csv.parent.mkdir(parents=True, exist_ok=True)
        frame = pd.DataFrame(
            [block.to_dict() for block in projection.blocks],
            columns=[
                "campaign_id",
                "start_column",
                "end_column",
                "row",
                "status",
                "name",
                "starts_before_window",
                "ends_after_window",
                "progress",
            ],
        )
        frame.to_csv(lanes_csv, index=False)
        console.print(f"Wrote lane assignments to {lanes_csv}")
    if telemetry_log:
        append_jsonl(
            telemetry_log,
            layout_run_record(
                window,
                campaigns=len(data.campaigns),
                assigned=len(projection.lane_assignments),
                max_rows=projection.max_rows,
                source=str(bundle),
            ),
        )


@app.command("profiles")
def profiles_cmd() -> None:
    """List available view profiles."""
    table = Table(title="View profiles")
    table.add_column("Name")
    table.add_column("Weekdays")
    table.add_column("Badges")
    table.add_column("Description")
    for item in list_profiles():
        table.add_row(item.name, " ".join(item.weekday_names), str(item.max_badges), item.description)
    console.print(table)


@app.command()
def navigate(
    view: Annotated[
        str,
        typer.Option("--view", help="Period to step by.", show_choices=True, click_type=VIEW_CHOICE),
    ] = "week",
    year: Annotated[int, typer.Option("--year", "-y")] = date.today().year,
    month_number: Annotated[int, typer.Option("--month", "-m")] = date.today().month,
    day: Annotated[int, typer.Option("--day", "-d")] = date.today().day,
    steps: Annotated[int, typer.Option("--steps", "-n", help="Periods to move (negative = back).")] = 1,
) -> None:
    """Print the anchor reached after stepping ``steps`` periods of ``view``."""
    anchor = shift_anchor(view.lower(), CalendarAnchor(year, month_number, day), steps)
    console.print(f"Anchor: {anchor.year}-{anchor.month:02d}-{anchor.day:02d}")
    console.print(f"Week start: {week_start_for(anchor)}")


if __name__ == "__main__":
    app()
