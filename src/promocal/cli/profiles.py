"""View profiles (labels and display caps) exposed via the CLI."""

from __future__ import annotations

from dataclasses import dataclass

from promocal.layout.projection import WEEKDAY_NAMES_EN, WEEKDAY_NAMES_ES


@dataclass(frozen=True)
class ViewProfile:
    """Presentation settings applied when printing calendar views."""

    name: str
    description: str
    weekday_names: tuple[str, ...] = WEEKDAY_NAMES_ES
    max_badges: int = 2
    show_weather: bool = True


DEFAULT_PROFILES: dict[str, ViewProfile] = {
    "es": ViewProfile(
        name="es",
        description="Spanish weekday labels, two inline badges per cell, weather shown.",
    ),
    "en": ViewProfile(
        name="en",
        description="English weekday labels, two inline badges per cell, weather shown.",
        weekday_names=WEEKDAY_NAMES_EN,
    ),
    "compact": ViewProfile(
        name="compact",
        description="English labels, a single badge per cell and no weather column.",
        weekday_names=WEEKDAY_NAMES_EN,
        max_badges=1,
        show_weather=False,
    ),
}


def get_profile(name: str) -> ViewProfile:
    key = name.lower()
    if key not in DEFAULT_PROFILES:
        available = ", ".join(sorted(DEFAULT_PROFILES))
        raise KeyError(f"Unknown profile '{name}'. Available: {available}")
    return DEFAULT_PROFILES[key]


def list_profiles() -> tuple[ViewProfile, ...]:
    return tuple(DEFAULT_PROFILES[key] for key in sorted(DEFAULT_PROFILES))


__all__ = ["ViewProfile", "DEFAULT_PROFILES", "get_profile", "list_profiles"]
