"""Console color palettes and selection helpers.

A palette is resolved once per run from configuration and handed to the
console renderer; nothing reads color escapes from module globals.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    """Semantic ANSI palette used by the console renderer."""

    name: str
    directory: str
    file: str
    permissions: str
    size: str
    reset: str


DEFAULT_PALETTE = Palette(
    name="default",
    directory="\033[1;34m",
    file="\033[0;32m",
    permissions="\033[0;36m",
    size="\033[0;33m",
    reset="\033[0m",
)

OCEAN_PALETTE = Palette(
    name="ocean",
    directory="\033[1;38;5;45m",
    file="\033[38;5;252m",
    permissions="\033[38;5;73m",
    size="\033[38;5;153m",
    reset="\033[0m",
)

PLAIN_PALETTE = Palette(
    name="plain",
    directory="",
    file="",
    permissions="",
    size="",
    reset="",
)

_PALETTES: dict[str, Palette] = {
    DEFAULT_PALETTE.name: DEFAULT_PALETTE,
    OCEAN_PALETTE.name: OCEAN_PALETTE,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_PALETTES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_PALETTE.name
    candidate = str(name).strip().lower()
    if candidate in _PALETTES:
        return candidate
    return DEFAULT_PALETTE.name


def resolve_palette(name: str | None, *, color_enabled: bool) -> Palette:
    """Return the concrete palette for the requested theme and color mode."""
    if not color_enabled:
        return PLAIN_PALETTE
    return _PALETTES[normalize_theme_name(name)]


__all__ = [
    "Palette",
    "DEFAULT_PALETTE",
    "OCEAN_PALETTE",
    "PLAIN_PALETTE",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_palette",
]
