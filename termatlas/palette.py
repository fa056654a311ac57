"""Colours for paint classes: ANSI escape palettes and RGB export colours."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .canvas import MAX_SHADES, NUM_TRACKS, SHADE_BASE, TRACK_BASE, PaintClass, is_shade, is_track

RESET = "\033[0m"


def shade_level(band: int, bands: int) -> float:
    """Daylight fraction of a night-ness band: 1.0 for full day, 0.0 for full night."""

    return (bands - 1 - band) / (bands - 1)


@dataclass(frozen=True)
class EscapePalette:
    """Escape sequences per paint class. ``shades`` run from night to day."""

    name: str
    highlight: str
    sun: str
    sun_border: str
    shades: Tuple[str, ...]
    line: str
    tracks: Tuple[str, ...]
    title: str
    reset: str = RESET

    def sequence_for(self, paint: int, bands: int = MAX_SHADES) -> Optional[str]:
        """Escape sequence for a paint class, or ``None`` when it prints uncoloured."""

        if paint == PaintClass.HIGHLIGHT:
            return self.highlight
        if paint == PaintClass.SUN:
            return self.sun
        if paint == PaintClass.SUN_BORDER:
            return self.sun_border
        if paint == PaintClass.WORLD_BORDER:
            return self.line
        if is_track(paint):
            return self.tracks[paint - TRACK_BASE]
        if is_shade(paint):
            level = shade_level(paint - SHADE_BASE, bands)
            return self.shades[int(round(level * (len(self.shades) - 1)))]
        return None


PALETTE_256 = EscapePalette(
    name="256",
    highlight="\033[38;5;196m",
    sun="\033[38;5;220m",
    sun_border="\033[38;5;220m",
    shades=(
        "\033[38;5;18m",
        "\033[38;5;19m",
        "\033[38;5;21m",
        "\033[38;5;26m",
        "\033[38;5;30m",
        "\033[38;5;35m",
        "\033[38;5;40m",
        "\033[38;5;46m",
    ),
    line="\033[38;5;255m",
    tracks=("\033[38;5;201m", "\033[38;5;255m", "\033[38;5;202m"),
    title="\033[1m",
)

PALETTE_8 = EscapePalette(
    name="8",
    highlight="\033[31;1m",
    sun="\033[33m",
    sun_border="\033[36m",
    shades=(
        "\033[34m",
        "\033[34m",
        "\033[34;1m",
        "\033[34;1m",
        "\033[32m",
        "\033[32m",
        "\033[32;1m",
        "\033[32;1m",
    ),
    line="\033[37m",
    tracks=("\033[35;1m", "\033[35;1m", "\033[35;1m"),
    title="\033[1m",
)

COLOR_MODES = (0, 8, 256)


def palette_for(colors: int) -> Optional[EscapePalette]:
    """Palette for a colour count: 256, 8, or 0 for no colour at all."""

    if colors == 256:
        return PALETTE_256
    if colors == 8:
        return PALETTE_8
    if colors == 0:
        return None
    raise ValueError(f"Unsupported colour count {colors}; expected one of {COLOR_MODES}")


def export_colors(bands: int = MAX_SHADES) -> np.ndarray:
    """``(256, 3)`` RGB lookup table used when the canvas is saved as an image."""

    table = np.zeros((256, 3), dtype=np.uint8)
    table[PaintClass.LAND] = (200, 200, 200)
    table[PaintClass.WORLD_BORDER] = (255, 255, 255)
    table[PaintClass.SUN_BORDER] = (255, 255, 0)
    table[PaintClass.SUN] = (255, 255, 0)
    table[PaintClass.HIGHLIGHT] = (255, 0, 0)
    for band in range(bands):
        level = shade_level(band, bands)
        table[SHADE_BASE + band] = (0, round(255 * level), round(255 * (1.0 - level)))
    for track in range(NUM_TRACKS):
        table[TRACK_BASE + track] = (255, 0, round(255 * (NUM_TRACKS - 1 - track) / (NUM_TRACKS - 1)))
    return table
