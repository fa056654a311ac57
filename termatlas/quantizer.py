"""Reduce the canvas to characters, one glyph per 2x2 block of cells."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .canvas import MAX_SHADES, Canvas, PaintClass, is_shade, is_track
from .palette import EscapePalette

# Indexed by the corner mask: top-left 8, top-right 4, bottom-left 2, bottom-right 1.
ASCII_GLYPHS = (" ", ".", ",", "_", "'", "|", "/", "J", "`", "\\", "|", "L", '"', "7", "r", "o")
BLOCK_GLYPHS = (" ", "▗", "▖", "▄", "▝", "▐", "▞", "▟", "▘", "▚", "▌", "▙", "▀", "▜", "▛", "█")

CHARSETS: Dict[str, Tuple[str, ...]] = {
    "ascii": ASCII_GLYPHS,
    "blocks": BLOCK_GLYPHS,
}

TITLE_MARGIN = 2
TITLE_ROWS = 5


class Category(enum.Enum):
    HIGHLIGHT = "highlight"
    TRACK = "track"
    SUN = "sun"
    SUN_BORDER = "sun_border"
    SHADE = "shade"
    WORLD_BORDER = "world_border"
    LAND = "land"
    EMPTY = "empty"


def categorize(paint: int) -> Category:
    if paint == PaintClass.EMPTY:
        return Category.EMPTY
    if paint == PaintClass.HIGHLIGHT:
        return Category.HIGHLIGHT
    if paint == PaintClass.SUN:
        return Category.SUN
    if paint == PaintClass.SUN_BORDER:
        return Category.SUN_BORDER
    if paint == PaintClass.WORLD_BORDER:
        return Category.WORLD_BORDER
    if is_track(paint):
        return Category.TRACK
    if is_shade(paint):
        return Category.SHADE
    return Category.LAND


@dataclass(frozen=True)
class GlyphRule:
    """One row of the priority table.

    ``glyph`` overrides the silhouette glyph when set. When several cells of
    the block share the category, the highest paint value wins if
    ``prefer_highest`` is set and the lowest otherwise.
    """

    category: Category
    glyph: Optional[str] = None
    prefer_highest: bool = False


# Highest priority first; the first category present in a block picks both
# the character and the colour.
PRIORITY: Tuple[GlyphRule, ...] = (
    GlyphRule(Category.HIGHLIGHT, "X"),
    GlyphRule(Category.TRACK, "O"),
    GlyphRule(Category.SUN, "S"),
    GlyphRule(Category.SUN_BORDER, ":"),
    GlyphRule(Category.SHADE, prefer_highest=True),
    GlyphRule(Category.WORLD_BORDER),
    GlyphRule(Category.LAND),
)


def corner_mask(a: int, b: int, c: int, d: int) -> int:
    return (bool(a) << 3) | (bool(b) << 2) | (bool(c) << 1) | bool(d)


def resolve_block(cells: Sequence[int]) -> Tuple[Optional[GlyphRule], int]:
    """Winning rule and paint class for the four cells of a block."""

    for rule in PRIORITY:
        members = [paint for paint in cells if categorize(paint) is rule.category]
        if members:
            return rule, max(members) if rule.prefer_highest else min(members)
    return None, PaintClass.EMPTY


def title_cells(columns: int, title: Optional[str]) -> Dict[Tuple[int, int], Tuple[str, bool]]:
    """Characters of the title banner keyed by ``(column, row)``.

    Each value is the character and whether it belongs to the title text.
    The banner is a bordered box centered at the top. It is left out when it
    does not fit across ``columns`` with its margins.
    """

    if not title:
        return {}

    text_start = (columns - len(title)) // 2
    text_end = text_start + len(title)
    box_start = text_start - TITLE_MARGIN
    box_end = text_end + TITLE_MARGIN
    outer_start = box_start - TITLE_MARGIN
    outer_end = box_end + TITLE_MARGIN
    if outer_start < 0 or outer_end > columns:
        return {}

    cells: Dict[Tuple[int, int], Tuple[str, bool]] = {}
    for row in range(TITLE_ROWS):
        for col in range(outer_start, outer_end):
            edge = col in (box_start, box_end - 1)
            is_text = False
            if col < box_start or col >= box_end or row in (0, TITLE_ROWS - 1):
                char = " "
            elif row in (1, TITLE_ROWS - 2):
                char = "+" if edge else "-"
            elif edge:
                char = "|"
            elif text_start <= col < text_end:
                char = title[col - text_start]
                is_text = True
            else:
                char = " "
            cells[(col, row)] = (char, is_text)
    return cells


class GlyphQuantizer:
    """Turns a canvas into terminal text."""

    def __init__(
        self,
        palette: Optional[EscapePalette] = None,
        charset: str = "ascii",
        shade_bands: int = MAX_SHADES,
        title: Optional[str] = None,
        trailing_newline: bool = True,
    ) -> None:
        if charset not in CHARSETS:
            raise ValueError(f"Unknown charset {charset!r}; expected one of: {', '.join(CHARSETS)}")
        self.palette = palette
        self.glyphs = CHARSETS[charset]
        self.shade_bands = shade_bands
        self.title = title
        self.trailing_newline = trailing_newline

    def _colored(self, text: str, sequence: Optional[str]) -> str:
        if self.palette is None or sequence is None:
            return text
        return f"{sequence}{text}{self.palette.reset}"

    def glyph_for(self, a: int, b: int, c: int, d: int) -> str:
        """Character, with colour escapes if enabled, for one 2x2 block."""

        rule, paint = resolve_block((a, b, c, d))
        if rule is None:
            return self.glyphs[0]
        glyph = rule.glyph or self.glyphs[corner_mask(a, b, c, d)]
        sequence = self.palette.sequence_for(paint, self.shade_bands) if self.palette else None
        return self._colored(glyph, sequence)

    def lines(self, canvas: Canvas) -> List[str]:
        rows = canvas.height // 2
        columns = canvas.width // 2
        cells = canvas.cells[: rows * 2, : columns * 2].astype(np.int64)
        top_left = cells[0::2, 0::2]
        top_right = cells[0::2, 1::2]
        bottom_left = cells[1::2, 0::2]
        bottom_right = cells[1::2, 1::2]

        banner = title_cells(columns, self.title)
        title_sequence = self.palette.title if self.palette else None

        output = []
        for row in range(rows):
            chars = []
            for col in range(columns):
                if (col, row) in banner:
                    char, is_text = banner[(col, row)]
                    chars.append(self._colored(char, title_sequence) if is_text else char)
                    continue
                chars.append(
                    self.glyph_for(
                        int(top_left[row, col]),
                        int(top_right[row, col]),
                        int(bottom_left[row, col]),
                        int(bottom_right[row, col]),
                    )
                )
            output.append("".join(chars))
        return output

    def quantize(self, canvas: Canvas) -> str:
        text = "\n".join(self.lines(canvas))
        if self.trailing_newline and text:
            text += "\n"
        return text
