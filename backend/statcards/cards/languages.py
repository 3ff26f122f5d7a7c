from dataclasses import dataclass
from typing import List, Sequence

from ..schemas import LanguageUsage
from .common import (
    CARD_WIDTH,
    FONT,
    INSET,
    TEXT_MUTED,
    TEXT_PRIMARY,
    TRACK_FILL,
    TRACK_STROKE,
    escape_xml,
    footer,
    header,
    linear_gradient,
    round_half_up,
    svg_document,
)

MAX_ROWS = 5
ROW_HEIGHT = 52
FIRST_ROW_Y = 80
BAR_X = INSET + 140  # room for labels on the left
VALUE_SPACE = 80  # reserved for the byte count at the right
TRACK_WIDTH = max(200, CARD_WIDTH - INSET - BAR_X - VALUE_SPACE)
MIN_BAR_WIDTH = 6

PALETTE = (
    ("#22d3ee", "#3b82f6"),
    ("#8b5cf6", "#22d3ee"),
    ("#f59e0b", "#ef4444"),
    ("#10b981", "#22d3ee"),
    ("#ef4444", "#8b5cf6"),
)


@dataclass(frozen=True)
class LanguageRow:
    index: int
    name: str
    size: int
    y: int
    percent: int
    bar_width: int
    colors: tuple


def card_height(rows: int) -> int:
    return rows * ROW_HEIGHT + 120


def layout_languages(languages: Sequence[LanguageUsage]) -> List[LanguageRow]:
    """Bars scale against the largest entry; percentages against the shown total."""
    top = sorted(languages, key=lambda lang: lang.size, reverse=True)[:MAX_ROWS]
    total = sum(lang.size for lang in top) or 1
    largest = max([lang.size for lang in top] + [1])
    return [
        LanguageRow(
            index=i,
            name=lang.name,
            size=lang.size,
            y=FIRST_ROW_Y + i * ROW_HEIGHT,
            percent=round_half_up(lang.size / total * 100),
            bar_width=max(MIN_BAR_WIDTH, round_half_up(lang.size / largest * TRACK_WIDTH)),
            colors=PALETTE[i % len(PALETTE)],
        )
        for i, lang in enumerate(top)
    ]


def _row_markup(row: LanguageRow) -> str:
    right = CARD_WIDTH - INSET
    return (
        f'<g transform="translate(0, {row.y})">'
        f'<text x="{INSET}" y="0" dy="6" fill="{TEXT_PRIMARY}" font-family="{FONT}" font-size="15" '
        f'font-weight="600">{escape_xml(row.name)}</text>'
        f'<text x="{INSET}" y="24" fill="{TEXT_MUTED}" font-family="{FONT}" font-size="12">{row.percent}%</text>'
        f'<rect x="{BAR_X}" y="-10" width="{TRACK_WIDTH}" height="20" rx="10" fill="{TRACK_FILL}" '
        f'stroke="{TRACK_STROKE}" stroke-width="1"/>'
        f'<rect class="bar" x="{BAR_X}" y="-10" width="{row.bar_width}" height="20" rx="10" '
        f'fill="url(#lang-{row.index})"/>'
        f'<text x="{right - 12}" y="6" fill="{TEXT_MUTED}" font-family="{FONT}" font-size="12" '
        f'text-anchor="end">{row.size}</text>'
        "</g>"
    )


def render_languages_card(languages: Sequence[LanguageUsage]) -> str:
    rows = layout_languages(languages)
    height = card_height(len(rows))
    return svg_document(
        "Top languages",
        height,
        "Lang",
        defs=[linear_gradient(f"lang-{row.index}", row.colors) for row in rows],
        body=[
            header("Top Languages", "Lang", 140),
            *(_row_markup(row) for row in rows),
            footer("Proportional to usage", height),
        ],
    )
