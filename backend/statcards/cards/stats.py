import math
from dataclasses import dataclass
from typing import List

from ..schemas import ContributionStats
from .common import FONT, INSET, TRACK_STROKE, escape_xml, fmt, header, svg_document

HEIGHT = 240
RING_RADIUS = 34
RING_STROKE = 10
CIRCUMFERENCE = 2 * math.pi * RING_RADIUS
TILE_WIDTH = 172
TILE_HEIGHT = 150
TILE_STEP = 190
TILE_COLORS = ("url(#accentStats)", "#3b82f6", "#f59e0b")


@dataclass(frozen=True)
class StatTile:
    label: str
    value: int
    x: int
    arc_length: float
    color: str

    @property
    def dasharray(self) -> str:
        return f"{fmt(self.arc_length)} {fmt(CIRCUMFERENCE)}"


def ring_arc_length(value: int, maximum: int) -> float:
    return CIRCUMFERENCE * (value / maximum)


def layout_stats(stats: ContributionStats) -> List[StatTile]:
    """The largest of the three counts always draws a full ring."""
    values = (("Commits", stats.commits), ("Pull Requests", stats.pull_requests), ("Issues", stats.issues))
    maximum = max(stats.commits, stats.pull_requests, stats.issues, 1)
    return [
        StatTile(
            label=label,
            value=value,
            x=i * TILE_STEP,
            arc_length=ring_arc_length(value, maximum),
            color=TILE_COLORS[i],
        )
        for i, (label, value) in enumerate(values)
    ]


def _tile_markup(tile: StatTile) -> str:
    cx = TILE_WIDTH // 2
    return (
        f'<g transform="translate({tile.x}, 0)" filter="url(#shadowStats)">'
        f'<rect x="0" y="0" width="{TILE_WIDTH}" height="{TILE_HEIGHT}" fill="url(#tileStats)" rx="14" '
        f'stroke="{TRACK_STROKE}" stroke-width="1"/>'
        f'<g transform="translate({cx}, 78)">'
        f'<circle r="{RING_RADIUS}" fill="none" stroke="{TRACK_STROKE}" stroke-width="{RING_STROKE}" opacity="0.9"/>'
        f'<circle class="ring" r="{RING_RADIUS}" fill="none" stroke="{tile.color}" stroke-width="{RING_STROKE}" '
        f'stroke-linecap="round" stroke-dasharray="{tile.dasharray}" transform="rotate(-90)"/>'
        "</g>"
        f'<text x="{cx}" y="30" text-anchor="middle" fill="#9ca3af" font-family="{FONT}" font-size="12" '
        f'font-weight="600">{escape_xml(tile.label)}</text>'
        f'<text x="{cx}" y="142" text-anchor="middle" fill="#f9fafb" font-family="{FONT}" font-size="26" '
        f'font-weight="800">{tile.value}</text>'
        "</g>"
    )


def render_stats_card(stats: ContributionStats) -> str:
    tiles = layout_stats(stats)
    defs = [
        '<filter id="shadowStats" x="-20%" y="-20%" width="140%" height="140%">'
        '<feDropShadow dx="0" dy="8" stdDeviation="12" flood-color="#000" flood-opacity="0.35"/>'
        "</filter>",
        '<linearGradient id="tileStats" x1="0" y1="0" x2="1" y2="1">'
        '<stop offset="0%" stop-color="#111827"/><stop offset="100%" stop-color="#0b1020"/>'
        "</linearGradient>",
    ]
    body = [
        header("GitHub Overview", "Stats", 120),
        f'<g transform="translate({INSET}, 70)">',
        *(_tile_markup(tile) for tile in tiles),
        "</g>",
    ]
    return svg_document("GitHub overview", HEIGHT, "Stats", defs=defs, body=body)
