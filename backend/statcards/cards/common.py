import html
import math
from typing import Sequence, Tuple

FONT = "Inter, system-ui, -apple-system, Segoe UI, Roboto, Ubuntu, Cantarell, Noto Sans, sans-serif"

CARD_WIDTH = 600
INSET = 24

BACKGROUND_STOPS = ("#0f172a", "#0b1324")
ACCENT_STOPS = ("#22d3ee", "#3b82f6")

TEXT_PRIMARY = "#e5e7eb"
TEXT_MUTED = "#9ca3af"
TEXT_FAINT = "#6b7280"
TRACK_FILL = "#111827"
TRACK_STROKE = "#1f2937"


def escape_xml(text) -> str:
    return html.escape(str(text), quote=True)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def fmt(value: float) -> str:
    """Render a coordinate without float noise: 12.0 -> '12', 1/3 -> '0.3333'."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def linear_gradient(gradient_id: str, stops: Tuple[str, str], diagonal: bool = False) -> str:
    y2 = "1" if diagonal else "0"
    return (
        f'<linearGradient id="{gradient_id}" x1="0" y1="0" x2="1" y2="{y2}">'
        f'<stop offset="0%" stop-color="{escape_xml(stops[0])}"/>'
        f'<stop offset="100%" stop-color="{escape_xml(stops[1])}"/>'
        "</linearGradient>"
    )


def header(title: str, suffix: str, underline: int) -> str:
    return (
        f'<g transform="translate({INSET}, 26)">'
        f'<circle cx="8" cy="-2" r="4" fill="url(#accent{suffix})"/>'
        f'<text x="20" y="0" fill="{TEXT_PRIMARY}" font-family="{FONT}" font-size="20" font-weight="700">'
        f"{escape_xml(title)}</text>"
        f'<rect x="0" y="18" width="{underline}" height="3" fill="url(#accent{suffix})" rx="2"/>'
        "</g>"
    )


def footer(text: str, height: int) -> str:
    return (
        f'<g transform="translate({CARD_WIDTH - INSET}, {height - 16})">'
        f'<text text-anchor="end" fill="{TEXT_FAINT}" font-family="{FONT}" font-size="11">{escape_xml(text)}</text>'
        "</g>"
    )


def svg_document(label: str, height: int, suffix: str, defs: Sequence[str], body: Sequence[str]) -> str:
    """Wrap card content in the shared frame: background, accent gradient, defs."""
    return "\n".join(
        [
            f'<svg width="{CARD_WIDTH}" height="{height}" viewBox="0 0 {CARD_WIDTH} {height}" '
            f'xmlns="http://www.w3.org/2000/svg" role="img" aria-label="{escape_xml(label)}">',
            "<defs>",
            linear_gradient(f"bg{suffix}", BACKGROUND_STOPS, diagonal=True),
            linear_gradient(f"accent{suffix}", ACCENT_STOPS),
            *defs,
            "</defs>",
            f'<rect width="100%" height="100%" fill="url(#bg{suffix})" rx="16"/>',
            *body,
            "</svg>",
        ]
    )
