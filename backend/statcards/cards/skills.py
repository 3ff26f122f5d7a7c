import base64
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ..schemas import SkillEntry
from .common import CARD_WIDTH, FONT, INSET, TEXT_PRIMARY, TRACK_FILL, TRACK_STROKE, escape_xml, footer, header
from .common import linear_gradient, round_half_up, svg_document
from .skill_catalog import DEFAULT_GRADIENT, SKILL_GRADIENTS, SKILL_ICONS, SKILL_LABELS, skill_key

ICON_DIR = Path(__file__).parent / "icons"

LEFT = INSET
RIGHT = CARD_WIDTH - INSET
TOP_PAD = 26
FIRST_ROW_Y = TOP_PAD + 54  # below the header
ROW_HEIGHT = 40
PILL_HEIGHT = 28
PILL_PAD_X = 14
ICON_WIDTH = 18
ICON_SIZE = 16
GAP = 10
CHAR_WIDTH = 7.2  # approx. width of one glyph at 13px
MIN_TEXT_WIDTH = 24
MAX_TEXT_WIDTH = RIGHT - LEFT - ICON_WIDTH - PILL_PAD_X * 2  # one pill never exceeds a row
ELLIPSIS = "\u2026"

_WORD_SPLIT = re.compile(r"[^A-Za-z0-9]+")


@dataclass(frozen=True)
class ResolvedSkill:
    key: str
    label: str
    gradient: Tuple[str, str]
    icon: Optional[str]  # data URI, None draws a plain dot


@dataclass(frozen=True)
class Pill:
    index: int
    skill: ResolvedSkill
    x: int
    y: int
    width: int


@lru_cache(maxsize=None)
def icon_data_uri(filename: str) -> str:
    encoded = base64.b64encode((ICON_DIR / filename).read_bytes()).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def display_label(name: str) -> str:
    known = SKILL_LABELS.get(skill_key(name))
    if known:
        return known
    words = [word for word in _WORD_SPLIT.split(name) if word]
    return " ".join(word[:1].upper() + word[1:] for word in words) or name


def fit_label(label: str) -> str:
    max_chars = int(MAX_TEXT_WIDTH // CHAR_WIDTH)
    if len(label) <= max_chars:
        return label
    return label[: max_chars - 1].rstrip() + ELLIPSIS


def resolve_skill(entry: SkillEntry) -> ResolvedSkill:
    key = skill_key(entry.name)
    gradient = (entry.color, entry.color) if entry.color else SKILL_GRADIENTS.get(key, DEFAULT_GRADIENT)
    icon_file = SKILL_ICONS.get(key)
    return ResolvedSkill(
        key=key,
        label=fit_label(display_label(entry.name)),
        gradient=gradient,
        icon=icon_data_uri(icon_file) if icon_file else None,
    )


def text_width(text: str) -> int:
    return max(MIN_TEXT_WIDTH, round_half_up(len(text) * CHAR_WIDTH))


def pill_width(label: str) -> int:
    return ICON_WIDTH + PILL_PAD_X * 2 + text_width(label)


def layout_skills(entries: Iterable[SkillEntry]) -> Tuple[List[Pill], int]:
    """Greedy left-to-right packing; returns the pills and the card height."""
    x, y = LEFT, FIRST_ROW_Y
    pills: List[Pill] = []
    for entry in entries:
        if not entry.name:
            continue
        skill = resolve_skill(entry)
        width = pill_width(skill.label)
        if x + width > RIGHT and x > LEFT:
            x = LEFT
            y += ROW_HEIGHT
        pills.append(Pill(index=len(pills), skill=skill, x=x, y=y, width=width))
        x += width + GAP
    return pills, y + ROW_HEIGHT + 30


def _pill_markup(pill: Pill) -> str:
    cy = PILL_HEIGHT // 2
    if pill.skill.icon:
        marker = (
            f'<circle cx="{PILL_PAD_X + ICON_WIDTH // 2}" cy="{cy}" r="10" fill="url(#skill-{pill.index})" '
            f'opacity="0.35"/>'
            f'<image x="{PILL_PAD_X + 1}" y="{(PILL_HEIGHT - ICON_SIZE) // 2}" width="{ICON_SIZE}" '
            f'height="{ICON_SIZE}" href="{pill.skill.icon}"/>'
        )
    else:
        marker = f'<circle cx="{PILL_PAD_X + ICON_WIDTH // 2}" cy="{cy}" r="6" fill="url(#skill-{pill.index})"/>'
    return (
        f'<g class="pill" data-skill="{escape_xml(pill.skill.key)}" transform="translate({pill.x}, {pill.y})">'
        f'<rect x="0" y="0" width="{pill.width}" height="{PILL_HEIGHT}" rx="999" fill="{TRACK_FILL}" '
        f'stroke="{TRACK_STROKE}" stroke-width="1"/>'
        f"{marker}"
        f'<text x="{PILL_PAD_X + ICON_WIDTH + 4}" y="{cy}" fill="{TEXT_PRIMARY}" font-family="{FONT}" '
        f'font-size="13" font-weight="600" dominant-baseline="middle">{escape_xml(pill.skill.label)}</text>'
        "</g>"
    )


def render_skills_card(skills: Iterable["SkillEntry | str | dict"]) -> str:
    entries = [SkillEntry.normalize(item) for item in skills or []]
    pills, height = layout_skills(entries)
    return svg_document(
        "Skills",
        height,
        "Skills",
        defs=[linear_gradient(f"skill-{pill.index}", pill.skill.gradient) for pill in pills],
        body=[
            header("Skills", "Skills", 100),
            *(_pill_markup(pill) for pill in pills),
            footer("Dynamic badges by skill list", height),
        ],
    )
