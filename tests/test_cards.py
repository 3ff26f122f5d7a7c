"""Tests for the SVG card renderers and their layout helpers."""

import base64
import re
import xml.etree.ElementTree as ET

import pytest

from statcards.cards.languages import MIN_BAR_WIDTH, TRACK_WIDTH, card_height, layout_languages, render_languages_card
from statcards.cards.skill_catalog import DEFAULT_GRADIENT, SKILL_GRADIENTS, skill_key
from statcards.cards.skills import (
    ELLIPSIS,
    FIRST_ROW_Y,
    LEFT,
    RIGHT,
    ROW_HEIGHT,
    display_label,
    layout_skills,
    pill_width,
    render_skills_card,
    resolve_skill,
)
from statcards.cards.stats import CIRCUMFERENCE, layout_stats, render_stats_card
from statcards.schemas import ContributionStats, LanguageUsage, SkillEntry

SVG_NS = "{http://www.w3.org/2000/svg}"


def parse_svg(markup: str) -> ET.Element:
    root = ET.fromstring(markup)
    assert root.tag == f"{SVG_NS}svg"
    return root


class TestLanguagesCard:
    def test_bars_scale_to_largest_and_percent_to_total(self) -> None:
        rows = layout_languages([LanguageUsage(name="Go", size=80), LanguageUsage(name="Rust", size=20)])

        go, rust = rows
        assert (go.name, go.bar_width, go.percent) == ("Go", TRACK_WIDTH, 80)
        assert (rust.name, rust.bar_width, rust.percent) == ("Rust", TRACK_WIDTH // 4, 20)

    def test_rendered_markup(self) -> None:
        markup = render_languages_card([LanguageUsage(name="Go", size=80), LanguageUsage(name="Rust", size=20)])
        root = parse_svg(markup)

        bars = [el for el in root.iter(f"{SVG_NS}rect") if el.get("class") == "bar"]
        assert [int(bar.get("width")) for bar in bars] == [TRACK_WIDTH, TRACK_WIDTH // 4]
        texts = [el.text for el in root.iter(f"{SVG_NS}text")]
        assert "80%" in texts and "20%" in texts
        assert root.get("height") == str(card_height(2))

    def test_tiny_entries_keep_minimum_width(self) -> None:
        rows = layout_languages([LanguageUsage(name="Big", size=10_000_000), LanguageUsage(name="Tiny", size=0)])

        assert rows[1].bar_width == MIN_BAR_WIDTH
        assert rows[1].percent == 0

    def test_resorts_and_truncates_to_five(self) -> None:
        langs = [LanguageUsage(name=f"L{i}", size=i) for i in range(1, 8)]

        rows = layout_languages(langs)

        assert [row.name for row in rows] == ["L7", "L6", "L5", "L4", "L3"]
        assert [row.y for row in rows] == [80, 132, 184, 236, 288]

    def test_palette_cycles_by_row(self) -> None:
        rows = layout_languages([LanguageUsage(name="A", size=5), LanguageUsage(name="B", size=4)])
        swapped = layout_languages([LanguageUsage(name="B", size=5), LanguageUsage(name="A", size=4)])

        assert [row.colors for row in rows] == [row.colors for row in swapped]

    def test_empty_card(self) -> None:
        root = parse_svg(render_languages_card([]))

        assert root.get("height") == str(card_height(0))

    def test_language_names_are_escaped(self) -> None:
        markup = render_languages_card([LanguageUsage(name="<C&C++>", size=1)])

        assert "&lt;C&amp;C++&gt;" in markup
        parse_svg(markup)


class TestStatsCard:
    def test_largest_values_complete_the_ring(self) -> None:
        commits, prs, issues = layout_stats(ContributionStats(commits=50, pull_requests=10, issues=50))

        assert commits.arc_length == pytest.approx(CIRCUMFERENCE)
        assert issues.arc_length == pytest.approx(CIRCUMFERENCE)
        assert prs.arc_length == pytest.approx(CIRCUMFERENCE / 5)

    def test_all_zero_draws_empty_rings(self) -> None:
        tiles = layout_stats(ContributionStats())

        assert [tile.arc_length for tile in tiles] == [0, 0, 0]

    def test_rendered_markup(self) -> None:
        root = parse_svg(render_stats_card(ContributionStats(commits=50, pull_requests=10, issues=50)))

        rings = [el for el in root.iter(f"{SVG_NS}circle") if el.get("class") == "ring"]
        arcs = [float(ring.get("stroke-dasharray").split()[0]) for ring in rings]
        assert arcs == pytest.approx([CIRCUMFERENCE, CIRCUMFERENCE / 5, CIRCUMFERENCE], abs=1e-3)
        assert len({ring.get("stroke") for ring in rings}) == 3
        texts = [el.text for el in root.iter(f"{SVG_NS}text")]
        assert texts.count("50") == 2 and "10" in texts
        assert {"Commits", "Pull Requests", "Issues"} <= set(texts)


class TestSkillsCard:
    def test_known_and_unknown_skills(self) -> None:
        react = resolve_skill(SkillEntry(name="react"))
        unknown = resolve_skill(SkillEntry(name="Totally-Unknown-Tech"))

        assert react.label == "React"
        assert react.gradient == SKILL_GRADIENTS["react"]
        assert react.icon.startswith("data:image/svg+xml;base64,")
        assert b"<svg" in base64.b64decode(react.icon.split(",", 1)[1])

        assert unknown.label == "Totally Unknown Tech"
        assert unknown.gradient == DEFAULT_GRADIENT
        assert unknown.icon is None

    def test_rendered_markup_uses_icon_and_dot(self) -> None:
        root = parse_svg(render_skills_card(["react", "Totally-Unknown-Tech"]))

        pills = [g for g in root.iter(f"{SVG_NS}g") if g.get("class") == "pill"]
        assert [p.get("data-skill") for p in pills] == ["react", "totallyunknowntech"]
        assert pills[0].find(f"{SVG_NS}image") is not None
        assert pills[1].find(f"{SVG_NS}image") is None
        assert [c.get("fill") for c in pills[1].findall(f"{SVG_NS}circle")] == ["url(#skill-1)"]
        assert [p.find(f"{SVG_NS}text").text for p in pills] == ["React", "Totally Unknown Tech"]

    @pytest.mark.parametrize("item", [{"name": "react", "color": "#ff0000"}, "docker", "mystery"])
    def test_every_pill_draws_its_gradient(self, item) -> None:
        root = parse_svg(render_skills_card([item]))

        pill = next(g for g in root.iter(f"{SVG_NS}g") if g.get("class") == "pill")
        fills = [c.get("fill") for c in pill.iter(f"{SVG_NS}circle")]
        assert "url(#skill-0)" in fills
        gradient = next(el for el in root.iter(f"{SVG_NS}linearGradient") if el.get("id") == "skill-0")
        stops = [stop.get("stop-color") for stop in gradient]
        assert stops == list(resolve_skill(SkillEntry.normalize(item)).gradient)

    def test_colored_icon_pill_uses_user_color(self) -> None:
        root = parse_svg(render_skills_card([{"name": "react", "color": "#ff0000"}]))

        pill = next(g for g in root.iter(f"{SVG_NS}g") if g.get("class") == "pill")
        assert pill.find(f"{SVG_NS}image") is not None
        gradient = next(el for el in root.iter(f"{SVG_NS}linearGradient") if el.get("id") == "skill-0")
        assert [stop.get("stop-color") for stop in gradient] == ["#ff0000", "#ff0000"]

    def test_oversized_label_is_ellipsized_to_fit_row(self) -> None:
        long_name = "extremely-long-skill-name-" * 6

        pills, height = layout_skills([SkillEntry(name=long_name)])

        (pill,) = pills
        assert pill.skill.label.endswith(ELLIPSIS)
        assert pill.skill.label.startswith("Extremely Long Skill Name")
        assert (pill.x, pill.y) == (LEFT, FIRST_ROW_Y)
        assert pill.x + pill.width <= RIGHT
        assert height == FIRST_ROW_Y + ROW_HEIGHT + 30

    def test_oversized_pill_after_short_one_starts_next_row(self) -> None:
        entries = [SkillEntry(name="go"), SkillEntry(name="x" * 200), SkillEntry(name="rust")]

        pills, _ = layout_skills(entries)

        assert [(p.x, p.y) for p in pills[:2]] == [(LEFT, FIRST_ROW_Y), (LEFT, FIRST_ROW_Y + ROW_HEIGHT)]
        assert pills[2].y == FIRST_ROW_Y + 2 * ROW_HEIGHT
        assert all(p.x + p.width <= RIGHT for p in pills)

    def test_short_labels_are_not_truncated(self) -> None:
        assert resolve_skill(SkillEntry(name="Totally-Unknown-Tech")).label == "Totally Unknown Tech"

    def test_no_remote_references(self) -> None:
        markup = render_skills_card(["react", "python", "docker", "go", "mystery"])

        hrefs = re.findall(r'href="([^"]+)"', markup)
        assert hrefs and all(href.startswith("data:") for href in hrefs)

    @pytest.mark.parametrize(
        "name, key",
        [("Node.js", "nodejs"), ("React JS", "reactjs"), ("C++", "c"), ("", "")],
    )
    def test_skill_key(self, name, key) -> None:
        assert skill_key(name) == key

    @pytest.mark.parametrize(
        "name, label",
        [("nodejs", "Node.js"), ("TYPESCRIPT", "TypeScript"), ("my_cool tool", "My Cool Tool"), ("kotlin", "Kotlin")],
    )
    def test_display_label(self, name, label) -> None:
        assert display_label(name) == label

    def test_user_color_overrides_gradient(self) -> None:
        assert resolve_skill(SkillEntry(name="react", color="#ff0000")).gradient == ("#ff0000", "#ff0000")

    def test_order_is_preserved_and_rows_wrap(self) -> None:
        names = [f"skill-number-{i}" for i in range(10)]

        pills, height = layout_skills([SkillEntry(name=n) for n in names])

        assert [p.skill.label for p in pills] == [display_label(n) for n in names]
        assert all(p.x + p.width <= RIGHT for p in pills)
        assert pills[0].x == LEFT and pills[0].y == FIRST_ROW_Y
        rows = sorted({p.y for p in pills})
        assert rows == [FIRST_ROW_Y + i * ROW_HEIGHT for i in range(len(rows))]
        assert len(rows) > 1
        assert height == rows[-1] + ROW_HEIGHT + 30

    def test_wrap_happens_only_when_next_pill_overflows(self) -> None:
        entries = [SkillEntry(name="python")] * 12
        width = pill_width("Python")

        pills, _ = layout_skills(entries)

        per_row = 1 + (RIGHT - LEFT - width) // (width + 10)
        assert [p.y for p in pills[:per_row]] == [FIRST_ROW_Y] * per_row
        assert pills[per_row].y == FIRST_ROW_Y + ROW_HEIGHT
        assert pills[per_row].x == LEFT

    def test_accepts_labeled_objects(self) -> None:
        markup = render_skills_card([{"name": "vue", "color": "#42b883"}, SkillEntry(name="svelte")])

        assert 'stop-color="#42b883"' in markup
        assert ">Vue<" in markup and ">Svelte<" in markup

    def test_empty_skills(self) -> None:
        pills, height = layout_skills([])

        assert pills == []
        assert height == FIRST_ROW_Y + ROW_HEIGHT + 30
        parse_svg(render_skills_card([]))
