"""Tests for the heuristic outline parser."""

import pytest

from docstyle.models import ParsedContent
from docstyle.pipeline.stage_parse import (
    FallbackConfig,
    LineKind,
    NoSection,
    OpenSection,
    StructuralContentParser,
    parse_fallback,
    split_lines,
)


@pytest.fixture
def parser():
    return StructuralContentParser()


class TestSplitLines:
    """Tests for line splitting."""

    def test_trims_and_drops_blank(self):
        """Test lines are trimmed and blanks dropped."""
        assert split_lines("  a \n\n   \n b") == ["a", "b"]

    def test_none(self):
        """Test missing input yields no lines."""
        assert split_lines(None) == []


class TestClassify:
    """Tests for line classification."""

    @pytest.mark.parametrize(
        "line",
        ["## Budget", "# Overview", "Section: Extras", "pricing: fixed", "Timeline phases", "Terms: net 30"],
    )
    def test_headings(self, parser, line):
        """Test heading lines are recognized."""
        assert parser.classify(line) is LineKind.HEADING

    @pytest.mark.parametrize("line", ["- item", "• item", "* item"])
    def test_bullets(self, parser, line):
        """Test bullet lines are recognized."""
        assert parser.classify(line) is LineKind.BULLET

    def test_prose_and_noise(self, parser):
        """Test prose and noise lines are told apart."""
        assert parser.classify("a longer sentence here") is LineKind.PROSE
        assert parser.classify("short") is LineKind.NOISE


class TestStateMachine:
    """Tests for the section accumulator states."""

    def test_open_section_is_immutable(self):
        """Test adding a bullet returns a new section."""
        state = OpenSection("Heading")
        updated = state.add("one")

        assert state.bullets == ()
        assert updated.bullets == ("one",)

    def test_empty_section_closes_to_none(self):
        """Test a section without bullets closes to nothing."""
        assert OpenSection("Heading").close() is None

    def test_no_section_state(self):
        """Test NoSection states compare equal."""
        assert NoSection() == NoSection()


class TestParseFallback:
    """Tests for parse_fallback."""

    def test_headed_input(self):
        """Test headings and bullets become sections."""
        text = "Website build\n## Design\n- Wireframes\n- Mockups\n## Build\n- Frontend\n- Backend"
        content = parse_fallback(text)

        assert len(content.sections) == 2
        assert content.sections[0].heading == "Design"
        assert content.sections[0].bullets == ("Wireframes", "Mockups")
        assert content.sections[1].heading == "Build"
        assert content.sections[1].bullets == ("Frontend", "Backend")

    def test_default_scenario(self):
        """Test unstructured input gets the default sections."""
        content = parse_fallback("Need a logo redesign\nBudget is flexible")

        assert content.intro == "Need a logo redesign"
        assert content.title == "Need a logo redesign"
        assert [s.heading for s in content.sections] == ["Scope Overview", "Deliverables", "Pricing & Terms"]
        assert content.sections[0].bullets == ("Budget is flexible",)
        assert content.sections[1].bullets == (
            "Discovery and planning",
            "Execution and quality control",
            "Final delivery with handoff",
        )
        assert content.sections[2].bullets[2] == "Payment terms: Net 15 unless otherwise specified"

    @pytest.mark.parametrize("text", ["", None, "   \n  ", "x"])
    def test_never_empty(self, text):
        """Test the result always has sections."""
        content = parse_fallback(text)

        assert len(content.sections) >= 1
        assert all(section.bullets for section in content.sections)

    def test_empty_input_placeholders(self):
        """Test empty input yields placeholder content."""
        content = parse_fallback("")

        assert content.intro == "Custom estimate request"
        assert content.title == "Project Estimate"
        assert content.sections[0].bullets == ("Detailed scope to be confirmed during kickoff",)

    def test_title_marker(self):
        """Test a title marker sets the title."""
        text = "We need help with our annual report layout and print preparation\nProject: Annual Report 2026"
        content = parse_fallback(text)

        assert content.title == "Annual Report 2026"
        assert content.intro.startswith("We need help")

    def test_long_first_line_uses_default_title(self):
        """Test an overlong first line is not a title."""
        content = parse_fallback("x" * 80)
        assert content.title == "Project Estimate"

    def test_scope_limited_to_seven_lines(self):
        """Test the scope overview takes seven lines."""
        lines = ["Intro line"] + [f"detail {i}" for i in range(10)]
        content = parse_fallback("\n".join(lines))

        assert content.sections[0].bullets == tuple(f"detail {i}" for i in range(7))

    def test_empty_heading_defaults(self):
        """Test a trailing colon is stripped from headings."""
        content = parse_fallback("Section:\n- one item")

        assert content.sections[0].heading == "Section"
        assert content.sections[0].bullets == ("one item",)

    def test_section_without_bullets_dropped(self):
        """Test sections without bullets are dropped."""
        content = parse_fallback("## Empty\n## Full\n- thing")

        assert [s.heading for s in content.sections] == ["Full"]

    def test_loose_prose_becomes_bullet(self):
        """Test prose under a heading becomes a bullet."""
        content = parse_fallback("## Notes\nThis is a full sentence of notes\nshort")

        assert content.sections[0].bullets == ("This is a full sentence of notes",)

    def test_lines_before_first_heading_ignored(self):
        """Test lines before the first heading are ignored."""
        content = parse_fallback("- stray bullet\nSome intro prose line\n## Real\n- kept")

        assert len(content.sections) == 1
        assert content.sections[0].bullets == ("kept",)

    def test_custom_config(self):
        """Test defaults come from the injected config."""
        parser = StructuralContentParser(FallbackConfig(default_title="Quote", default_sections=()))
        content = parser.parse("y" * 70)

        assert content.title == "Quote"
        assert [s.heading for s in content.sections] == ["Scope Overview"]

    def test_json_round_trip(self):
        """Test parsed content survives a JSON round trip."""
        content = parse_fallback("## A\n- one\n- two")
        assert ParsedContent.model_validate_json(content.model_dump_json()) == content
