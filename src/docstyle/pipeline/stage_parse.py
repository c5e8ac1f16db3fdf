"""Structural Parse Stage - Heuristic outline from free text.

Fallback content path used when no generative backend is configured or the
backend reply is unusable. Classifies each line of a request as a heading,
a bullet, loose prose or noise, and accumulates sections with a two-state
machine (no section open / section open). Never raises.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from docstyle.models import ParsedContent, Section

TITLE_PATTERN = r"^(?:title|project|estimate)[:\s]+(.+)$"
HEADING_PATTERN = r"^(?:##?|section|heading|deliverable|scope|pricing|timeline|terms?)[:\s]"
HEADING_MARKER_PATTERN = (
    r"^(?:##?\s*|(?:section|heading|deliverable|scope|pricing|timeline|terms?)[:\s]+)"
)
BULLET_PATTERN = r"^[-•*]\s"
BULLET_MARKER_PATTERN = r"^[-•*]\s+"


class LineKind(str, Enum):
    """Classification of a single request line."""

    HEADING = "heading"
    BULLET = "bullet"
    PROSE = "prose"
    NOISE = "noise"


@dataclass(frozen=True)
class FallbackConfig:
    """Defaults used when the request carries no usable structure."""

    default_title: str = "Project Estimate"
    default_intro: str = "Custom estimate request"
    default_heading: str = "Section"
    max_title_length: int = 60
    min_prose_length: int = 10
    scope_line_count: int = 7
    scope_heading: str = "Scope Overview"
    scope_placeholder: str = "Detailed scope to be confirmed during kickoff"
    default_sections: tuple[tuple[str, tuple[str, ...]], ...] = (
        (
            "Deliverables",
            (
                "Discovery and planning",
                "Execution and quality control",
                "Final delivery with handoff",
            ),
        ),
        (
            "Pricing & Terms",
            (
                "Estimate is based on the current brief and assumptions",
                "Changes in scope may update timeline and pricing",
                "Payment terms: Net 15 unless otherwise specified",
            ),
        ),
    )


@dataclass(frozen=True)
class NoSection:
    """No heading seen yet."""


@dataclass(frozen=True)
class OpenSection:
    """A heading has been seen; bullets accumulate under it."""

    heading: str
    bullets: tuple[str, ...] = field(default_factory=tuple)

    def add(self, bullet: str) -> "OpenSection":
        return OpenSection(self.heading, self.bullets + (bullet,))

    def close(self) -> Optional[Section]:
        """Return the finished section, or None if it collected nothing."""
        if not self.bullets:
            return None
        return Section(heading=self.heading, bullets=self.bullets)


ParserState = Union[NoSection, OpenSection]


def split_lines(text: Optional[str]) -> list[str]:
    """Split into trimmed, non-empty lines."""
    return [line.strip() for line in str(text or "").splitlines() if line.strip()]


class StructuralContentParser:
    """Turns a free-text request into ParsedContent without a backend."""

    def __init__(self, config: Optional[FallbackConfig] = None):
        self.config = config or FallbackConfig()

        self.title_pattern = re.compile(TITLE_PATTERN, re.IGNORECASE)
        self.heading_pattern = re.compile(HEADING_PATTERN, re.IGNORECASE)
        self.heading_marker_pattern = re.compile(HEADING_MARKER_PATTERN, re.IGNORECASE)
        self.bullet_pattern = re.compile(BULLET_PATTERN)
        self.bullet_marker_pattern = re.compile(BULLET_MARKER_PATTERN)

    def classify(self, line: str) -> LineKind:
        if self.heading_pattern.match(line):
            return LineKind.HEADING
        if self.bullet_pattern.match(line):
            return LineKind.BULLET
        if len(line) > self.config.min_prose_length:
            return LineKind.PROSE
        return LineKind.NOISE

    def infer_title(self, lines: list[str]) -> str:
        for line in lines:
            match = self.title_pattern.match(line)
            if match and match.group(1).strip():
                return match.group(1).strip()
        if lines and len(lines[0]) < self.config.max_title_length:
            return lines[0]
        return self.config.default_title

    def parse_sections(self, lines: list[str]) -> list[Section]:
        """Run the line state machine and return the closed sections."""
        sections: list[Section] = []
        state: ParserState = NoSection()

        for line in lines:
            kind = self.classify(line)

            if kind is LineKind.HEADING:
                if isinstance(state, OpenSection):
                    closed = state.close()
                    if closed is not None:
                        sections.append(closed)
                heading = self.heading_marker_pattern.sub("", line, count=1).strip()
                state = OpenSection(heading or self.config.default_heading)
            elif isinstance(state, NoSection) or kind is LineKind.NOISE:
                continue
            elif kind is LineKind.BULLET:
                bullet = self.bullet_marker_pattern.sub("", line, count=1).strip()
                if bullet:
                    state = state.add(bullet)
            else:
                state = state.add(line)

        if isinstance(state, OpenSection):
            closed = state.close()
            if closed is not None:
                sections.append(closed)
        return sections

    def default_sections(self, lines: list[str]) -> list[Section]:
        scope = tuple(lines[1 : 1 + self.config.scope_line_count])
        sections = [
            Section(
                heading=self.config.scope_heading,
                bullets=scope or (self.config.scope_placeholder,),
            )
        ]
        sections.extend(
            Section(heading=heading, bullets=bullets)
            for heading, bullets in self.config.default_sections
        )
        return sections

    def parse(self, text: Optional[str]) -> ParsedContent:
        """Parse a free-text request. Always returns at least one section."""
        lines = split_lines(text)
        sections = self.parse_sections(lines) or self.default_sections(lines)
        return ParsedContent(
            title=self.infer_title(lines),
            intro=lines[0] if lines else self.config.default_intro,
            sections=tuple(sections),
        )


def parse_fallback(text: Optional[str]) -> ParsedContent:
    """Parse with the default configuration."""
    return StructuralContentParser().parse(text)
