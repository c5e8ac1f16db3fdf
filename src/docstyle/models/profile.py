"""Style profile value objects."""

from typing import Optional

from pydantic import Field

from .base import DEFAULT_FONT, HEX_COLOR_PATTERN, BaseValueModel


class ColorSample(BaseValueModel):
    """A distinct color and how often it was seen."""

    hex: str = Field(..., pattern=HEX_COLOR_PATTERN, description='Lowercase "#rrggbb"')
    hits: int = Field(..., ge=1)


class FontSizes(BaseValueModel):
    """Inferred font sizes in points."""

    body: float = 11.0
    heading: float = 16.0
    avg: float = 0.0


class Emphasis(BaseValueModel):
    bold_ratio: float = Field(default=0.0, ge=0.0, le=1.0)


class Punctuation(BaseValueModel):
    commas: int = Field(default=0, ge=0)
    periods: int = Field(default=0, ge=0)
    colons: int = Field(default=0, ge=0)
    semicolons: int = Field(default=0, ge=0)
    bullets: int = Field(default=0, ge=0)


class Margins(BaseValueModel):
    """Page margins in points. Only left and top are measured."""

    left: float = Field(default=32, ge=0)
    top: float = Field(default=32, ge=0)
    right: float = Field(default=32, ge=0)
    bottom: float = Field(default=32, ge=0)


class StyleProfile(BaseValueModel):
    """
    Normalized summary of one document's typography, palette and habits.

    Produced by the extractor, consumed by the merger and by renderers as a
    flat JSON record.
    """

    source: Optional[str] = Field(None, description="Identifier of the analyzed file")
    pages: int = Field(default=0, ge=0)

    # Typography
    fonts: tuple[str, ...] = Field(default_factory=tuple, max_length=6)
    primary_font: str = DEFAULT_FONT
    secondary_font: str = DEFAULT_FONT
    sizes: FontSizes = Field(default_factory=FontSizes)

    # Palette
    colors: tuple[str, ...] = Field(default_factory=tuple, max_length=8)
    colors_detailed: tuple[ColorSample, ...] = Field(default_factory=tuple, max_length=8)

    # Habits
    emphasis: Emphasis = Field(default_factory=Emphasis)
    punctuation: Punctuation = Field(default_factory=Punctuation)
    margins: Margins = Field(default_factory=Margins)

    sample_text: str = Field(default="", max_length=5000)


class MergedStyleProfile(StyleProfile):
    """Aggregate of several per-document profiles."""

    doc_count: int = Field(..., ge=1)
    sample_text: str = Field(default="", max_length=12000)
