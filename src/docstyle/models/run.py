"""Tokenizer-facing models: positioned text runs grouped by page."""

from typing import Optional

from pydantic import Field

from .base import BaseValueModel


class TextRun(BaseValueModel):
    """One positioned, styled span of text as emitted by the tokenizer.

    Coordinates are PDF user space (origin bottom-left, points).
    """

    text: str = ""
    font_name: Optional[str] = Field(None, description="Raw font name, may carry a subset tag")
    height: Optional[float] = Field(None, description="Explicit glyph height if the tokenizer has one")
    transform: Optional[tuple[float, float, float, float, float, float]] = Field(
        None, description="Affine text matrix [a b c d e f]"
    )
    width: Optional[float] = Field(None, description="Run advance width")
    x: float = 0.0
    y: float = 0.0

    @property
    def font_size(self) -> float:
        """Infer a point size from whichever size signal is present.

        Glyph height wins, then the horizontal scale of the transform, then
        the run width. Returns 0 when nothing usable is available.
        """
        if self.height and self.height > 0:
            return abs(self.height)
        if self.transform and self.transform[0]:
            return abs(self.transform[0])
        if self.width and self.width > 0:
            return abs(self.width)
        return 0.0


class PageRuns(BaseValueModel):
    """All runs of a single page."""

    page_number: int = Field(..., ge=1, description="1-indexed page number")
    height: float = Field(default=0.0, ge=0.0, description="Page height in points")
    runs: tuple[TextRun, ...] = Field(default_factory=tuple)
