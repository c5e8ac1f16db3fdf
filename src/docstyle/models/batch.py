"""Batch analysis results."""

from typing import Optional

from pydantic import Field

from .base import BaseValueModel
from .profile import MergedStyleProfile


class AnalysisFailure(BaseValueModel):
    """A document excluded from the batch and why."""

    filename: str
    reason: str


class FileSummary(BaseValueModel):
    """Per-document highlights reported next to the merged profile."""

    filename: str
    pages: int = Field(..., ge=0)
    primary_font: str
    heading_size: float
    body_size: float
    colors: tuple[str, ...] = Field(default_factory=tuple)


class BatchAnalysis(BaseValueModel):
    """Outcome of analyzing several documents and merging their profiles."""

    style_profile: MergedStyleProfile
    per_file: tuple[FileSummary, ...] = Field(default_factory=tuple)
    errors: tuple[AnalysisFailure, ...] = Field(default_factory=tuple)

    @property
    def files_analyzed(self) -> int:
        return len(self.per_file)

    @property
    def files_failed(self) -> int:
        return len(self.errors)

    def failure_for(self, filename: str) -> Optional[AnalysisFailure]:
        """Return the failure recorded for a filename, if any."""
        for failure in self.errors:
            if failure.filename == filename:
                return failure
        return None
