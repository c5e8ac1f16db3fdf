"""Value models for Document Style Profiler.

This module defines the Pydantic models that flow through the pipeline
stages. All models are frozen and JSON-serializable, so downstream
renderers receive them as stable flat records.

Model Hierarchy:
- PageRuns → TextRun (tokenizer output, read-only input)
- StyleProfile → FontSizes / Emphasis / Punctuation / Margins / ColorSample
- MergedStyleProfile (aggregate of StyleProfiles)
- ParsedContent → Section
- BatchAnalysis → MergedStyleProfile / FileSummary / AnalysisFailure
"""

from .base import (
    DEFAULT_FONT,
    HEX_COLOR_PATTERN,
    BaseValueModel,
)
from .batch import (
    AnalysisFailure,
    BatchAnalysis,
    FileSummary,
)
from .content import (
    ParsedContent,
    Section,
)
from .profile import (
    ColorSample,
    Emphasis,
    FontSizes,
    Margins,
    MergedStyleProfile,
    Punctuation,
    StyleProfile,
)
from .run import (
    PageRuns,
    TextRun,
)

__all__ = [
    # Base types
    "BaseValueModel",
    "DEFAULT_FONT",
    "HEX_COLOR_PATTERN",
    # Tokenizer input
    "PageRuns",
    "TextRun",
    # Profile
    "ColorSample",
    "Emphasis",
    "FontSizes",
    "Margins",
    "MergedStyleProfile",
    "Punctuation",
    "StyleProfile",
    # Content
    "ParsedContent",
    "Section",
    # Batch
    "AnalysisFailure",
    "BatchAnalysis",
    "FileSummary",
]
