"""Pipeline stages for Document Style Profiler.

Style Stages (deterministic):
1. stage_tokenize - PDF to positioned text runs (PyMuPDF)
2. stage_collect - Raw statistics over runs
3. stage_color - Color ranking over the raw byte stream
4. stage_extract - Per-document StyleProfile
5. stage_merge - Aggregate MergedStyleProfile
6. stage_batch - Batch analysis with per-document failure collection

Content Stages:
7. stage_parse - Heuristic outline parser (fallback)
8. stage_compose - Generative backend with fallback to stage_parse

Each stage is independent and can be run separately or
orchestrated through the batch analyzer and the CLI.
"""

from .stage_batch import BatchAnalyzer, analyze_documents
from .stage_collect import RunCollector, RunStatistics
from .stage_color import ColorSampler
from .stage_compose import ContentComposer
from .stage_extract import ExtractorConfig, StyleProfileExtractor
from .stage_merge import ProfileMerger
from .stage_parse import FallbackConfig, StructuralContentParser, parse_fallback
from .stage_tokenize import PDFTokenizer, TokenizedDocument

__all__ = [
    # Tokenize
    "PDFTokenizer",
    "TokenizedDocument",
    # Collect
    "RunCollector",
    "RunStatistics",
    # Color
    "ColorSampler",
    # Extract
    "ExtractorConfig",
    "StyleProfileExtractor",
    # Merge
    "ProfileMerger",
    # Batch
    "BatchAnalyzer",
    "analyze_documents",
    # Parse (fallback)
    "FallbackConfig",
    "StructuralContentParser",
    "parse_fallback",
    # Compose
    "ContentComposer",
]
