"""Profile Extraction Stage - Turn one document into a StyleProfile.

Composes the run collector and the color sampler:
1. Collect raw statistics from the tokenizer's runs
2. Infer body/heading sizes from size percentiles
3. Infer left/top margins from the smallest observed positions
4. Rank fonts by character count and colors by hit count
5. Bound the sample text

All computations work on sorted copies so the run order that drives the
sample text is never disturbed.
"""

import math
import re
from dataclasses import dataclass
from pathlib import Path
from statistics import fmean
from typing import Iterable, Optional, Union

from docstyle.exceptions import EmptyDocumentError, NoExtractableTextError
from docstyle.logger import get_logger
from docstyle.models import (
    DEFAULT_FONT,
    Emphasis,
    FontSizes,
    Margins,
    PageRuns,
    Punctuation,
    StyleProfile,
)

from .stage_collect import BOLD_FONT_RE, RunCollector, RunStatistics
from .rounding import round_half_up
from .stage_color import ColorSampler
from .stage_tokenize import PDFTokenizer

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExtractorConfig:
    """Immutable tuning values for profile extraction."""

    max_fonts: int = 6
    max_colors: int = 8
    default_font: str = DEFAULT_FONT
    default_colors: tuple[str, ...] = ("#000000", "#1f2937", "#4b5563")

    # Sizes
    min_size: float = 0.0
    max_size: float = 200.0
    body_percentile: float = 0.5
    heading_percentile: float = 0.9
    heading_ratio: float = 1.35
    default_body_size: float = 11.0
    default_heading_size: float = 16.0

    # Margins (right/bottom are never measured)
    default_margin: float = 32.0

    # Sample text
    sample_head_blocks: int = 60
    sample_max_blocks: int = 100
    sample_min_block_length: int = 20
    sample_max_chars: int = 5000

    bold_pattern: re.Pattern = BOLD_FONT_RE


def percentile(sorted_values: list[float], fraction: float) -> float:
    """Nearest-rank percentile over an ascending list (floor index)."""
    index = min(len(sorted_values) - 1, math.floor(len(sorted_values) * fraction))
    return sorted_values[index]


def infer_sizes(sizes: list[float], config: ExtractorConfig) -> FontSizes:
    """Infer body and heading sizes from the distribution of run sizes.

    Heading is at least ``heading_ratio`` times the body size. A body
    percentile dominated by oversized runs is not corrected.
    """
    if not sizes:
        return FontSizes(
            body=config.default_body_size,
            heading=config.default_heading_size,
            avg=0.0,
        )

    ordered = sorted(sizes)
    body = percentile(ordered, config.body_percentile) or config.default_body_size
    floor_heading = body * config.heading_ratio
    heading = max(percentile(ordered, config.heading_percentile) or floor_heading, floor_heading)
    return FontSizes(
        body=round_half_up(body, 1),
        heading=round_half_up(heading, 1),
        avg=round_half_up(fmean(sizes), 1),
    )


def infer_margins(stats: RunStatistics, config: ExtractorConfig) -> Margins:
    left = max(0.0, min(stats.x_positions)) if stats.x_positions else config.default_margin
    top = max(0.0, min(stats.y_positions)) if stats.y_positions else config.default_margin
    return Margins(
        left=left,
        top=top,
        right=config.default_margin,
        bottom=config.default_margin,
    )


class StyleProfileExtractor:
    """Builds a normalized StyleProfile for a single document."""

    def __init__(
        self,
        config: Optional[ExtractorConfig] = None,
        color_sampler: Optional[ColorSampler] = None,
        tokenizer: Optional[PDFTokenizer] = None,
    ):
        """Initialize the extractor.

        Args:
            config: Extraction constants. Defaults to ExtractorConfig().
            color_sampler: Sampler for the raw byte stream.
            tokenizer: PDF tokenizer used by extract_file.
        """
        self.config = config or ExtractorConfig()
        self.color_sampler = color_sampler or ColorSampler(max_colors=self.config.max_colors)
        self.tokenizer = tokenizer or PDFTokenizer()

    def _new_collector(self) -> RunCollector:
        return RunCollector(
            min_size=self.config.min_size,
            max_size=self.config.max_size,
            sample_head_blocks=self.config.sample_head_blocks,
            sample_max_blocks=self.config.sample_max_blocks,
            sample_min_block_length=self.config.sample_min_block_length,
            bold_pattern=self.config.bold_pattern,
        )

    def extract(
        self,
        document_bytes: Union[bytes, bytearray],
        pages: Iterable[PageRuns],
        page_count: Optional[int] = None,
        source: Optional[str] = None,
    ) -> StyleProfile:
        """Extract a StyleProfile from raw bytes and the document's runs.

        Args:
            document_bytes: Raw file content, scanned for color operators.
            pages: Runs per page, consumed once.
            page_count: Page count reported by the tokenizer. Defaults to
                the number of pages consumed.
            source: Identifier stored on the profile.

        Raises:
            EmptyDocumentError: No page yielded any run.
            NoExtractableTextError: Every run normalized to empty text.
        """
        stats = self._new_collector().collect(pages)

        if stats.total_runs == 0:
            raise EmptyDocumentError()
        if stats.total_text_length == 0:
            raise NoExtractableTextError()

        config = self.config
        font_ranking = [name for name, _ in stats.font_chars.most_common()]
        primary = font_ranking[0] if font_ranking else config.default_font
        secondary = font_ranking[1] if len(font_ranking) > 1 else primary

        colors_detailed = self.color_sampler.sample(document_bytes)
        colors = tuple(c.hex for c in colors_detailed) or config.default_colors

        weighted_total = max(1, stats.bold_chars + stats.regular_chars)

        profile = StyleProfile(
            source=source,
            pages=page_count if page_count is not None else stats.page_count,
            fonts=tuple(font_ranking[: config.max_fonts]),
            primary_font=primary,
            secondary_font=secondary,
            sizes=infer_sizes(stats.sizes, config),
            colors=colors,
            colors_detailed=tuple(colors_detailed),
            emphasis=Emphasis(bold_ratio=round_half_up(stats.bold_chars / weighted_total, 2)),
            punctuation=Punctuation(**stats.punctuation),
            margins=infer_margins(stats, config),
            sample_text=" ".join(stats.sample_blocks)[: config.sample_max_chars],
        )
        logger.debug(
            "Extracted profile for %s: %d runs, primary font %s",
            source or "<bytes>",
            stats.total_runs,
            profile.primary_font,
        )
        return profile

    def extract_file(self, pdf_path: Union[str, Path]) -> StyleProfile:
        """Tokenize a PDF on disk and extract its profile.

        Raises:
            DocumentOpenError: The PDF could not be read or parsed.
            EmptyDocumentError / NoExtractableTextError: see extract().
        """
        pdf_path = Path(pdf_path)
        document = self.tokenizer.open(pdf_path)
        with document:
            return self.extract(
                document.raw_bytes,
                document.iter_pages(),
                page_count=document.page_count,
                source=pdf_path.name,
            )
