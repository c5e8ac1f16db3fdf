"""Run Collection Stage - Accumulate raw style statistics from text runs.

Consumes the tokenizer's runs page by page and keeps only running totals:
character counts per font, retained size samples, punctuation counts,
bold/regular character split, sample text blocks and page-flipped
positions. Nothing here is normalized; see stage_extract for that.
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from docstyle.logger import get_logger
from docstyle.models import PageRuns, TextRun

logger = get_logger(__name__)

WHITESPACE_RE = re.compile(r"\s+")
SUBSET_TAG_RE = re.compile(r"^\w+\+")
FONT_SEPARATOR_RE = re.compile(r"[-_]")
BOLD_FONT_RE = re.compile(r"bold|semi ?bold|black|heavy|extra ?bold", re.IGNORECASE)

PUNCTUATION_MARKS = {
    "commas": re.compile(r","),
    "periods": re.compile(r"\."),
    "colons": re.compile(r":"),
    "semicolons": re.compile(r";"),
    "bullets": re.compile(r"[•●▪◦]"),
}


def normalize_text(text: Optional[str]) -> str:
    """Collapse internal whitespace and trim."""
    return WHITESPACE_RE.sub(" ", str(text or "")).strip()


def normalize_font_name(font_name: Optional[str]) -> str:
    """Strip a subset tag such as ``ABCDEF+`` and turn separators into spaces."""
    name = SUBSET_TAG_RE.sub("", str(font_name or "Unknown"))
    return FONT_SEPARATOR_RE.sub(" ", name).strip()


@dataclass
class RunStatistics:
    """Raw accumulated statistics for one document."""

    font_chars: Counter = field(default_factory=Counter)
    sizes: list[float] = field(default_factory=list)
    punctuation: Counter = field(default_factory=Counter)
    bold_chars: int = 0
    regular_chars: int = 0
    sample_blocks: list[str] = field(default_factory=list)
    x_positions: list[float] = field(default_factory=list)
    y_positions: list[float] = field(default_factory=list)
    total_runs: int = 0
    total_text_length: int = 0
    page_count: int = 0


class RunCollector:
    """Accumulates raw statistics over the runs of a single document.

    One collector per document. Pages may be fed lazily; every run is
    read exactly once.
    """

    def __init__(
        self,
        min_size: float = 0.0,
        max_size: float = 200.0,
        sample_head_blocks: int = 60,
        sample_max_blocks: int = 100,
        sample_min_block_length: int = 20,
        bold_pattern: re.Pattern = BOLD_FONT_RE,
    ):
        """Initialize the collector.

        Args:
            min_size: Sizes at or below this are treated as noise.
            max_size: Sizes at or above this are treated as noise.
            sample_head_blocks: Blocks always kept for sample text.
            sample_max_blocks: Hard cap on kept sample blocks.
            sample_min_block_length: Blocks past the head must be longer than this.
            bold_pattern: Font-name pattern classifying a run as bold-weight.
        """
        self.min_size = min_size
        self.max_size = max_size
        self.sample_head_blocks = sample_head_blocks
        self.sample_max_blocks = sample_max_blocks
        self.sample_min_block_length = sample_min_block_length
        self.bold_pattern = bold_pattern
        self.stats = RunStatistics()

    def collect(self, pages: Iterable[PageRuns]) -> RunStatistics:
        """Consume every page and return the accumulated statistics."""
        for page in pages:
            self.add_page(page)
        return self.stats

    def add_page(self, page: PageRuns) -> None:
        """Accumulate all runs of one page.

        A fault on a single run is logged and the run skipped.
        """
        self.stats.page_count += 1
        for run in page.runs:
            self.stats.total_runs += 1
            try:
                self.add_run(run, page.height)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning("Error processing text run on page %d: %s", page.page_number, e)

    def add_run(self, run: TextRun, page_height: float) -> None:
        """Accumulate one run."""
        text = normalize_text(run.text)
        if not text:
            return

        stats = self.stats
        length = len(text)
        stats.total_text_length += length

        block_count = len(stats.sample_blocks)
        if block_count < self.sample_head_blocks or (
            length > self.sample_min_block_length and block_count < self.sample_max_blocks
        ):
            stats.sample_blocks.append(text)

        font_name = normalize_font_name(run.font_name)
        stats.font_chars[font_name] += length

        size = run.font_size
        if self.min_size < size < self.max_size:
            stats.sizes.append(size)

        if run.x >= 0 and run.y >= 0:
            stats.x_positions.append(run.x)
            stats.y_positions.append(page_height - run.y)

        for name, pattern in PUNCTUATION_MARKS.items():
            stats.punctuation[name] += len(pattern.findall(text))

        if self.bold_pattern.search(font_name):
            stats.bold_chars += length
        else:
            stats.regular_chars += length
