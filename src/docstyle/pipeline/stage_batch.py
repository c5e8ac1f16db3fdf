"""Batch Stage - Analyze several PDFs and merge the survivors.

Each document is validated and extracted independently. Failures are
collected as (filename, reason) pairs and excluded from the merge; the
batch fails only when no document succeeds.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

from docstyle.config import Settings, settings as default_settings
from docstyle.exceptions import ExtractionError, NoDocumentsAnalyzedError
from docstyle.logger import get_logger
from docstyle.models import (
    AnalysisFailure,
    BatchAnalysis,
    FileSummary,
    StyleProfile,
)

from .stage_extract import StyleProfileExtractor
from .stage_merge import ProfileMerger

logger = get_logger(__name__)

PDF_SUFFIX = ".pdf"


def validate_pdf_path(pdf_path: Path, max_bytes: int) -> Optional[str]:
    """Return a reason the file cannot be analyzed, or None if it looks usable."""
    if pdf_path.suffix.lower() != PDF_SUFFIX:
        return f"File {pdf_path.name} is not a PDF."
    if not pdf_path.is_file():
        return f"File {pdf_path.name} does not exist."
    size = pdf_path.stat().st_size
    if size == 0:
        return f"File {pdf_path.name} is empty."
    if size > max_bytes:
        return f"File {pdf_path.name} exceeds {max_bytes // (1024 * 1024)}MB limit."
    return None


def summarize(filename: str, profile: StyleProfile) -> FileSummary:
    return FileSummary(
        filename=filename,
        pages=profile.pages,
        primary_font=profile.primary_font,
        heading_size=profile.sizes.heading,
        body_size=profile.sizes.body,
        colors=profile.colors,
    )


class BatchAnalyzer:
    """Runs extraction over a batch of PDFs and merges the results."""

    def __init__(
        self,
        extractor: Optional[StyleProfileExtractor] = None,
        merger: Optional[ProfileMerger] = None,
        config: Optional[Settings] = None,
    ):
        self.extractor = extractor or StyleProfileExtractor()
        self.merger = merger or ProfileMerger()
        self.config = config or default_settings

    def analyze_one(self, pdf_path: Path) -> StyleProfile:
        """Validate and extract a single document.

        Raises:
            ExtractionError: The document cannot contribute a profile.
        """
        reason = validate_pdf_path(pdf_path, self.config.max_file_size_bytes)
        if reason:
            raise ExtractionError(reason)
        return self.extractor.extract_file(pdf_path)

    def analyze(self, pdf_paths: Sequence[Union[str, Path]]) -> BatchAnalysis:
        """Analyze every document and merge the successes.

        Raises:
            ValueError: No paths given, or more than ``max_documents``.
            NoDocumentsAnalyzedError: Every document failed.
        """
        paths = [Path(p) for p in pdf_paths]
        if not paths:
            raise ValueError("Upload at least one PDF.")
        if len(paths) > self.config.max_documents:
            raise ValueError(f"Maximum {self.config.max_documents} PDFs allowed.")

        profiles: list[StyleProfile] = []
        summaries: list[FileSummary] = []
        failures: list[AnalysisFailure] = []

        for pdf_path in paths:
            try:
                profile = self.analyze_one(pdf_path)
            except ExtractionError as e:
                logger.error("Error analyzing %s: %s", pdf_path.name, e)
                failures.append(
                    AnalysisFailure(filename=pdf_path.name, reason=str(e) or "Failed to analyze PDF")
                )
                continue
            except Exception as e:
                # Any other fault stays confined to this document
                logger.exception("Unexpected error analyzing %s", pdf_path.name)
                failures.append(
                    AnalysisFailure(
                        filename=pdf_path.name,
                        reason=f"Failed to analyze PDF: {e}" if str(e) else "Failed to analyze PDF",
                    )
                )
                continue

            logger.info("Analyzed %s (%d pages)", pdf_path.name, profile.pages)
            profiles.append(profile)
            summaries.append(summarize(pdf_path.name, profile))

        if not profiles:
            raise NoDocumentsAnalyzedError(failures)

        return BatchAnalysis(
            style_profile=self.merger.merge(profiles),
            per_file=tuple(summaries),
            errors=tuple(failures),
        )


def analyze_documents(
    pdf_paths: Sequence[Union[str, Path]],
    extractor: Optional[StyleProfileExtractor] = None,
) -> BatchAnalysis:
    """Analyze a batch with default merger and settings."""
    return BatchAnalyzer(extractor=extractor).analyze(pdf_paths)
