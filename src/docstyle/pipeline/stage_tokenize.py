"""Tokenize Stage - Read positioned text runs out of a PDF.

Uses PyMuPDF (fitz) span output. Spans are reported in PDF user space
(origin bottom-left) so downstream stages see the same coordinates any
PDF content-stream tokenizer would give them.
"""

from pathlib import Path
from typing import Generator, Union

import fitz  # PyMuPDF
from pymupdf.mupdf import FzErrorBase

from docstyle.exceptions import DocumentOpenError, EmptyDocumentError
from docstyle.logger import get_logger
from docstyle.models import PageRuns, TextRun

logger = get_logger(__name__)

TEXT_BLOCK_TYPE = 0

# MuPDF errors derive from Exception, not RuntimeError
OPEN_ERRORS = (RuntimeError, ValueError, FzErrorBase)
PAGE_ERRORS = (RuntimeError, ValueError, KeyError, FzErrorBase)


def span_to_run(span: dict, page_height: float) -> TextRun:
    """Convert a PyMuPDF text span into a TextRun."""
    size = float(span.get("size") or 0.0)
    origin_x, origin_y = span.get("origin") or (0.0, 0.0)
    x0, _, x1, _ = span.get("bbox") or (0.0, 0.0, 0.0, 0.0)
    y = page_height - float(origin_y)
    return TextRun(
        text=span.get("text") or "",
        font_name=span.get("font"),
        height=size or None,
        transform=(size, 0.0, 0.0, size, float(origin_x), y),
        width=max(0.0, float(x1) - float(x0)),
        x=float(origin_x),
        y=y,
    )


def page_to_runs(page: "fitz.Page", page_number: int) -> PageRuns:
    """Collect every text span on a page, in content order."""
    height = float(page.rect.height)
    runs = []
    for block in page.get_text("dict").get("blocks", []):
        if block.get("type") != TEXT_BLOCK_TYPE:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                runs.append(span_to_run(span, height))
    return PageRuns(page_number=page_number, height=height, runs=tuple(runs))


class TokenizedDocument:
    """An open PDF exposing its raw bytes and lazily tokenized pages."""

    def __init__(self, pdf_doc: "fitz.Document", raw_bytes: bytes, name: str):
        self.pdf_doc = pdf_doc
        self.raw_bytes = raw_bytes
        self.name = name

    @property
    def page_count(self) -> int:
        return len(self.pdf_doc)

    def iter_pages(self) -> Generator[PageRuns, None, None]:
        """Yield runs page by page.

        A page that fails to tokenize is logged and yielded empty.
        """
        for page_num in range(self.page_count):
            try:
                yield page_to_runs(self.pdf_doc[page_num], page_num + 1)
            except PAGE_ERRORS as e:
                logger.warning("Error processing page %d of %s: %s", page_num + 1, self.name, e)
                yield PageRuns(page_number=page_num + 1)

    def close(self) -> None:
        self.pdf_doc.close()

    def __enter__(self) -> "TokenizedDocument":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class PDFTokenizer:
    """Opens PDFs for tokenization."""

    def open(self, pdf_path: Union[str, Path]) -> TokenizedDocument:
        """Open a PDF file.

        Raises:
            DocumentOpenError: The file could not be read or parsed.
            EmptyDocumentError: The PDF has no pages.
        """
        pdf_path = Path(pdf_path)
        try:
            raw_bytes = pdf_path.read_bytes()
        except OSError as e:
            raise DocumentOpenError(f"Failed to read PDF file: {e}") from e

        if not raw_bytes:
            raise DocumentOpenError("PDF file is empty")

        return self.open_bytes(raw_bytes, name=pdf_path.name)

    def open_bytes(self, raw_bytes: bytes, name: str = "<bytes>") -> TokenizedDocument:
        """Open a PDF held in memory."""
        try:
            pdf_doc = fitz.open(stream=raw_bytes, filetype="pdf")
        except OPEN_ERRORS as e:
            raise DocumentOpenError(f"Failed to parse PDF: {e}") from e

        if len(pdf_doc) == 0:
            pdf_doc.close()
            raise EmptyDocumentError()

        return TokenizedDocument(pdf_doc, raw_bytes, name)
