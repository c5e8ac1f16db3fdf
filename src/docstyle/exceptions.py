"""Error taxonomy for style extraction and aggregation."""


class DocstyleError(Exception):
    """Base class for all package errors."""


class ExtractionError(DocstyleError):
    """A single document could not be turned into a style profile.

    Callers collect these per document and exclude the document from the
    batch instead of failing the whole request.
    """


class DocumentOpenError(ExtractionError):
    """The tokenizer could not open or parse the document."""


class EmptyDocumentError(ExtractionError):
    """No page of the document yielded any text run."""

    def __init__(self, message: str = "PDF appears to be empty or corrupted"):
        super().__init__(message)


class NoExtractableTextError(ExtractionError):
    """Every run normalized to empty text."""

    def __init__(self, message: str = "No extractable text found in PDF"):
        super().__init__(message)


class EmptyInputError(DocstyleError, ValueError):
    """Profile merge was called with zero profiles."""

    def __init__(self, message: str = "At least one style profile is required to merge"):
        super().__init__(message)


class NoDocumentsAnalyzedError(DocstyleError):
    """Every document in a batch failed extraction."""

    def __init__(self, failures: list):
        self.failures = list(failures)
        super().__init__(
            f"Failed to analyze any PDFs ({len(self.failures)} failed). "
            "Please ensure files are valid PDFs."
        )
