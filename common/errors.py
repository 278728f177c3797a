class CedIndexError(Exception):
    """Base error for failures while indexing a single document."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source}: {message}")
        self.source = source
        self.reason = message


class SourceUnavailableError(CedIndexError):
    """The document could not be read, or yielded no text."""


class DocumentParseError(CedIndexError):
    """Chunking, segmentation or rubric extraction failed for one document."""
