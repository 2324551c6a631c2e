"""Exceptions raised inside the document pipeline.

None of these reach callers of ``DocumentService.generate``; they are
converted into a ``GenerationResult`` there.
"""


class DocumentError(Exception):
    """Base class for document pipeline errors."""


class ValidationError(DocumentError):
    """Required data is missing or invalid."""

    def __init__(self, errors: list[str], warnings: list[str] | None = None) -> None:
        self.errors = list(errors)
        self.warnings = list(warnings or [])
        super().__init__(", ".join(self.errors))


class RenderError(DocumentError):
    """Laying out or rendering a document failed."""


class RenderingUnavailableError(DocumentError):
    """The requested rendering capability is not available."""


class DataFileError(DocumentError):
    """A data file could not be read or references unknown records."""
