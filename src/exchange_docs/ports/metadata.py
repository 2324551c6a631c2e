"""Metadata port - interface for PDF document properties."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.pages import DocumentInfo


class MetadataPort(ABC):
    """Interface for writing document properties into a PDF."""

    @abstractmethod
    def stamp(self, content: bytes, info: "DocumentInfo") -> bytes:
        """Return the PDF with metadata applied."""
        pass
