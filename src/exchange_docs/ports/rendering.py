"""Rendering ports - environment capability and PDF rendering."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.pages import PageSet


class RenderingCapability(ABC):
    """What the current execution environment can render."""

    @abstractmethod
    def supports_rich_rendering(self) -> bool:
        """Whether full documents (logo, themes, tables) can be produced."""
        pass

    def supports_basic_rendering(self) -> bool:
        """Whether a minimal single-page document can be produced."""
        return False


class DocumentRenderer(ABC):
    """Interface for turning a page set into PDF bytes."""

    supports_tables: bool = False

    @abstractmethod
    def render(self, page_set: "PageSet") -> bytes:
        """Render all pages and return the PDF content."""
        pass
