"""Image port - interface for loading company logos."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import LogoImage


class LogoLoaderPort(ABC):
    """Interface for resolving a logo reference into image bytes."""

    @abstractmethod
    def load(self, reference: str) -> "LogoImage | None":
        """Load and decode a logo.

        Returns None when the logo cannot be fetched or decoded.
        """
        pass
