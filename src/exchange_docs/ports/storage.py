"""Storage port - interface for saving generated documents."""

from abc import ABC, abstractmethod
from pathlib import Path


class StoragePort(ABC):
    """Interface for file storage."""

    @abstractmethod
    def save(self, content: bytes, filename: str) -> Path:
        """Save document content under a file name.

        Returns path to stored file.
        """
        pass
