"""Storage adapter writing generated documents to a local directory."""

import logging
import re
from pathlib import Path

from ...ports.storage import StoragePort

logger = logging.getLogger(__name__)

FALLBACK_NAME = "documento"
UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*]')
WHITESPACE = re.compile(r"\s+")


def sanitize_filename(name: str, max_length: int = 180) -> str:
    """Make a caller-supplied document name safe to write.

    Long names are shortened from the stem so the extension survives.
    """
    cleaned = name.replace("\x00", "").replace("..", "_")
    cleaned = WHITESPACE.sub(" ", UNSAFE_CHARS.sub("_", cleaned)).strip(". ")
    if not cleaned:
        return FALLBACK_NAME

    if len(cleaned) > max_length:
        suffix = Path(cleaned).suffix
        if len(suffix) >= max_length:
            suffix = ""
        cleaned = cleaned[: max_length - len(suffix)].rstrip(". ") + suffix
    return cleaned or FALLBACK_NAME


class FilesystemAdapter(StoragePort):
    """Writes documents into a single output directory."""

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path

    def save(self, content: bytes, filename: str) -> Path:
        """Write content, appending " (n)" to the stem on collision."""
        self.base_path.mkdir(parents=True, exist_ok=True)

        name = Path(sanitize_filename(filename))
        dest = self.base_path / name.name
        counter = 1
        while dest.exists():
            dest = self.base_path / f"{name.stem} ({counter}){name.suffix}"
            counter += 1

        dest.write_bytes(content)
        logger.info(f"Saved {len(content)} bytes to {dest}")
        return dest
