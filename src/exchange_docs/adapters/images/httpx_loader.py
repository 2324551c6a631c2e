"""Logo loading from data references and remote URLs."""

import base64
import logging
from io import BytesIO

import httpx
from reportlab.lib.utils import ImageReader

from ...domain.models import LogoImage
from ...ports.images import LogoLoaderPort

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


def decode_data_reference(reference: str) -> bytes:
    """Decode a ``data:image/...;base64,...`` reference."""
    header, sep, payload = reference.partition(",")
    if not sep or not header.startswith("data:image/") or not header.endswith(";base64"):
        raise ValueError("Logo data reference must be a base64 image")
    return base64.b64decode(payload, validate=True)


class HttpxLogoLoader(LogoLoaderPort):
    """Resolves logos; remote fetches are bounded by a timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def load(self, reference: str) -> LogoImage | None:
        try:
            data = self._fetch(reference)
            width, height = ImageReader(BytesIO(data)).getSize()
        except Exception as e:
            logger.warning(f"Failed to load logo: {e}")
            return None

        logger.debug(f"Loaded logo ({width}x{height}, {len(data)} bytes)")
        return LogoImage(data=data, width=int(width), height=int(height))

    def _fetch(self, reference: str) -> bytes:
        if reference.startswith("data:"):
            return decode_data_reference(reference)

        if reference.startswith(("http://", "https://")):
            logger.info(f"Fetching logo: {reference}")
            response = httpx.get(reference, timeout=self.timeout, follow_redirects=True)
            response.raise_for_status()
            return response.content

        raise ValueError(f"Unsupported logo reference: {reference[:40]}")
