"""Output envelopes for rendered documents.

Every envelope carries bit-identical content:

- ``data-uri``: ``data:<content type>;base64,<payload>`` string
- ``blob``: ``Blob`` holding bytes and content type
- ``raw-bytes``: plain ``bytes``
"""

import base64
import logging
from pathlib import Path

from ..exceptions import RenderError
from ..ports.metadata import MetadataPort
from ..ports.rendering import DocumentRenderer
from ..ports.storage import StoragePort
from .models import Blob, OutputFormat
from .pages import PageSet

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
JSON_CONTENT_TYPE = "application/json"

Artifact = str | bytes | Blob


def wrap(
    content: bytes,
    output_format: OutputFormat | str = OutputFormat.DATA_URI,
    content_type: str = PDF_CONTENT_TYPE,
) -> Artifact:
    """Put document bytes into the requested envelope."""
    output_format = OutputFormat(output_format)
    if output_format == OutputFormat.DATA_URI:
        encoded = base64.b64encode(content).decode("ascii")
        return f"data:{content_type};base64,{encoded}"
    if output_format == OutputFormat.BLOB:
        return Blob(data=content, content_type=content_type)
    return bytes(content)


def unwrap(artifact: Artifact) -> bytes:
    """Recover the document bytes from any envelope."""
    if isinstance(artifact, Blob):
        return artifact.data
    if isinstance(artifact, (bytes, bytearray)):
        return bytes(artifact)
    if isinstance(artifact, str):
        header, sep, payload = artifact.partition(",")
        if not sep or not header.startswith("data:") or not header.endswith(";base64"):
            raise ValueError("Not a base64 data URI")
        return base64.b64decode(payload)
    raise TypeError(f"Unsupported artifact type: {type(artifact).__name__}")


class OutputSerializer:
    """Renders page sets and wraps the resulting PDF."""

    def __init__(
        self,
        renderer: DocumentRenderer,
        metadata: MetadataPort | None = None,
        storage: StoragePort | None = None,
    ) -> None:
        self.renderer = renderer
        self.metadata = metadata
        self.storage = storage

    def render(self, page_set: PageSet) -> bytes:
        content = self.renderer.render(page_set)
        if self.metadata is not None:
            try:
                content = self.metadata.stamp(content, page_set.info)
            except Exception as e:
                raise RenderError(f"Failed to write document metadata: {e}") from e
        return content

    def serialize(
        self,
        page_set: PageSet,
        output_format: OutputFormat | str = OutputFormat.DATA_URI,
    ) -> Artifact:
        content = self.render(page_set)
        logger.debug(f"Serialized {len(content)} bytes as {OutputFormat(output_format).value}")
        return wrap(content, output_format)

    def save(self, artifact: Artifact, filename: str) -> Path | None:
        """Save-as-file action; None when no save target is configured."""
        if self.storage is None:
            logger.debug("No save target configured, skipping save")
            return None
        return self.storage.save(unwrap(artifact), filename)
