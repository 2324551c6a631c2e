"""Metadata adapter using pikepdf."""

import logging
from io import BytesIO

import pikepdf

from ...domain.pages import DocumentInfo
from ...ports.metadata import MetadataPort

logger = logging.getLogger(__name__)


class PikePdfAdapter(MetadataPort):
    """Writes document properties into the PDF's XMP packet.

    Saving uses a deterministic document ID so stamping is reproducible.
    """

    def stamp(self, content: bytes, info: DocumentInfo) -> bytes:
        logger.debug(f"Stamping PDF metadata: {info.title}")

        output = BytesIO()
        with pikepdf.open(BytesIO(content)) as pdf:
            with pdf.open_metadata(set_pikepdf_as_editor=False) as meta:
                meta["dc:title"] = info.title
                meta["dc:description"] = info.subject
                meta["dc:creator"] = [info.author] if info.author else []
                meta["pdf:Keywords"] = ", ".join(info.keywords)
                meta["xmp:CreatorTool"] = info.creator

            pdf.save(output, deterministic_id=True)

        return output.getvalue()

    def read(self, content: bytes) -> dict[str, str]:
        """Read back the document info dictionary, e.g. for inspection."""
        with pikepdf.open(BytesIO(content)) as pdf:
            return {str(key): str(value) for key, value in pdf.docinfo.items()}
