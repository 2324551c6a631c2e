"""Unit tests for output envelopes."""

import base64
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from exchange_docs.domain.models import Blob, OutputFormat
from exchange_docs.domain.pages import DocumentInfo, PageSet
from exchange_docs.domain.serializer import OutputSerializer, unwrap, wrap
from exchange_docs.exceptions import RenderError

CONTENT = b"%PDF-1.4 test content"


@pytest.fixture
def page_set() -> PageSet:
    page_set = PageSet(info=DocumentInfo(title="Recibo R-0001"))
    page_set.new_page()
    return page_set


class TestWrap:
    """Tests for wrap/unwrap."""

    def test_data_uri(self) -> None:
        artifact = wrap(CONTENT, OutputFormat.DATA_URI)
        assert artifact == "data:application/pdf;base64," + base64.b64encode(CONTENT).decode()

    def test_blob(self) -> None:
        artifact = wrap(CONTENT, "blob")
        assert artifact == Blob(data=CONTENT, content_type="application/pdf")
        assert artifact.size == len(CONTENT)

    def test_raw_bytes(self) -> None:
        assert wrap(CONTENT, OutputFormat.RAW_BYTES) == CONTENT

    def test_content_type(self) -> None:
        assert wrap(b"{}", "data-uri", "application/json").startswith(
            "data:application/json;base64,"
        )

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            wrap(CONTENT, "zip")

    def test_envelopes_carry_identical_bytes(self) -> None:
        unwrapped = {unwrap(wrap(CONTENT, f)) for f in OutputFormat}
        assert unwrapped == {CONTENT}

    def test_unwrap_rejects_plain_text(self) -> None:
        with pytest.raises(ValueError):
            unwrap("hello")

    def test_unwrap_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            unwrap(42)  # type: ignore[arg-type]


class TestBlob:
    def test_iter_chunks(self) -> None:
        blob = Blob(data=b"abcdefg")
        assert list(blob.iter_chunks(3)) == [b"abc", b"def", b"g"]


class TestOutputSerializer:
    """Tests for OutputSerializer."""

    def test_serialize_renders_and_stamps(
        self, page_set: PageSet, mock_renderer: MagicMock, mock_metadata: MagicMock
    ) -> None:
        serializer = OutputSerializer(renderer=mock_renderer, metadata=mock_metadata)

        artifact = serializer.serialize(page_set, OutputFormat.RAW_BYTES)

        assert artifact == b"%PDF-1.4 test content"
        mock_renderer.render.assert_called_once_with(page_set)
        mock_metadata.stamp.assert_called_once_with(artifact, page_set.info)

    def test_metadata_failure_is_render_error(
        self, page_set: PageSet, mock_renderer: MagicMock, mock_metadata: MagicMock
    ) -> None:
        mock_metadata.stamp.side_effect = RuntimeError("bad pdf")
        serializer = OutputSerializer(renderer=mock_renderer, metadata=mock_metadata)

        with pytest.raises(RenderError, match="bad pdf"):
            serializer.serialize(page_set)

    def test_save_without_storage(self, mock_renderer: MagicMock) -> None:
        serializer = OutputSerializer(renderer=mock_renderer)
        assert serializer.save(CONTENT, "recibo-R-0001.pdf") is None

    def test_save_unwraps(self, mock_renderer: MagicMock, mock_storage: MagicMock) -> None:
        mock_storage.save.return_value = Path("/out/recibo-R-0001.pdf")
        serializer = OutputSerializer(renderer=mock_renderer, storage=mock_storage)

        path = serializer.save(wrap(CONTENT, "data-uri"), "recibo-R-0001.pdf")

        assert path == Path("/out/recibo-R-0001.pdf")
        mock_storage.save.assert_called_once_with(CONTENT, "recibo-R-0001.pdf")
