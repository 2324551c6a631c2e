"""Unit tests for the document service."""

import base64
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from exchange_docs.domain.layout import LayoutEngine
from exchange_docs.domain.models import (
    Blob,
    DocumentKind,
    GenerationOptions,
    OutputFormat,
    ReceiptRequest,
    ReportRequest,
)
from exchange_docs.domain.serializer import OutputSerializer, unwrap
from exchange_docs.domain.services import (
    JSON_FALLBACK_WARNING,
    SIMPLIFIED_WARNING,
    DocumentService,
)


@pytest.fixture
def service(
    mock_capability: MagicMock,
    layout_engine: LayoutEngine,
    mock_renderer: MagicMock,
    mock_storage: MagicMock,
) -> DocumentService:
    return DocumentService(
        capability=mock_capability,
        layout=layout_engine,
        serializer=OutputSerializer(renderer=mock_renderer, storage=mock_storage),
    )


def _json(artifact: str) -> dict:
    header, _, payload = artifact.partition(",")
    assert header == "data:application/json;base64"
    return json.loads(base64.b64decode(payload))


class TestFullRender:
    """Rich environment."""

    def test_report(self, service: DocumentService, report_request: ReportRequest) -> None:
        result = service.generate(DocumentKind.FINANCIAL_REPORT, report_request)

        assert result.success
        assert result.content_type == "application/pdf"
        assert result.filename == "reporte-financiero-2024-03-01-a-2024-03-31.pdf"
        assert result.artifact.startswith("data:application/pdf;base64,")
        assert result.degraded is False
        assert result.warnings == []

    def test_receipt_filename(
        self, service: DocumentService, receipt_request: ReceiptRequest
    ) -> None:
        result = service.generate("receipt", receipt_request)
        assert result.success
        assert result.filename == "recibo-R-0001.pdf"

    def test_filename_override(
        self, service: DocumentService, receipt_request: ReceiptRequest
    ) -> None:
        options = GenerationOptions(filename="mi-recibo.pdf")
        result = service.generate(DocumentKind.RECEIPT, receipt_request, options)
        assert result.filename == "mi-recibo.pdf"

    def test_output_formats(
        self, service: DocumentService, receipt_request: ReceiptRequest
    ) -> None:
        blob = service.generate(
            DocumentKind.RECEIPT, receipt_request, GenerationOptions(output_format=OutputFormat.BLOB)
        ).artifact
        raw = service.generate(
            DocumentKind.RECEIPT, receipt_request, GenerationOptions(output_format="raw-bytes")
        ).artifact
        data_uri = service.generate(DocumentKind.RECEIPT, receipt_request).artifact

        assert isinstance(blob, Blob)
        assert unwrap(blob) == unwrap(raw) == unwrap(data_uri)

    def test_warnings_carried(
        self, service: DocumentService, report_request: ReportRequest
    ) -> None:
        report_request.company_info.tax_id = ""
        result = service.generate(DocumentKind.FINANCIAL_REPORT, report_request)
        assert result.success
        assert result.warnings == [
            "company: Company tax ID (NIF/CIF) is recommended for documents"
        ]

    def test_auto_download_saves(
        self,
        service: DocumentService,
        receipt_request: ReceiptRequest,
        mock_storage: MagicMock,
    ) -> None:
        mock_storage.save.return_value = Path("/out/recibo-R-0001.pdf")
        options = GenerationOptions(auto_download=True)

        result = service.generate(DocumentKind.RECEIPT, receipt_request, options)

        mock_storage.save.assert_called_once_with(b"%PDF-1.4 test content", "recibo-R-0001.pdf")
        assert result.saved_path == Path("/out/recibo-R-0001.pdf")

    def test_no_save_by_default(
        self,
        service: DocumentService,
        receipt_request: ReceiptRequest,
        mock_storage: MagicMock,
    ) -> None:
        service.generate(DocumentKind.RECEIPT, receipt_request)
        mock_storage.save.assert_not_called()

    def test_save_failure_is_warning(
        self,
        service: DocumentService,
        receipt_request: ReceiptRequest,
        mock_storage: MagicMock,
    ) -> None:
        mock_storage.save.side_effect = PermissionError("read-only")
        result = service.generate(
            DocumentKind.RECEIPT, receipt_request, GenerationOptions(auto_download=True)
        )
        assert result.success
        assert result.warnings == ["Could not save recibo-R-0001.pdf: read-only"]

    def test_render_failure(
        self,
        service: DocumentService,
        report_request: ReportRequest,
        mock_renderer: MagicMock,
    ) -> None:
        mock_renderer.render.side_effect = RuntimeError("canvas exploded")
        result = service.generate(DocumentKind.FINANCIAL_REPORT, report_request)

        assert not result.success
        assert result.error_message == "canvas exploded"
        assert result.artifact is None


class TestValidation:
    """Validation state."""

    def test_errors_block_generation(
        self,
        service: DocumentService,
        report_request: ReportRequest,
        mock_renderer: MagicMock,
    ) -> None:
        report_request.transactions[0].exchange_rate = 0
        report_request.transactions[1].amount_received = -1

        result = service.generate(DocumentKind.FINANCIAL_REPORT, report_request)

        assert not result.success
        assert result.error_message == (
            "transaction 1: exchange_rate must be a positive number, "
            "transaction 2: amount_received must be a positive number"
        )
        mock_renderer.render.assert_not_called()

    def test_validation_can_be_disabled(
        self, service: DocumentService, receipt_request: ReceiptRequest
    ) -> None:
        receipt_request.client.email = ""
        options = GenerationOptions(enable_validation=False)
        assert service.generate(DocumentKind.RECEIPT, receipt_request, options).success

    def test_unknown_kind(self, service: DocumentService, report_request: ReportRequest) -> None:
        result = service.generate("invoice", report_request)
        assert not result.success
        assert "invoice" in result.error_message


class TestDegradedPath:
    """Environment without rich rendering."""

    @pytest.fixture(autouse=True)
    def headless(self, mock_capability: MagicMock) -> None:
        mock_capability.supports_rich_rendering.return_value = False

    def test_json_fallback(
        self,
        service: DocumentService,
        report_request: ReportRequest,
        mock_renderer: MagicMock,
    ) -> None:
        result = service.generate(DocumentKind.FINANCIAL_REPORT, report_request)

        assert result.success
        assert result.degraded
        assert result.content_type == "application/json"
        assert result.filename == "reporte-financiero-2024-03-01-a-2024-03-31.json"
        assert JSON_FALLBACK_WARNING in result.warnings
        document = _json(result.artifact)
        assert document["summary"]["transaction_count"] == 3
        assert len(document["preview_transactions"]) == 3
        mock_renderer.render.assert_not_called()

    def test_json_fallback_override_suffix(
        self, service: DocumentService, report_request: ReportRequest
    ) -> None:
        options = GenerationOptions(filename="marzo.pdf")
        result = service.generate(DocumentKind.FINANCIAL_REPORT, report_request, options)
        assert result.filename == "marzo.json"

    def test_json_keeps_requested_envelope(
        self, service: DocumentService, receipt_request: ReceiptRequest
    ) -> None:
        options = GenerationOptions(output_format=OutputFormat.BLOB)
        result = service.generate(DocumentKind.RECEIPT, receipt_request, options)
        assert result.artifact.content_type == "application/json"
        assert json.loads(result.artifact.data)["receipt_id"] == "R-0001"

    def test_minimal_pdf_when_basic_rendering(
        self,
        service: DocumentService,
        report_request: ReportRequest,
        mock_capability: MagicMock,
        mock_renderer: MagicMock,
    ) -> None:
        mock_capability.supports_basic_rendering.return_value = True

        result = service.generate(DocumentKind.FINANCIAL_REPORT, report_request)

        assert result.success
        assert result.degraded
        assert result.content_type == "application/pdf"
        assert result.filename.endswith(".pdf")
        assert SIMPLIFIED_WARNING in result.warnings
        mock_renderer.render.assert_called_once()

    def test_minimal_failure_falls_back_to_json(
        self,
        service: DocumentService,
        report_request: ReportRequest,
        mock_capability: MagicMock,
        mock_renderer: MagicMock,
    ) -> None:
        mock_capability.supports_basic_rendering.return_value = True
        mock_renderer.render.side_effect = RuntimeError("no fonts")

        result = service.generate(DocumentKind.FINANCIAL_REPORT, report_request)

        assert result.success
        assert result.content_type == "application/json"

    def test_force_client_side(
        self,
        service: DocumentService,
        report_request: ReportRequest,
        mock_renderer: MagicMock,
    ) -> None:
        options = GenerationOptions(force_client_side=True)
        result = service.generate(DocumentKind.FINANCIAL_REPORT, report_request, options)

        assert result.success
        assert not result.degraded
        assert result.content_type == "application/pdf"
        mock_renderer.render.assert_called_once()

    def test_forced_render_failure_degrades(
        self,
        service: DocumentService,
        report_request: ReportRequest,
        mock_renderer: MagicMock,
    ) -> None:
        mock_renderer.render.side_effect = RuntimeError("canvas exploded")
        options = GenerationOptions(force_client_side=True)

        result = service.generate(DocumentKind.FINANCIAL_REPORT, report_request, options)

        assert result.success
        assert result.degraded
        assert result.content_type == "application/json"

    def test_unsummarizable_payload(self, service: DocumentService) -> None:
        options = GenerationOptions(enable_validation=False)
        result = service.generate(DocumentKind.RECEIPT, object(), options)  # type: ignore[arg-type]
        assert not result.success
        assert result.error_message.startswith("Could not summarize receipt")


class TestIdempotence:
    def test_same_input_same_artifact(
        self, service: DocumentService, report_request: ReportRequest
    ) -> None:
        first = service.generate(DocumentKind.FINANCIAL_REPORT, report_request)
        second = service.generate(DocumentKind.FINANCIAL_REPORT, report_request)
        assert first == second
