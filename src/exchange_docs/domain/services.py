"""Domain services - orchestrate document generation."""

import json
import logging
from pathlib import PurePath
from typing import Any

from ..exceptions import RenderingUnavailableError, ValidationError
from ..ports.rendering import RenderingCapability
from .formatting import parse_date
from .layout import LayoutEngine
from .models import (
    DocumentKind,
    GenerationOptions,
    GenerationResult,
    ReceiptRequest,
    ReportRequest,
)
from .serializer import (
    JSON_CONTENT_TYPE,
    PDF_CONTENT_TYPE,
    OutputSerializer,
    wrap,
)
from .summary import build_summary_document
from .validation import ValidationTarget, validate

logger = logging.getLogger(__name__)

DEFAULT_REPORT_NAME = "reporte-financiero"
DEFAULT_RECEIPT_NAME = "recibo"

JSON_FALLBACK_WARNING = "JSON version generated due to server limitations"
SIMPLIFIED_WARNING = "Simplified document generated due to rendering limitations"


class DocumentService:
    """Orchestrates validation, layout and serialization of documents."""

    def __init__(
        self,
        capability: RenderingCapability,
        layout: LayoutEngine,
        serializer: OutputSerializer,
        report_name: str = DEFAULT_REPORT_NAME,
        receipt_name: str = DEFAULT_RECEIPT_NAME,
    ) -> None:
        self.capability = capability
        self.layout = layout
        self.serializer = serializer
        self.report_name = report_name
        self.receipt_name = receipt_name

    def generate(
        self,
        kind: DocumentKind | str,
        data: ReportRequest | ReceiptRequest,
        options: GenerationOptions | None = None,
    ) -> GenerationResult:
        """Generate a document. Never raises.

        States:
            1. Validate (if enabled); errors end generation
            2. Check whether rich rendering is available
            3. Full render: layout, serialize, optional save
            4. Degraded path: minimal PDF if possible, else JSON summary
        """
        options = options or GenerationOptions()
        try:
            return self._generate(DocumentKind(kind), data, options)
        except Exception as e:
            logger.exception(f"Document generation failed: {e}")
            return GenerationResult(
                success=False,
                content_type=PDF_CONTENT_TYPE,
                error_message=str(e),
            )

    def _generate(
        self,
        kind: DocumentKind,
        data: ReportRequest | ReceiptRequest,
        options: GenerationOptions,
    ) -> GenerationResult:
        logger.info(f"Generating {kind.value}")
        warnings: list[str] = []

        # 1. Validate
        if options.enable_validation:
            target = (
                ValidationTarget.RECEIPT
                if kind == DocumentKind.RECEIPT
                else ValidationTarget.REPORT
            )
            validation = validate(data, target)
            warnings.extend(validation.warnings)
            if not validation.is_valid:
                error = ValidationError(validation.errors, validation.warnings)
                logger.warning(f"Validation failed: {error}")
                return GenerationResult(
                    success=False,
                    content_type=PDF_CONTENT_TYPE,
                    error_message=str(error),
                    warnings=warnings,
                )

        # 2. Environment check
        rich = self.capability.supports_rich_rendering()
        if not rich and not options.force_client_side:
            logger.info("Rich rendering unavailable, using degraded path")
            return self._degraded(kind, data, options, warnings)

        # 3. Full render
        try:
            return self._full_render(kind, data, options, warnings)
        except Exception as e:
            if not rich:
                logger.warning(f"Forced render failed, using degraded path: {e}")
                return self._degraded(kind, data, options, warnings)
            logger.exception(f"Rendering failed: {e}")
            return GenerationResult(
                success=False,
                content_type=PDF_CONTENT_TYPE,
                error_message=str(e),
                warnings=warnings,
            )

    def _full_render(
        self,
        kind: DocumentKind,
        data: ReportRequest | ReceiptRequest,
        options: GenerationOptions,
        warnings: list[str],
    ) -> GenerationResult:
        page_set = self.layout.layout(kind, data, options)
        artifact = self.serializer.serialize(page_set, options.output_format)
        filename = self.resolve_filename(kind, data, options, "pdf")

        result = GenerationResult(
            success=True,
            content_type=PDF_CONTENT_TYPE,
            artifact=artifact,
            warnings=warnings,
            filename=filename,
        )
        self._auto_save(result, options)
        logger.info(f"Generated {filename} ({len(page_set.pages)} page(s))")
        return result

    def _degraded(
        self,
        kind: DocumentKind,
        data: ReportRequest | ReceiptRequest,
        options: GenerationOptions,
        warnings: list[str],
    ) -> GenerationResult:
        try:
            document = build_summary_document(kind, data)
        except Exception as e:
            logger.exception(f"Failed to build summary document: {e}")
            return GenerationResult(
                success=False,
                content_type=JSON_CONTENT_TYPE,
                error_message=f"Could not summarize {kind.value}: {e}",
                warnings=warnings,
            )

        try:
            result = self._minimal_render(kind, data, document, options, warnings)
        except Exception as e:
            logger.warning(f"Minimal rendering failed: {e}")
        else:
            self._auto_save(result, options)
            return result

        content = json.dumps(document, ensure_ascii=False, indent=2, default=str)
        result = GenerationResult(
            success=True,
            content_type=JSON_CONTENT_TYPE,
            artifact=wrap(content.encode("utf-8"), options.output_format, JSON_CONTENT_TYPE),
            warnings=[*warnings, JSON_FALLBACK_WARNING],
            filename=self.resolve_filename(kind, data, options, "json"),
            degraded=True,
        )
        self._auto_save(result, options)
        logger.warning(f"Returned JSON summary instead of PDF: {result.filename}")
        return result

    def _minimal_render(
        self,
        kind: DocumentKind,
        data: ReportRequest | ReceiptRequest,
        document: dict[str, Any],
        options: GenerationOptions,
        warnings: list[str],
    ) -> GenerationResult:
        if not self.capability.supports_basic_rendering():
            raise RenderingUnavailableError("Basic rendering is not available")

        page_set = self.layout.layout_summary(document)
        return GenerationResult(
            success=True,
            content_type=PDF_CONTENT_TYPE,
            artifact=self.serializer.serialize(page_set, options.output_format),
            warnings=[*warnings, SIMPLIFIED_WARNING],
            filename=self.resolve_filename(kind, data, options, "pdf"),
            degraded=True,
        )

    def _auto_save(self, result: GenerationResult, options: GenerationOptions) -> None:
        if not options.auto_download or result.artifact is None:
            return
        try:
            result.saved_path = self.serializer.save(result.artifact, result.filename)
        except OSError as e:
            logger.warning(f"Failed to save {result.filename}: {e}")
            result.warnings.append(f"Could not save {result.filename}: {e}")

    def resolve_filename(
        self,
        kind: DocumentKind,
        data: ReportRequest | ReceiptRequest,
        options: GenerationOptions,
        extension: str,
    ) -> str:
        """Explicit override, or a name derived from receipt id / period."""
        if options.filename:
            if extension == "pdf":
                return options.filename
            return str(PurePath(options.filename).with_suffix(f".{extension}"))

        if kind == DocumentKind.RECEIPT:
            return f"{self.receipt_name}-{data.transaction.receipt_id}.{extension}"

        start = parse_date(data.start_date).isoformat()
        end = parse_date(data.end_date).isoformat()
        return f"{self.report_name}-{start}-a-{end}.{extension}"
