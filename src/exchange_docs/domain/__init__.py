"""Domain layer - models, formatting, validation, layout and orchestration."""

from .layout import LayoutEngine
from .models import (
    Blob,
    Client,
    CompanyInfo,
    DocumentKind,
    GenerationOptions,
    GenerationResult,
    OutputFormat,
    PeriodSummary,
    ReceiptRequest,
    ReportRequest,
    TransactionRecord,
    ValidationResult,
)
from .serializer import OutputSerializer, unwrap, wrap
from .services import DocumentService
from .summary import build_summary_document, compare_periods, summarize
from .validation import validate

__all__ = [
    "Blob",
    "Client",
    "CompanyInfo",
    "DocumentKind",
    "DocumentService",
    "GenerationOptions",
    "GenerationResult",
    "LayoutEngine",
    "OutputFormat",
    "OutputSerializer",
    "PeriodSummary",
    "ReceiptRequest",
    "ReportRequest",
    "TransactionRecord",
    "ValidationResult",
    "build_summary_document",
    "compare_periods",
    "summarize",
    "unwrap",
    "validate",
    "wrap",
]
