"""Domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path

DEFAULT_COUNTRY = "España"

DateLike = date | datetime | str


class DocumentKind(str, Enum):
    """Documents the pipeline can produce."""

    RECEIPT = "receipt"
    FINANCIAL_REPORT = "financial-report"


class OutputFormat(str, Enum):
    """Envelope of a generated document."""

    DATA_URI = "data-uri"
    BLOB = "blob"
    RAW_BYTES = "raw-bytes"


@dataclass
class CompanyInfo:
    name: str
    address: str = ""
    phone: str = ""
    email: str = ""
    tax_id: str = ""
    logo: str | None = None  # data:image/... reference or remote URL


@dataclass
class Client:
    id: int | str
    name: str
    email: str
    dni: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str = DEFAULT_COUNTRY
    notes: str | None = None


@dataclass
class TransactionRecord:
    """A single exchange: money received in one currency, delivered in another."""

    id: int | str
    date: DateLike
    client: Client
    amount_received: float
    amount_delivered: float
    exchange_rate: float  # delivered units per received unit
    receipt_id: str
    profit: float | None = None
    profit_percentage: float | None = None
    ip_address: str | None = None  # caller-supplied, shown on receipts


@dataclass
class PeriodSummary:
    """Aggregated totals of a list of transactions."""

    total_received: float = 0.0
    total_delivered: float = 0.0
    total_profit: float = 0.0
    avg_profit_percentage: float = 0.0
    count: int = 0


@dataclass
class MetricComparison:
    """One row of a period-over-period comparison."""

    label: str
    current: float
    previous: float
    delta: float
    delta_percentage: float | None  # None when the previous value is zero


@dataclass
class ReportRequest:
    start_date: DateLike
    end_date: DateLike
    company_info: CompanyInfo
    transactions: list[TransactionRecord] = field(default_factory=list)
    previous_summary: PeriodSummary | None = None


@dataclass
class ReceiptRequest:
    company_info: CompanyInfo
    client: Client
    transaction: TransactionRecord


@dataclass
class GenerationOptions:
    output_format: OutputFormat = OutputFormat.DATA_URI
    filename: str | None = None
    auto_download: bool = False
    enable_validation: bool = True
    modern_design: bool = False
    force_client_side: bool = False


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0


@dataclass
class GenerationResult:
    """Outcome of a document generation request."""

    success: bool
    content_type: str
    artifact: "str | bytes | Blob | None" = None
    error_message: str | None = None
    warnings: list[str] = field(default_factory=list)
    filename: str | None = None
    degraded: bool = False
    saved_path: Path | None = None  # set when the save-as-file action ran


@dataclass(frozen=True)
class Blob:
    """In-memory binary document with its content type."""

    data: bytes
    content_type: str = "application/pdf"

    @property
    def size(self) -> int:
        return len(self.data)

    def iter_chunks(self, chunk_size: int = 64 * 1024):
        """Yield the content in chunks, e.g. for a streamed HTTP body."""
        for start in range(0, len(self.data), chunk_size):
            yield self.data[start : start + chunk_size]


@dataclass(frozen=True)
class LogoImage:
    """Decoded logo bytes with their pixel size."""

    data: bytes
    width: int
    height: int
