"""Shared test fixtures."""

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest

from exchange_docs.domain.layout import LayoutEngine
from exchange_docs.domain.models import (
    Client,
    CompanyInfo,
    ReceiptRequest,
    ReportRequest,
    TransactionRecord,
)
from exchange_docs.ports.images import LogoLoaderPort
from exchange_docs.ports.metadata import MetadataPort
from exchange_docs.ports.rendering import DocumentRenderer, RenderingCapability
from exchange_docs.ports.storage import StoragePort

FIXED_NOW = datetime(2024, 4, 2, 10, 30, 0)

# 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
PNG_DATA_URI = f"data:image/png;base64,{PNG_BASE64}"


def make_transaction(
    tx_id: int,
    day: date,
    client: Client,
    received: float = 100.0,
    rate: float = 35.0,
    profit: float | None = 2.5,
    profit_percentage: float | None = 2.5,
) -> TransactionRecord:
    return TransactionRecord(
        id=tx_id,
        date=day,
        client=client,
        amount_received=received,
        amount_delivered=received * rate,
        exchange_rate=rate,
        receipt_id=f"R-{tx_id:04d}",
        profit=profit,
        profit_percentage=profit_percentage,
        ip_address="192.0.2.10",
    )


@pytest.fixture
def company() -> CompanyInfo:
    """Company with every recommended field set."""
    return CompanyInfo(
        name="Cambios Ejemplo S.L.",
        address="Calle Mayor 1, Madrid",
        phone="+34 910 000 000",
        email="info@cambios.example",
        tax_id="B12345678",
    )


@pytest.fixture
def client() -> Client:
    return Client(
        id=1,
        name="Ana Pérez",
        email="ana@example.com",
        dni="12345678Z",
        phone="+34 600000000",
        address="Calle Sol 3",
        city="Madrid",
        postal_code="28001",
    )


@pytest.fixture
def transactions(client: Client) -> list[TransactionRecord]:
    return [
        make_transaction(1, date(2024, 3, 1), client, received=100.0),
        make_transaction(2, date(2024, 3, 15), client, received=200.0, profit=5.0,
                         profit_percentage=2.5),
        make_transaction(3, date(2024, 3, 31), client, received=50.0, profit=1.0,
                         profit_percentage=2.0),
    ]


@pytest.fixture
def report_request(
    company: CompanyInfo, transactions: list[TransactionRecord]
) -> ReportRequest:
    return ReportRequest(
        start_date=date(2024, 3, 1),
        end_date=date(2024, 3, 31),
        company_info=company,
        transactions=transactions,
    )


@pytest.fixture
def receipt_request(
    company: CompanyInfo, client: Client, transactions: list[TransactionRecord]
) -> ReceiptRequest:
    return ReceiptRequest(company_info=company, client=client, transaction=transactions[0])


@pytest.fixture
def layout_engine() -> LayoutEngine:
    """Layout engine with a fixed clock and no logo loading."""
    return LayoutEngine(clock=lambda: FIXED_NOW)


@pytest.fixture
def mock_renderer() -> MagicMock:
    """Mock renderer port."""
    mock = MagicMock(spec=DocumentRenderer)
    mock.supports_tables = True
    mock.render.return_value = b"%PDF-1.4 test content"
    return mock


@pytest.fixture
def mock_capability() -> MagicMock:
    """Mock capability port reporting a rich rendering environment."""
    mock = MagicMock(spec=RenderingCapability)
    mock.supports_rich_rendering.return_value = True
    mock.supports_basic_rendering.return_value = False
    return mock


@pytest.fixture
def mock_metadata() -> MagicMock:
    """Mock metadata port that returns content unchanged."""
    mock = MagicMock(spec=MetadataPort)
    mock.stamp.side_effect = lambda content, info: content
    return mock


@pytest.fixture
def mock_storage() -> MagicMock:
    """Mock storage port."""
    return MagicMock(spec=StoragePort)


@pytest.fixture
def mock_logo_loader() -> MagicMock:
    """Mock logo loader port."""
    return MagicMock(spec=LogoLoaderPort)


@pytest.fixture
def tx_factory():
    """Factory for transaction records."""
    return make_transaction


@pytest.fixture
def logo_data_uri() -> str:
    """A 1x1 PNG logo as a data reference."""
    return PNG_DATA_URI


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
