"""Aggregation of transactions into period totals."""

from datetime import date, timedelta
from typing import Any, Iterable

from .formatting import parse_date
from .models import (
    DocumentKind,
    MetricComparison,
    PeriodSummary,
    ReceiptRequest,
    ReportRequest,
    TransactionRecord,
)

PREVIEW_SIZE = 5


def summarize(transactions: Iterable[TransactionRecord]) -> PeriodSummary:
    """Reduce transactions to totals, count and average profit percentage."""
    records = list(transactions)
    count = len(records)

    total_received = sum(t.amount_received for t in records)
    total_delivered = sum(t.amount_delivered for t in records)
    total_profit = sum(t.profit or 0 for t in records)

    if count == 0:
        avg_profit_percentage = 0.0
    else:
        avg_profit_percentage = sum(t.profit_percentage or 0 for t in records) / count

    return PeriodSummary(
        total_received=total_received,
        total_delivered=total_delivered,
        total_profit=total_profit,
        avg_profit_percentage=avg_profit_percentage,
        count=count,
    )


def _compare(label: str, current: float, previous: float) -> MetricComparison:
    delta = current - previous
    delta_percentage = None if previous == 0 else delta / previous * 100
    return MetricComparison(
        label=label,
        current=current,
        previous=previous,
        delta=delta,
        delta_percentage=delta_percentage,
    )


def compare_periods(
    current: PeriodSummary, previous: PeriodSummary
) -> list[MetricComparison]:
    """Absolute and percentage deltas between two periods."""
    return [
        _compare("transactions", current.count, previous.count),
        _compare("received", current.total_received, previous.total_received),
        _compare("delivered", current.total_delivered, previous.total_delivered),
        _compare("profit", current.total_profit, previous.total_profit),
    ]


def filter_by_period(
    transactions: Iterable[TransactionRecord], start: date, end: date
) -> list[TransactionRecord]:
    """Transactions dated within [start, end], both days included, by date."""
    selected = [t for t in transactions if start <= parse_date(t.date) <= end]
    return sorted(selected, key=lambda t: parse_date(t.date))


def previous_period(start: date, end: date) -> tuple[date, date]:
    """The period of equal length ending the day before start."""
    length = (end - start).days + 1
    prev_end = start - timedelta(days=1)
    return prev_end - timedelta(days=length - 1), prev_end


def _preview(t: TransactionRecord) -> dict[str, Any]:
    return {
        "id": t.id,
        "date": parse_date(t.date).isoformat(),
        "client_name": t.client.name,
        "amount_received": t.amount_received,
        "amount_delivered": t.amount_delivered,
        "exchange_rate": t.exchange_rate,
        "profit": t.profit or 0,
        "profit_percentage": t.profit_percentage or 0,
    }


def build_summary_document(
    kind: DocumentKind, data: ReportRequest | ReceiptRequest
) -> dict[str, Any]:
    """Structured summary used when a full document cannot be rendered."""
    company = data.company_info
    document: dict[str, Any] = {
        "kind": kind.value,
        "company_info": {
            "name": company.name,
            "address": company.address,
            "phone": company.phone,
            "email": company.email,
            "tax_id": company.tax_id,
        },
    }

    if kind == DocumentKind.RECEIPT:
        transactions = [data.transaction]
        document["receipt_id"] = data.transaction.receipt_id
    else:
        transactions = list(data.transactions)
        document["period"] = {
            "start_date": parse_date(data.start_date).isoformat(),
            "end_date": parse_date(data.end_date).isoformat(),
        }

    totals = summarize(transactions)
    document["summary"] = {
        "total_received": totals.total_received,
        "total_delivered": totals.total_delivered,
        "total_profit": totals.total_profit,
        "avg_profit_percentage": totals.avg_profit_percentage,
        "transaction_count": totals.count,
    }
    document["preview_transactions"] = [_preview(t) for t in transactions[:PREVIEW_SIZE]]
    return document
