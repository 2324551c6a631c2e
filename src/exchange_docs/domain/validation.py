"""Pre-generation checks for document payloads.

Errors block generation; warnings are reported alongside a successful
result. Payloads may be domain dataclasses or plain mappings using the same
field names (e.g. a freshly loaded YAML document).
"""

import logging
import math
import re
from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any

from .formatting import parse_date
from .models import ValidationResult

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,4}[-\s.]?[0-9]{1,9}$")
DNI_PATTERN = re.compile(r"^[0-9XYZ][0-9]{7}[A-Z]$")  # Spanish DNI/NIE


class ValidationTarget(str, Enum):
    TRANSACTION = "transaction"
    CLIENT = "client"
    COMPANY = "company"
    REPORT = "report"
    RECEIPT = "receipt"


def _get(payload: Any, name: str) -> Any:
    if isinstance(payload, Mapping):
        return payload.get(name)
    return getattr(payload, name, None)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _try_parse_date(value: Any) -> date | None:
    try:
        return parse_date(value)
    except (TypeError, ValueError):
        return None


def _merge(result: ValidationResult, nested: ValidationResult, prefix: str) -> None:
    result.errors.extend(f"{prefix}: {e}" for e in nested.errors)
    result.warnings.extend(f"{prefix}: {w}" for w in nested.warnings)


def _validate_transaction(transaction: Any, result: ValidationResult) -> None:
    if transaction is None:
        result.errors.append("Transaction is missing")
        return

    for name in ("amount_received", "amount_delivered", "exchange_rate"):
        value = _get(transaction, name)
        if value is None:
            result.errors.append(f"{name} is required")
        elif not _is_number(value) or value <= 0:
            result.errors.append(f"{name} must be a positive number")

    raw_date = _get(transaction, "date")
    if not raw_date:
        result.errors.append("date is required")
    elif _try_parse_date(raw_date) is None:
        result.errors.append("date must be a valid date")

    if _get(transaction, "client") is None:
        result.errors.append("client is required")

    for name in ("profit", "profit_percentage"):
        value = _get(transaction, name)
        if value is not None and not _is_number(value):
            result.errors.append(f"{name} must be a number")


def _validate_client(client: Any, result: ValidationResult) -> None:
    if client is None:
        result.errors.append("Client is missing")
        return

    if _is_blank(_get(client, "name")):
        result.errors.append("Client name is required")

    email = _get(client, "email")
    if _is_blank(email):
        result.errors.append("Client email is required")
    elif not EMAIL_PATTERN.match(email):
        result.errors.append("Client email is not valid")

    phone = _get(client, "phone")
    if phone and not PHONE_PATTERN.match(str(phone)):
        result.warnings.append("Client phone number format may be invalid")

    dni = _get(client, "dni")
    if dni and not DNI_PATTERN.match(str(dni)):
        result.warnings.append("Client DNI/NIE format may be invalid")


def _validate_company(company: Any, result: ValidationResult) -> None:
    if company is None:
        result.errors.append("Company info is missing")
        return

    if _is_blank(_get(company, "name")):
        result.errors.append("Company name is required")

    recommended = {
        "address": "Company address is recommended for documents",
        "phone": "Company phone is recommended for documents",
        "email": "Company email is recommended for documents",
        "tax_id": "Company tax ID (NIF/CIF) is recommended for documents",
    }
    for name, message in recommended.items():
        if _is_blank(_get(company, name)):
            result.warnings.append(message)

    logo = _get(company, "logo")
    if logo:
        if not isinstance(logo, str):
            result.errors.append("Company logo must be an image reference or URL")
        elif not logo.startswith(("data:image/", "http://", "https://")):
            result.warnings.append("Company logo format may not be supported")


def _validate_report(report: Any, result: ValidationResult) -> None:
    if report is None:
        result.errors.append("Report data is missing")
        return

    dates: dict[str, date | None] = {}
    for name in ("start_date", "end_date"):
        raw = _get(report, name)
        dates[name] = None
        if not raw:
            result.errors.append(f"{name} is required")
        elif (parsed := _try_parse_date(raw)) is None:
            result.errors.append(f"{name} is not a valid date")
        else:
            dates[name] = parsed

    start, end = dates["start_date"], dates["end_date"]
    if start and end and start > end:
        result.errors.append("start_date must not be after end_date")

    transactions = _get(report, "transactions")
    if transactions is None or len(transactions) == 0:
        result.warnings.append("No transactions in the selected period")
    else:
        for index, transaction in enumerate(transactions):
            nested = ValidationResult()
            _validate_transaction(transaction, nested)
            label = _get(transaction, "id") if transaction is not None else None
            _merge(result, nested, f"transaction {label if label is not None else index}")

    company = _get(report, "company_info")
    if company is None:
        result.errors.append("Company info is required for reports")
    else:
        nested = ValidationResult()
        _validate_company(company, nested)
        _merge(result, nested, "company")


def _validate_receipt(receipt: Any, result: ValidationResult) -> None:
    if receipt is None:
        result.errors.append("Receipt data is missing")
        return

    nested_checks = (
        ("transaction", _validate_transaction),
        ("client", _validate_client),
        ("company_info", _validate_company),
    )
    for name, check in nested_checks:
        value = _get(receipt, name)
        prefix = "company" if name == "company_info" else name
        if value is None:
            result.errors.append(f"{prefix} is required for receipts")
            continue
        nested = ValidationResult()
        check(value, nested)
        _merge(result, nested, prefix)

    transaction = _get(receipt, "transaction")
    if transaction is not None and _is_blank(_get(transaction, "receipt_id")):
        result.errors.append("receipt_id is required")


_VALIDATORS = {
    ValidationTarget.TRANSACTION: _validate_transaction,
    ValidationTarget.CLIENT: _validate_client,
    ValidationTarget.COMPANY: _validate_company,
    ValidationTarget.REPORT: _validate_report,
    ValidationTarget.RECEIPT: _validate_receipt,
}


def validate(payload: Any, kind: ValidationTarget | str) -> ValidationResult:
    """Check a payload before generation. Never raises."""
    result = ValidationResult()
    try:
        try:
            target = ValidationTarget(kind)
        except ValueError:
            result.warnings.append(f"Unknown validation target: {kind}")
            return result

        logger.debug(f"Validating {target.value}")
        _VALIDATORS[target](payload, result)
    except Exception as e:
        logger.exception(f"Unexpected error validating {kind}")
        return ValidationResult(errors=[f"Unexpected validation error: {e}"])

    return result
