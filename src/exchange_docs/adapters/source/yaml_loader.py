"""YAML data files holding company, clients and transactions.

Example::

    company:
      name: Cambios Ejemplo S.L.
      tax_id: B12345678
    clients:
      - id: 1
        name: Ana Pérez
        email: ana@example.com
    transactions:
      - id: 10
        date: 2024-03-01
        client_id: 1
        amount_received: 100
        amount_delivered: 3500
        exchange_rate: 35
        profit: 2.5
        profit_percentage: 2.5
        receipt_id: R-0010
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ...domain.models import (
    DEFAULT_COUNTRY,
    Client,
    CompanyInfo,
    TransactionRecord,
)
from ...exceptions import DataFileError

logger = logging.getLogger(__name__)


@dataclass
class DataFile:
    company: CompanyInfo
    clients: dict[str, Client] = field(default_factory=dict)
    transactions: list[TransactionRecord] = field(default_factory=list)

    def find_receipt(self, receipt_id: str) -> TransactionRecord | None:
        for transaction in self.transactions:
            if transaction.receipt_id == receipt_id:
                return transaction
        return None


def _text(raw: dict[str, Any], name: str) -> str | None:
    value = raw.get(name)
    return None if value is None else str(value)


def _entries(raw: dict[str, Any], section: str) -> list[Any]:
    entries = raw.get(section) or []
    if not isinstance(entries, list):
        raise DataFileError(f"'{section}' must be a list")
    return entries


def _build_company(raw: Any) -> CompanyInfo:
    if not isinstance(raw, dict):
        raise DataFileError("'company' section is missing")
    return CompanyInfo(
        name=str(raw.get("name") or ""),
        address=str(raw.get("address") or ""),
        phone=str(raw.get("phone") or ""),
        email=str(raw.get("email") or ""),
        tax_id=str(raw.get("tax_id") or ""),
        logo=raw.get("logo"),
    )


def _build_client(raw: dict[str, Any], default_country: str) -> Client:
    return Client(
        id=raw.get("id", ""),
        name=str(raw.get("name") or ""),
        email=str(raw.get("email") or ""),
        dni=_text(raw, "dni"),
        phone=_text(raw, "phone"),
        address=_text(raw, "address"),
        city=_text(raw, "city"),
        postal_code=_text(raw, "postal_code"),
        country=raw.get("country") or default_country,
        notes=_text(raw, "notes"),
    )


def _build_transaction(
    raw: dict[str, Any], index: int, clients: dict[str, Client], default_country: str
) -> TransactionRecord:
    tx_id = raw.get("id", index + 1)

    if isinstance(raw.get("client"), dict):
        client = _build_client(raw["client"], default_country)
    elif "client_id" in raw:
        try:
            client = clients[str(raw["client_id"])]
        except KeyError:
            raise DataFileError(
                f"Transaction {tx_id} references unknown client {raw['client_id']}"
            ) from None
    else:
        raise DataFileError(f"Transaction {tx_id} has no client")

    return TransactionRecord(
        id=tx_id,
        date=raw.get("date"),
        client=client,
        amount_received=raw.get("amount_received"),
        amount_delivered=raw.get("amount_delivered"),
        exchange_rate=raw.get("exchange_rate"),
        receipt_id=str(raw.get("receipt_id") or ""),
        profit=raw.get("profit"),
        profit_percentage=raw.get("profit_percentage"),
        ip_address=_text(raw, "ip_address"),
    )


def load_data_file(path: Path, default_country: str = DEFAULT_COUNTRY) -> DataFile:
    """Parse a YAML data file into domain records.

    Field values are not checked here; run the validator on the result.
    """
    logger.debug(f"Loading data file: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise DataFileError(f"Cannot read {path}: {e}") from e

    if not isinstance(raw, dict):
        raise DataFileError(f"{path} does not contain a mapping")

    company = _build_company(raw.get("company"))

    clients = {}
    for index, entry in enumerate(_entries(raw, "clients")):
        if not isinstance(entry, dict):
            raise DataFileError(f"Client entry {index + 1} is not a mapping")
        client = _build_client(entry, default_country)
        clients[str(client.id)] = client

    transactions = []
    for index, entry in enumerate(_entries(raw, "transactions")):
        if not isinstance(entry, dict):
            raise DataFileError(f"Transaction entry {index + 1} is not a mapping")
        transactions.append(_build_transaction(entry, index, clients, default_country))

    logger.info(
        f"Loaded {len(transactions)} transactions and {len(clients)} clients from {path.name}"
    )
    return DataFile(company=company, clients=clients, transactions=transactions)
