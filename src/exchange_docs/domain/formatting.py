"""Display formatting for amounts, rates and dates."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class NumberLocale:
    decimal_sep: str
    group_sep: str
    min_grouping_digits: int  # integer digits needed before grouping kicks in
    symbol_first: bool


LOCALES = {
    "es-ES": NumberLocale(",", ".", 5, symbol_first=False),
    "en-US": NumberLocale(".", ",", 4, symbol_first=True),
}

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "US$",
    "GBP": "£",
}

# Short unit symbols used when quoting exchange rates (e.g. "Bs/€")
RATE_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "VES": "Bs",
}


def _number_locale(locale: str) -> NumberLocale:
    try:
        return LOCALES[locale]
    except KeyError:
        raise ValueError(f"Unsupported locale: {locale}") from None


def parse_date(value: date | datetime | str) -> date:
    """Parse a date, datetime or ISO string into a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    raise ValueError(f"Invalid date: {value!r}")


def format_date(value: date | datetime | str) -> str:
    """Format as dd/mm/yyyy."""
    d = parse_date(value)
    return f"{d.day:02d}/{d.month:02d}/{d.year:04d}"


def format_amount(amount: float, locale: str = "es-ES") -> str:
    """Format a number with two decimals and localized separators."""
    loc = _number_locale(locale)
    sign = "-" if round(amount, 2) < 0 else ""
    integer, fraction = f"{abs(amount):.2f}".split(".")

    if len(integer) >= loc.min_grouping_digits:
        groups = []
        while len(integer) > 3:
            groups.insert(0, integer[-3:])
            integer = integer[:-3]
        groups.insert(0, integer)
        integer = loc.group_sep.join(groups)

    return f"{sign}{integer}{loc.decimal_sep}{fraction}"


def format_currency(amount: float, currency: str, locale: str = "es-ES") -> str:
    """Format an amount with its currency symbol or ISO code."""
    loc = _number_locale(locale)
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())
    number = format_amount(amount, locale)
    if loc.symbol_first:
        return f"{symbol}{number}"
    return f"{number} {symbol}"


def format_rate(rate: float, received: str, delivered: str) -> str:
    """Format an exchange rate as delivered units per received unit."""
    unit_to = RATE_SYMBOLS.get(delivered.upper(), delivered.upper())
    unit_from = RATE_SYMBOLS.get(received.upper(), received.upper())
    return f"{rate:.2f} {unit_to}/{unit_from}"


def format_percentage(value: float | None) -> str:
    return f"{(value or 0):.2f}%"
