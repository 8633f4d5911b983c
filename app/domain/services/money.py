from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
import re


MINOR_UNITS_PER_MAJOR = Decimal("100")
DEFAULT_CURRENCY = "USD"

_CURRENCY_RE = re.compile(r"^[A-Za-z]{3}$")


def to_minor_units(amount: Decimal) -> int:
    if amount <= 0:
        raise ValueError("amount must be positive.")
    # Arredonda meio centavo para cima, como o checkout do site sempre fez.
    return int((amount * MINOR_UNITS_PER_MAJOR).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int) -> Decimal:
    return (Decimal(int(amount)) / MINOR_UNITS_PER_MAJOR).quantize(Decimal("0.01"))


def normalize_currency(value: str | None) -> str:
    """Retorna o codigo ISO-4217 em maiusculas; vazio vira USD."""
    if value is None or not value.strip():
        return DEFAULT_CURRENCY
    code = value.strip()
    if not _CURRENCY_RE.match(code):
        raise ValueError("currency must be a three-letter ISO-4217 code.")
    return code.upper()
