from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Tour:
    id: str
    name: str
    price: Decimal
    currency: str
