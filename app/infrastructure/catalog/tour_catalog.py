from __future__ import annotations

from decimal import Decimal, InvalidOperation

from app.application.ports.tour_catalog_port import TourCatalogPort
from app.domain.entities.tour import Tour
from app.domain.services.money import DEFAULT_CURRENCY, normalize_currency


DEFAULT_TOUR_CATALOG: dict = {
    "7-day-baobab-safari": {"name": "7-Day Baobab Safari", "price": "2850", "currency": "USD"},
}


class StaticTourCatalog(TourCatalogPort):
    """Catalogo de tours vindo da configuracao (TOUR_CATALOG em JSON).

    Formato: {"<tour_id>": {"name": "...", "price": "2850", "currency": "USD"}}.
    """

    def __init__(self, data: dict):
        self._tours: dict[str, Tour] = {}
        for tour_id, entry in (data or {}).items():
            self._tours[str(tour_id)] = _parse_tour(str(tour_id), entry)

    def get_tour(self, *, tour_id: str) -> Tour | None:
        return self._tours.get(tour_id.strip())


def _parse_tour(tour_id: str, entry) -> Tour:
    if not isinstance(entry, dict):
        raise ValueError(f"Tour catalog entry '{tour_id}' must be an object.")
    name = str(entry.get("name") or "").strip()
    if not name:
        raise ValueError(f"Tour catalog entry '{tour_id}' is missing a name.")
    try:
        price = Decimal(str(entry.get("price")))
    except InvalidOperation as exc:
        raise ValueError(f"Tour catalog entry '{tour_id}' has an invalid price.") from exc
    if not price.is_finite() or price <= 0:
        raise ValueError(f"Tour catalog entry '{tour_id}' has an invalid price.")
    return Tour(
        id=tour_id,
        name=name,
        price=price,
        currency=normalize_currency(entry.get("currency") or DEFAULT_CURRENCY),
    )
