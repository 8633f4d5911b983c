from __future__ import annotations

from typing import Protocol

from app.domain.entities.tour import Tour


class TourCatalogPort(Protocol):
    def get_tour(self, *, tour_id: str) -> Tour | None:
        ...
