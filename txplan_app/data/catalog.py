"""
Read-only treatment category catalog.

The catalog is resolved before an editing session starts and shared by every
selector and ledger; nothing in the core mutates it.
"""

from collections.abc import Iterable, Iterator
from typing import Any, Optional

from ..errors import MalformedDataError
from .models import TreatmentCategory
from .parsers import parse_category_record

DEFAULT_CATEGORY_RECORDS: tuple[dict[str, Any], ...] = (
    {"_id": "1", "name": "Dental Checkup", "baseCost": 500, "description": "Regular dental examination"},
    {"_id": "2", "name": "Filling", "baseCost": 1500, "description": "Tooth filling procedure"},
    {"_id": "3", "name": "Extraction", "baseCost": 2000, "description": "Tooth extraction"},
    {"_id": "4", "name": "Root Canal", "baseCost": 8000, "description": "Root canal treatment"},
    {"_id": "5", "name": "Crown", "baseCost": 12000, "description": "Dental crown placement"},
    {"_id": "6", "name": "Cleaning", "baseCost": 800, "description": "Professional dental cleaning"},
    {"_id": "7", "name": "Bonding", "baseCost": 2000, "description": "Dental bonding procedure"},
    {"_id": "8", "name": "Veneers", "baseCost": 15000, "description": "Dental veneers"},
    {"_id": "9", "name": "Bridges", "baseCost": 18000, "description": "Dental bridge placement"},
    {"_id": "10", "name": "Implants", "baseCost": 35000, "description": "Dental implant surgery"},
    {"_id": "11", "name": "Orthodontics", "baseCost": 50000, "description": "Braces and alignment"},
    {"_id": "12", "name": "Whitening", "baseCost": 3000, "description": "Teeth whitening treatment"},
    {"_id": "13", "name": "Gum Treatment", "baseCost": 4000, "description": "Periodontal treatment"},
    {"_id": "14", "name": "Wisdom Tooth", "baseCost": 5000, "description": "Wisdom tooth extraction"},
    {"_id": "15", "name": "Emergency", "baseCost": 2500, "description": "Emergency dental care"},
)


class CategoryCatalog:
    """Ordered, id-indexed set of treatment categories."""

    def __init__(self, categories: Iterable[TreatmentCategory]):
        self._categories: tuple[TreatmentCategory, ...] = tuple(categories)
        self._by_id: dict[str, TreatmentCategory] = {}

        for category in self._categories:
            if category.id in self._by_id:
                raise MalformedDataError(
                    f"Duplicate category id: {category.id}",
                    raw_data=category.id,
                    context={"category_name": category.name}
                )
            self._by_id[category.id] = category

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "CategoryCatalog":
        """Build a catalog from API-shaped category records."""
        return cls(parse_category_record(record) for record in records)

    def get(self, category_id: str) -> Optional[TreatmentCategory]:
        """Look up a category; None when the id is unknown."""
        return self._by_id.get(category_id)

    def list(self) -> tuple[TreatmentCategory, ...]:
        """All categories in catalog order."""
        return self._categories

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[TreatmentCategory]:
        return iter(self._categories)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id


def default_catalog() -> CategoryCatalog:
    """Built-in catalog of common dental procedures."""
    return CategoryCatalog.from_records(DEFAULT_CATEGORY_RECORDS)
