"""
Category search, exclusion and display limiting.

Results keep catalog order; a query narrows by case-insensitive substring on
name or description. The show-all toggle belongs to the caller and is passed
in on every call.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from ..config.defaults import SelectorParams
from ..data.catalog import CategoryCatalog
from ..data.models import TreatmentCategory


class SupportsSelection(Protocol):
    """Anything exposing the set of category ids already in use."""

    @property
    def selected_category_ids(self) -> frozenset[str]: ...


@dataclass(frozen=True)
class CategorySelection:
    """Categories to display plus what the caller needs for its affordances."""

    categories: tuple[TreatmentCategory, ...]   # Display-limited
    total_available: int                        # After exclusion and query, before limit
    display_limit: int
    show_all: bool
    query: str

    @property
    def has_more(self) -> bool:
        """More categories match than the display limit allows."""
        return self.total_available > self.display_limit

    @property
    def offer_show_all(self) -> bool:
        return self.has_more and not self.show_all

    @property
    def offer_show_less(self) -> bool:
        return self.has_more and self.show_all

    @property
    def is_empty_result(self) -> bool:
        """A non-empty query matched nothing."""
        return self.total_available == 0 and bool(self.query)


class CategorySelector:
    """Filters a catalog against a draft's selected categories."""

    def __init__(self, catalog: CategoryCatalog, params: Optional[SelectorParams] = None):
        self.catalog = catalog
        self.params = params or SelectorParams()

    @property
    def display_limit(self) -> int:
        return self.params.display_limit

    def available_categories(
        self,
        draft: SupportsSelection,
        query: str = ""
    ) -> list[TreatmentCategory]:
        """
        Categories not yet in the draft, narrowed by query, in catalog order.

        Args:
            draft: Draft (or ledger) exposing selected_category_ids
            query: Search text; blank means no narrowing

        Returns:
            Every matching category, without the display limit applied
        """
        selected = draft.selected_category_ids
        available = [c for c in self.catalog if c.id not in selected]

        needle = (query or "").strip()
        if needle:
            available = [c for c in available if c.matches(needle)]

        return available

    def select(
        self,
        draft: SupportsSelection,
        query: str = "",
        show_all: bool = False
    ) -> CategorySelection:
        """Available categories with the display limit applied unless show_all."""
        available = self.available_categories(draft, query)
        shown = available if show_all else available[:self.display_limit]

        return CategorySelection(
            categories=tuple(shown),
            total_available=len(available),
            display_limit=self.display_limit,
            show_all=show_all,
            query=(query or "").strip(),
        )
