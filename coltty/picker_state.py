"""Selection, filtering and favorites state of the interactive scheme picker."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum

from coltty.config import Scheme


class PickerViewMode(str, Enum):
    """Which items the picker lists."""

    ALL = "all"
    FAVORITES = "favorites"

    def __str__(self) -> str:
        return self.value


@dataclass
class PickerItem:
    """One scheme entry in the picker."""

    name: str
    scheme: Scheme = field(default_factory=Scheme)
    tag: str = ""
    favorite: bool = False
    usage_count: int = 0


def fuzzy_score(name: str, query: str) -> int | None:
    """Rank how name matches query: 0 prefix, 1 substring, 2 subsequence, None no match."""
    if not query:
        return 0
    name = name.lower()
    query = query.lower()
    if name.startswith(query):
        return 0
    if query in name:
        return 1
    remaining = iter(name)
    if all(ch in remaining for ch in query):
        return 2
    return None


class PickerState:
    """Items, the active filter and the selected position in the filtered list."""

    def __init__(self, items: Iterable[PickerItem] = (), initial_name: str = "") -> None:
        self.query = ""
        self.view_mode = PickerViewMode.ALL
        self.items: list[PickerItem] = [replace(item) for item in items]
        self.filtered: list[int] = []
        self.selected = 0
        self._refresh(initial_name)

    def selected_item(self) -> PickerItem | None:
        """The selected item, or None when nothing matches."""
        if not self.filtered:
            return None
        return self.items[self.filtered[self.selected]]

    @property
    def selected_name(self) -> str:
        item = self.selected_item()
        return item.name if item is not None else ""

    def set_query(self, query: str) -> None:
        self.query = query
        self._refresh(self.selected_name)

    def toggle_favorite(self) -> None:
        item = self.selected_item()
        if item is None:
            return
        item.favorite = not item.favorite
        self._refresh(item.name)

    def toggle_view_mode(self) -> None:
        if self.view_mode is PickerViewMode.ALL:
            self.view_mode = PickerViewMode.FAVORITES
        else:
            self.view_mode = PickerViewMode.ALL
        self._refresh(self.selected_name)

    def move_selection(self, delta: int) -> bool:
        """Move the selection, clamped to the list; return True if it changed."""
        if not self.filtered:
            return False
        target = min(max(self.selected + delta, 0), len(self.filtered) - 1)
        if target == self.selected:
            return False
        self.selected = target
        return True

    def favorite_names(self) -> list[str]:
        """Sorted names of all favorite items."""
        return sorted(item.name for item in self.items if item.favorite)

    def item_by_name(self, name: str) -> PickerItem | None:
        return next((item for item in self.items if item.name == name), None)

    def _refresh(self, preferred_name: str) -> None:
        scored: list[tuple[int, int]] = []
        for index, item in enumerate(self.items):
            if self.view_mode is PickerViewMode.FAVORITES and not item.favorite:
                continue
            score = fuzzy_score(item.name, self.query)
            if score is not None:
                scored.append((score, index))
        # Sorting on (score, index) keeps insertion order within a score.
        self.filtered = [index for _, index in sorted(scored)]
        self.selected = next(
            (
                position
                for position, index in enumerate(self.filtered)
                if self.items[index].name == preferred_name
            ),
            0,
        )