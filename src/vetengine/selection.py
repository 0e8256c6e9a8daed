# src/vetengine/selection.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from typing import Iterator, Mapping, Optional

from .types import SelectedItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """
    The worksheet: selected drugs keyed by drug id, in insertion order.
    Every operation returns a new Selection and leaves this one untouched.
    """
    entries: Mapping[str, SelectedItem] = field(default_factory=dict)

    def toggle(self, item: SelectedItem) -> "Selection":
        """Remove the entry with item.id if present, else insert item as-is."""
        entries = dict(self.entries)
        if item.id in entries:
            del entries[item.id]
            logger.debug("deselected %s", item.id)
        else:
            entries[item.id] = item
            logger.debug("selected %s", item.id)
        return Selection(entries)

    def upsert_if_present(self, item: SelectedItem) -> "Selection":
        """
        Merge item's fields into the existing entry; no-op when item.id is
        not selected. notes=None in item means "not supplied" and keeps
        whatever the user wrote.
        """
        current = self.entries.get(item.id)
        if current is None:
            return self
        changes = {
            f.name: getattr(item, f.name)
            for f in fields(SelectedItem)
            if not (f.name == "notes" and item.notes is None)
        }
        merged = replace(current, **changes)
        if merged == current:
            return self
        entries = dict(self.entries)
        entries[item.id] = merged
        return Selection(entries)

    def set_notes(self, item_id: str, notes: str) -> "Selection":
        """User edit of one entry's notes; no-op when the id is not selected."""
        current = self.entries.get(item_id)
        if current is None:
            return self
        entries = dict(self.entries)
        entries[item_id] = replace(current, notes=notes)
        return Selection(entries)

    def clear(self) -> "Selection":
        if self.entries:
            logger.debug("cleared %d selected drug(s)", len(self.entries))
        return Selection()

    def get(self, item_id: str) -> Optional[SelectedItem]:
        return self.entries.get(item_id)

    def items(self) -> list[SelectedItem]:
        return list(self.entries.values())

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.entries

    def __iter__(self) -> Iterator[SelectedItem]:
        return iter(self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)
