# src/freemind_sonos/freemind/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Preparation:
    """Optional "get ready" block of an entry (free text + lead time in minutes)."""

    description: str | None = None
    minutes: int | None = None


@dataclass(eq=False, slots=True)
class TaskRecord:
    """
    One task/event entry of the Freemind registry.

    Identity:
    - two records with an id are equal iff their ids are equal
    - a record without an id only equals itself (two id-less records with the
      same content are still different entries)

    `effective_time` is derived by TaskDigest.compute_effective_times() and is None
    until that pass ran.
    """

    title: str
    description: str = ""
    id: int | None = None
    due: int | None = None
    recurrence_rule: str | None = None
    preparation: Preparation | None = None
    location_name: str | None = None
    alert_note: str | None = None

    effective_time: int | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaskRecord):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash(("task", self.id))

    @property
    def preparation_lead_seconds(self) -> int | None:
        if self.preparation is None or self.preparation.minutes is None:
            return None
        return self.preparation.minutes * 60

    @property
    def due_sort_key(self) -> int:
        # Entries without a due time sort first.
        return self.due if self.due is not None else 0

    def location(self) -> str:
        return self.location_name or ""

    def minutes_until(self, now: float) -> int | None:
        """Whole minutes from `now` until the effective time (None if unknown or past)."""
        if self.effective_time is None or self.effective_time < now:
            return None
        return int((self.effective_time - now) // 60)

    def timepoint(self) -> str | None:
        """Local HH:MM of the effective time."""
        if self.effective_time is None:
            return None
        try:
            return datetime.fromtimestamp(self.effective_time).strftime("%H:%M")
        except (OverflowError, OSError, ValueError):
            return None
