# src/freemind_sonos/freemind/task_digest.py

from __future__ import annotations

"""
Task digest engine.

Holds the entries of one registry fetch and answers two questions:
- is there an entry with an alert in the next N minutes?
- what takes place today (in local time)?

The "effective time" of an entry folds in:
- the nominal due time,
- the next occurrence of its recurrence rule (whichever comes first),
- the preparation lead (the effective time is when to start getting ready).

Pure computation, no I/O. Bad recurrence rules never raise: the entry just falls back
to its nominal due time.
"""

import logging
import time
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from croniter import croniter

from .task_models import TaskRecord

logger = logging.getLogger(__name__)


# Recurrence rules use second-first cron syntax with an optional trailing year.
# Day-of-week numbers run 1-7 with 1 = Sunday; croniter counts 0-6 from Sunday.
# Day-of-month and day-of-week must both match.
_DOW_FIELD = 5
_MIN_YEAR, _MAX_YEAR = 1970, 2099


def _shift_dow_number(token: str) -> str:
    n = int(token)
    if not 1 <= n <= 7:
        raise ValueError(f"day-of-week {n} out of range 1-7")
    return str(n - 1)


def _dow_for_croniter(field: str) -> str:
    """Translate a 1-7 (Sunday first) day-of-week field to croniter's 0-6 numbering."""
    out: list[str] = []
    for part in field.split(","):
        base, slash, step = part.partition("/")
        bounds = [_shift_dow_number(b) if b.isdigit() else b for b in base.split("-")]
        out.append("-".join(bounds) + slash + step)
    return ",".join(out)


def _year_matcher(field: str) -> Callable[[int], bool] | None:
    """Predicate for a year field (`*`, numbers, ranges, steps, lists), None for wildcard."""
    if field == "*":
        return None
    allowed: set[int] = set()
    for part in field.split(","):
        base, _, step_raw = part.partition("/")
        step = int(step_raw) if step_raw else 1
        if step < 1:
            raise ValueError(f"bad year step {step_raw!r}")
        if base == "*":
            lo, hi = _MIN_YEAR, _MAX_YEAR
        elif "-" in base:
            a, b = base.split("-", 1)
            lo, hi = int(a), int(b)
        else:
            lo = int(base)
            hi = _MAX_YEAR if step_raw else lo
        if not _MIN_YEAR <= lo <= hi <= _MAX_YEAR:
            raise ValueError(f"bad year range {part!r}")
        allowed.update(range(lo, hi + 1, step))
    return allowed.__contains__


def _cron_args(rule: str) -> tuple[str, Callable[[int], bool] | None] | None:
    """
    Split a recurrence rule into a croniter expression and a year filter.

    Accepted forms:
    - 6 fields: second minute hour day-of-month month day-of-week
    - 7 fields: the 6-field form plus a trailing year
    """
    fields = rule.split()
    if len(fields) not in (6, 7):
        return None
    try:
        fields[_DOW_FIELD] = _dow_for_croniter(fields[_DOW_FIELD])
        years = _year_matcher(fields[6]) if len(fields) == 7 else None
    except ValueError as exc:
        logger.debug("Bad recurrence rule %r: %s", rule, exc)
        return None
    return " ".join(fields[:6]), years


def next_occurrence(rule: str, now: float) -> int | None:
    """First occurrence of `rule` strictly after `now` (local time), or None if it can't be computed."""
    args = _cron_args(rule)
    if args is None:
        logger.debug("Unsupported recurrence rule %r", rule)
        return None
    expr, years = args
    try:
        start = datetime.fromtimestamp(now).astimezone()
        while True:
            it = croniter(expr, start, day_or=False, second_at_beginning=True)
            found = it.get_next(datetime)
            if years is None or years(found.year):
                return int(found.timestamp())
            later = [y for y in range(found.year + 1, _MAX_YEAR + 1) if years(y)]
            if not later:
                return None
            # jump to the first allowed year; get_next is strictly after start
            start = datetime(later[0], 1, 1).astimezone() - timedelta(seconds=1)
    except (ValueError, KeyError, TypeError, OverflowError, OSError) as exc:
        logger.debug("Ignoring recurrence rule %r: %s", rule, exc)
        return None


def effective_time_of(record: TaskRecord, now: float) -> int | None:
    due = record.due

    if record.recurrence_rule:
        upcoming = next_occurrence(record.recurrence_rule, now)
        if upcoming is not None:
            due = upcoming if due is None else min(due, upcoming)

    if due is not None:
        lead = record.preparation_lead_seconds
        if lead is not None:
            due -= lead

    return due


def local_day_bounds(now: float) -> tuple[int, int]:
    """(00:00:00, 23:59:59) of the local calendar day containing `now`, as epoch seconds."""
    day = datetime.fromtimestamp(now)
    start = day.replace(hour=0, minute=0, second=0, microsecond=0)
    end = day.replace(hour=23, minute=59, second=59, microsecond=0)
    return int(start.timestamp()), int(end.timestamp())


class TaskDigest:
    """
    Owns the entries of one registry fetch.

    Callers should recompute once per logical query: recurrence expansion is relative
    to "now", so effective times drift between calls.
    """

    def __init__(self, records: Iterable[TaskRecord] = ()) -> None:
        self._records: list[TaskRecord] = []
        self.replace(records)

    @property
    def records(self) -> tuple[TaskRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def replace(self, records: Iterable[TaskRecord]) -> None:
        """Take a fresh batch (no merge) and sort it by nominal due time."""
        self._records = sorted(records, key=lambda r: r.due_sort_key)

    def compute_effective_times(self, now: float | None = None) -> None:
        now_ts = time.time() if now is None else now
        for record in self._records:
            record.effective_time = effective_time_of(record, now_ts)

    def needs_alert_within(self, window_minutes: int, now: float | None = None) -> bool:
        """True if some entry with an alert becomes effective in [now, now + window)."""
        return bool(self.alerts_within(window_minutes, now))

    def alerts_within(self, window_minutes: int, now: float | None = None) -> list[TaskRecord]:
        now_ts = time.time() if now is None else now
        self.compute_effective_times(now_ts)

        upper = now_ts + window_minutes * 60
        out = [
            r
            for r in self._records
            if r.alert_note is not None
            and r.effective_time is not None
            and now_ts <= r.effective_time < upper
        ]
        out.sort(key=lambda r: r.effective_time or 0)
        return out

    def due_today(self, now: float | None = None) -> list[TaskRecord]:
        """Entries effective within the local day of `now` (both bounds inclusive), soonest first."""
        now_ts = time.time() if now is None else now
        start, end = local_day_bounds(now_ts)

        self.compute_effective_times(now_ts)

        out = [
            r
            for r in self._records
            if r.effective_time is not None and start <= r.effective_time <= end
        ]
        out.sort(key=lambda r: r.effective_time or 0)
        logger.debug("due_today: %d of %d entries in [%d, %d]", len(out), len(self._records), start, end)
        return out
