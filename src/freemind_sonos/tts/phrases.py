# src/freemind_sonos/tts/phrases.py

"""Texts that get spoken on the speaker."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, time

from ..freemind.task_models import TaskRecord

_DAYTIMES: tuple[tuple[time, str], ...] = (
    (time(18, 30), "Evening"),
    (time(15, 30), "Afternoon"),
    (time(11, 30), "Noon"),
    (time(5, 30), "Morning"),
)


def daytime_for(t: time) -> str:
    for threshold, name in _DAYTIMES:
        if t > threshold:
            return name
    return "Day"


def date_announcement(user: str, now: datetime) -> str:
    return (
        f"Good {daytime_for(now.time())} {user}.\n"
        f"Today is {now:%A}, the {now:%d} {now:%B} {now:%Y}.\n"
        f"The time is {now:%H:%M}."
    )


def _entry_lines(index: int, record: TaskRecord, now_ts: float) -> str:
    text = f"Number {index}: {record.description or record.title}.\n"

    location = record.location()
    minutes = record.minutes_until(now_ts)
    if location or minutes is not None:
        text += "Taking place"
        if location:
            text += f" at {location}"
        if minutes is not None:
            text += f" in {minutes} minutes"
        text += ".\n"
    elif record.timepoint():
        text += f"It was due at {record.timepoint()}.\n"
    return text


def digest_announcement(user: str, records: Sequence[TaskRecord], now_ts: float) -> str:
    """Spoken summary of the entries due today (records must have effective times computed)."""
    parts = [f"Hey {user}! You have {len(records)} events due today.\n"]
    for i, record in enumerate(records, start=1):
        parts.append(_entry_lines(i, record, now_ts))
    return "".join(parts)


def alert_announcement(user: str, records: Sequence[TaskRecord], now_ts: float) -> str:
    parts = [f"Attention {user}!\n"]
    for record in records:
        line = record.alert_note or record.description or record.title
        minutes = record.minutes_until(now_ts)
        if minutes is not None:
            parts.append(f"{line}. In {minutes} minutes.\n")
        else:
            parts.append(f"{line}.\n")
    return "".join(parts)
