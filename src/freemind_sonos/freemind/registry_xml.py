# src/freemind_sonos/freemind/registry_xml.py

"""
Decode the Freemind registry document.

Expected shape (root tag is not checked):

    <registry>
      <entry id="3">
        <name>Dentist</name>
        <description>Check-up</description>
        <due>1700000000</due>
        <repeats>0 8 * * 1</repeats>
        <preparation>
          <description>Take the bus</description>
          <time-in-minutes>30</time-in-minutes>
        </preparation>
        <location>Main street</location>
        <alert>Bring the card</alert>
      </entry>
    </registry>

The document comes from the network, so it is parsed with defusedxml.
"""

from __future__ import annotations

import logging
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring

from .task_models import Preparation, TaskRecord

logger = logging.getLogger(__name__)


class RegistryFormatError(RuntimeError):
    """The registry document is not well-formed XML."""


def _text(parent: Element, tag: str) -> str | None:
    node = parent.find(tag)
    if node is None or node.text is None:
        return None
    value = node.text.strip()
    return value or None


def _int(raw: str | None, *, field: str, entry_id: object) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r in entry id=%s", field, raw, entry_id)
        return None


def _preparation(entry: Element, entry_id: object) -> Preparation | None:
    node = entry.find("preparation")
    if node is None:
        return None
    minutes_raw = _text(node, "time-in-minutes")
    if minutes_raw is None:
        minutes_raw = _text(node, "time")
    return Preparation(
        description=_text(node, "description"),
        minutes=_int(minutes_raw, field="preparation time", entry_id=entry_id),
    )


def parse_entry(entry: Element) -> TaskRecord:
    raw_id = entry.get("id")
    entry_id = _int(raw_id.strip() if raw_id else None, field="id", entry_id=raw_id)
    return TaskRecord(
        id=entry_id,
        title=_text(entry, "name") or "",
        description=_text(entry, "description") or "",
        due=_int(_text(entry, "due"), field="due", entry_id=entry_id),
        recurrence_rule=_text(entry, "repeats"),
        preparation=_preparation(entry, entry_id),
        location_name=_text(entry, "location"),
        alert_note=_text(entry, "alert"),
    )


def parse_registry(xml_text: str | bytes) -> list[TaskRecord]:
    """Parse every <entry> below the root element, in document order."""
    try:
        root = fromstring(xml_text)
    except (ParseError, DefusedXmlException) as exc:
        raise RegistryFormatError(f"Malformed registry document: {exc}") from exc

    records = [parse_entry(e) for e in root.findall("entry")]
    logger.debug("Parsed %d registry entries", len(records))
    return records
