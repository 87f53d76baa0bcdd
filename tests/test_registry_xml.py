# tests/test_registry_xml.py

from __future__ import annotations

import pytest

from freemind_sonos.freemind.registry_xml import RegistryFormatError, parse_registry
from freemind_sonos.freemind.task_models import Preparation

REGISTRY = """<?xml version="1.0" encoding="UTF-8"?>
<registry>
  <entry id="3">
    <name>Dentist</name>
    <description>Check-up at the dentist</description>
    <due>1700000000</due>
    <preparation>
      <description>Take the bus</description>
      <time-in-minutes>30</time-in-minutes>
    </preparation>
    <location>Main street 5</location>
    <alert>Bring the insurance card</alert>
  </entry>
  <entry>
    <name>Water plants</name>
    <description>Balcony</description>
    <repeats>0 8 * * 1</repeats>
    <location>   </location>
  </entry>
</registry>
"""


def test_parse_registry_reads_all_fields() -> None:
    dentist, plants = parse_registry(REGISTRY)

    assert dentist.id == 3
    assert dentist.title == "Dentist"
    assert dentist.description == "Check-up at the dentist"
    assert dentist.due == 1700000000
    assert dentist.recurrence_rule is None
    assert dentist.preparation == Preparation(description="Take the bus", minutes=30)
    assert dentist.preparation_lead_seconds == 1800
    assert dentist.location() == "Main street 5"
    assert dentist.alert_note == "Bring the insurance card"
    assert dentist.effective_time is None

    assert plants.id is None
    assert plants.due is None
    assert plants.recurrence_rule == "0 8 * * 1"
    assert plants.preparation is None
    assert plants.location_name is None
    assert plants.alert_note is None


def test_parse_registry_accepts_bytes_and_legacy_preparation_time() -> None:
    doc = b"<r><entry id='1'><name>n</name><preparation><time>5</time></preparation></entry></r>"
    (entry,) = parse_registry(doc)
    assert entry.preparation == Preparation(description=None, minutes=5)
    assert entry.description == ""


def test_bad_numbers_degrade_per_field() -> None:
    doc = "<r><entry id='x'><name>n</name><due>soon</due><preparation><time-in-minutes>a lot</time-in-minutes></preparation></entry></r>"
    (entry,) = parse_registry(doc)
    assert entry.id is None
    assert entry.due is None
    assert entry.preparation is not None
    assert entry.preparation.minutes is None


def test_empty_registry() -> None:
    assert parse_registry("<registry/>") == []


def test_malformed_document_raises() -> None:
    with pytest.raises(RegistryFormatError):
        parse_registry("<registry><entry>")


def test_entity_expansion_is_refused() -> None:
    doc = '<!DOCTYPE r [<!ENTITY a "aaaa">]><r><entry><name>&a;</name></entry></r>'
    with pytest.raises(RegistryFormatError):
        parse_registry(doc)
