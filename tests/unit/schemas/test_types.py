# schemas/test_types.py

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from emissions_aggregator.schemas import ChartSection, UnlockEvent

pytestmark = pytest.mark.unit


def test_unlock_event_scales_millisecond_timestamp() -> None:
    """
    ARRANGE: timestamp in milliseconds
    ACT:     validate UnlockEvent
    ASSERT:  timestamp is stored in seconds
    """
    event = UnlockEvent(timestamp=1_700_000_000_000, amount=5)

    assert event.timestamp == 1_700_000_000


def test_unlock_event_accepts_numeric_string_timestamp() -> None:
    """
    ARRANGE: timestamp given as a numeric string
    ACT:     validate UnlockEvent
    ASSERT:  timestamp is an int
    """
    event = UnlockEvent(timestamp=" 1700000000 ", amount=1)

    assert event.timestamp == 1_700_000_000


def test_unlock_event_accepts_datetime_timestamp() -> None:
    """
    ARRANGE: timezone-aware datetime
    ACT:     validate UnlockEvent
    ASSERT:  timestamp is its Unix seconds
    """
    moment = datetime(2024, 1, 1, tzinfo=UTC)

    event = UnlockEvent(timestamp=moment, amount=1)

    assert event.timestamp == int(moment.timestamp())


def test_unlock_event_rejects_negative_amount() -> None:
    """
    ARRANGE: negative amount
    ACT:     validate UnlockEvent
    ASSERT:  ValidationError is raised
    """
    with pytest.raises(ValidationError):
        UnlockEvent(timestamp=1, amount=-1)


def test_chart_section_collapses_label_whitespace() -> None:
    """
    ARRANGE: label with padding and repeated spaces
    ACT:     validate ChartSection
    ASSERT:  label is normalised
    """
    section = ChartSection(label="  Liquidity   Mining ")

    assert section.label == "Liquidity Mining"


def test_chart_section_rejects_blank_label() -> None:
    """
    ARRANGE: whitespace-only label
    ACT:     validate ChartSection
    ASSERT:  ValidationError is raised
    """
    with pytest.raises(ValidationError):
        ChartSection(label="   ")
