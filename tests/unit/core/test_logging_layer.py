import dataclasses
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from fractions import Fraction

import pytest

from coinhours.core.logging_layer import (
    GENESIS_HASH,
    Event,
    EventFilter,
    EventLogger,
    LoggingError,
)

_T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _logger_with(n: int) -> EventLogger:
    logger = EventLogger()
    for i in range(n):
        logger.log_event("HOURS_PLANNED", {"index": i}, _T0 + timedelta(minutes=i))
    return logger


class TestLogEvent:

    def test_returns_sequential_ids(self):
        logger = EventLogger()
        assert logger.log_event("A", {}, _T0) == "EVT-0000000000000001"
        assert logger.log_event("A", {}, _T0) == "EVT-0000000000000002"

    def test_event_count(self):
        assert _logger_with(3).event_count() == 3

    def test_empty_event_type_rejected(self):
        with pytest.raises(LoggingError):
            EventLogger().log_event("", {}, _T0)

    def test_none_timestamp_rejected(self):
        with pytest.raises(LoggingError):
            EventLogger().log_event("A", {}, None)  # type: ignore[arg-type]

    def test_non_datetime_timestamp_rejected(self):
        with pytest.raises(LoggingError):
            EventLogger().log_event("A", {}, "2024-01-01")  # type: ignore[arg-type]

    def test_non_dict_data_rejected(self):
        with pytest.raises(LoggingError):
            EventLogger().log_event("A", [("k", 1)], _T0)  # type: ignore[arg-type]

    def test_failed_log_does_not_advance_counter(self):
        logger = EventLogger()
        with pytest.raises(LoggingError):
            logger.log_event("", {}, _T0)
        assert logger.log_event("A", {}, _T0) == "EVT-0000000000000001"

    def test_payload_frozen(self):
        logger = EventLogger()
        source = {"addr_hours": [1, [2, 3]], "share": Fraction(1, 3), "d": Decimal("0.5")}
        logger.log_event("A", source, _T0)
        event = logger.query_events(EventFilter())[0]
        assert event.data == {"addr_hours": (1, (2, 3)), "share": "1/3", "d": "0.5"}
        assert source["addr_hours"] == [1, [2, 3]]

    def test_event_is_frozen(self):
        event = _logger_with(1).query_events(EventFilter())[0]
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.type = "B"  # type: ignore[misc]


class TestHashChain:

    def test_empty_log_last_hash_is_genesis(self):
        assert EventLogger().last_hash == GENESIS_HASH

    def test_first_event_links_to_genesis(self):
        event = _logger_with(1).query_events(EventFilter())[0]
        assert event.prev_hash == GENESIS_HASH
        assert len(event.hash) == 64

    def test_events_are_linked(self):
        events = _logger_with(3).query_events(EventFilter())
        assert events[1].prev_hash == events[0].hash
        assert events[2].prev_hash == events[1].hash

    def test_identical_logs_have_identical_hashes(self):
        assert _logger_with(4).last_hash == _logger_with(4).last_hash

    def test_same_event_different_position_different_hash(self):
        a = EventLogger()
        a.log_event("A", {"x": 1}, _T0)
        b = EventLogger()
        b.log_event("B", {}, _T0)
        b.log_event("A", {"x": 1}, _T0)
        assert a.last_hash != b.last_hash

    def test_intact_chain_verifies(self):
        assert _logger_with(5).verify_chain() is True
        assert EventLogger().verify_chain() is True

    def test_tampered_payload_detected(self):
        logger = _logger_with(3)
        logger.query_events(EventFilter())[1].data["index"] = 99
        assert logger.verify_chain() is False

    def test_replaced_event_detected(self):
        logger = _logger_with(3)
        original: Event = logger._store[0]
        logger._store[0] = dataclasses.replace(original, type="FORGED")
        assert logger.verify_chain() is False

    def test_broken_link_detected(self):
        logger = _logger_with(2)
        logger._store[1] = dataclasses.replace(logger._store[1], prev_hash=GENESIS_HASH)
        assert logger.verify_chain() is False


class TestQueryEvents:

    def test_none_filter_rejected(self):
        with pytest.raises(LoggingError):
            EventLogger().query_events(None)  # type: ignore[arg-type]

    def test_type_filter(self):
        logger = _logger_with(2)
        logger.log_event("REQUEST_REJECTED", {}, _T0)
        result = logger.query_events(EventFilter(event_type="REQUEST_REJECTED"))
        assert [e.type for e in result] == ["REQUEST_REJECTED"]

    def test_time_window(self):
        logger = _logger_with(5)
        result = logger.query_events(EventFilter(
            start_time=_T0 + timedelta(minutes=1),
            end_time=_T0 + timedelta(minutes=3),
        ))
        assert [e.data["index"] for e in result] == [1, 2, 3]

    def test_limit_oldest_first(self):
        result = _logger_with(5).query_events(EventFilter(limit=2))
        assert [e.data["index"] for e in result] == [0, 1]
