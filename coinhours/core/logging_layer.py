# coinhours/core/logging_layer.py
# Logging Layer
# COINHOURS v1.0.0
#
# Scope: Event-sourced audit logging for hour allocation decisions.
# Zero tolerance for lost events. No file IO. No global mutable state.
# All timestamps are caller-supplied. All hashes are deterministic and
# chained: each event's hash covers the previous event's hash.
#
# Canonical import:
#   from coinhours.core.logging_layer import EventLogger, Event, EventFilter
#
# Prohibited: datetime.now(), uuid, random, file IO, global mutable state

# ===========================================================================
# SECTION 1 -- STDLIB IMPORTS
# ===========================================================================

import hashlib
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, List, Optional

# ===========================================================================
# SECTION 2 -- CONSTANTS
# ===========================================================================

# Hash of the (virtual) event preceding the first one in every log.
GENESIS_HASH: str = "0" * 64

# Field separator used inside hash preimage.
_HASH_SEP: str = "|"

# ===========================================================================
# SECTION 3 -- DATACLASSES: Event, EventFilter
# ===========================================================================

@dataclass(frozen=True)
class Event:
    """
    Immutable record of a single allocation event.

    Fields
    ------
    id        : Deterministic string identifier derived from instance counter.
    type      : Category string (e.g. HOURS_PLANNED, REQUEST_REJECTED,
                INVARIANT_VIOLATION).
    timestamp : Caller-supplied datetime. Never generated internally.
    data      : Frozen key-value payload. Lists become tuples; Fraction and
                Decimal values become their str() form.
    prev_hash : Hash of the preceding event, or GENESIS_HASH.
    hash      : SHA-256 hex digest over (id, type, timestamp, data, prev_hash).
    """
    id: str
    type: str
    timestamp: datetime
    data: Dict[str, Any]
    prev_hash: str
    hash: str


@dataclass
class EventFilter:
    """
    Filter specification for EventLogger.query_events().

    All fields are optional. Omitted fields apply no constraint.

    Fields
    ------
    event_type : If set, only events whose .type equals this value are returned.
    start_time : If set, only events with timestamp >= start_time are returned.
    end_time   : If set, only events with timestamp <= end_time are returned.
    limit      : If set, at most this many events are returned (oldest first).
    """
    event_type: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    limit: Optional[int] = None


# ===========================================================================
# SECTION 4 -- INTERNAL HELPERS
# ===========================================================================

def _freeze_value(value: Any) -> Any:
    """
    Return an immutable, repr-stable form of a payload value.

    Lists and tuples become tuples (recursively). Fraction and Decimal become
    str so the hash preimage never depends on their repr format.
    """
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_value(v) for v in value)
    if isinstance(value, (Fraction, Decimal)):
        return str(value)
    return value


def _freeze_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a new dict with every value frozen. The input is not mutated."""
    return {k: _freeze_value(v) for k, v in data.items()}


def _compute_hash(
    event_id: str,
    event_type: str,
    timestamp: datetime,
    data: Dict[str, Any],
    prev_hash: str,
) -> str:
    """
    Compute a deterministic SHA-256 hex digest for an event.

    Hash preimage construction
    --------------------------
    Fields are serialized in fixed order:
        event_id + SEP + event_type + SEP + timestamp.isoformat() + SEP
        + repr(sorted(data.items())) + SEP + prev_hash

    No implicit values (time, pid, entropy) are included.
    """
    preimage: str = _HASH_SEP.join((
        event_id,
        event_type,
        timestamp.isoformat(),
        repr(sorted(data.items())),
        prev_hash,
    ))
    return hashlib.sha256(preimage.encode("ascii", errors="replace")).hexdigest()


def _make_event_id(counter: int) -> str:
    """Format: "EVT-{counter:016d}". No uuid, no time dependency."""
    return "EVT-{:016d}".format(counter)


# ===========================================================================
# SECTION 5 -- EventLogger
# ===========================================================================

class EventLogger:
    """
    Event-sourced logger with a deterministic hash chain.

    Storage
    -------
    Events are held in an instance-level list (_store). No file IO.
    No global state. Each EventLogger instance is fully independent and
    owned by its caller; allocation functions never create one.

    Determinism guarantees
    ----------------------
    - Timestamps are caller-supplied; never generated internally.
    - Event IDs are derived from a monotonic counter (_counter).
    - Hashes depend only on the explicit event fields and the previous hash.

    Zero lost events
    ----------------
    log_event() raises LoggingError on any failure condition instead of
    silently discarding the event.
    """

    def __init__(self) -> None:
        self._store: List[Event] = []
        self._counter: int = 0

    def log_event(self, event_type: str, data: Dict[str, Any], timestamp: datetime) -> str:
        """
        Record one event atomically. Return the assigned event ID.

        Raises
        ------
        LoggingError : If event_type is empty, data is not a dict, or
                       timestamp is not a datetime.
        """
        if not event_type:
            raise LoggingError("event_type must be a non-empty string")
        if not isinstance(data, dict):
            raise LoggingError(
                "data must be a dict; got: {}".format(type(data))
            )
        if timestamp is None:
            raise LoggingError("timestamp must be caller-supplied; None is not permitted")
        if not isinstance(timestamp, datetime):
            raise LoggingError(
                "timestamp must be a datetime instance; got: {}".format(type(timestamp))
            )

        self._counter += 1
        event_id: str = _make_event_id(self._counter)
        frozen: Dict[str, Any] = _freeze_data(data)
        prev_hash: str = self.last_hash
        event_hash: str = _compute_hash(event_id, event_type, timestamp, frozen, prev_hash)

        self._store.append(Event(
            id=event_id,
            type=event_type,
            timestamp=timestamp,
            data=frozen,
            prev_hash=prev_hash,
            hash=event_hash,
        ))
        return event_id

    @property
    def last_hash(self) -> str:
        """Hash of the newest event, or GENESIS_HASH for an empty log."""
        if not self._store:
            return GENESIS_HASH
        return self._store[-1].hash

    def query_events(self, filter: EventFilter) -> List[Event]:
        """
        Return events matching the filter, oldest first.

        Filtering order: event_type, start_time, end_time, then limit.

        Raises
        ------
        LoggingError : If filter is None.
        """
        if filter is None:
            raise LoggingError("filter must not be None")

        results: List[Event] = []
        for event in self._store:
            if filter.event_type is not None and event.type != filter.event_type:
                continue
            if filter.start_time is not None and event.timestamp < filter.start_time:
                continue
            if filter.end_time is not None and event.timestamp > filter.end_time:
                continue
            results.append(event)

        if filter.limit is not None:
            results = results[: filter.limit]

        return results

    def verify_chain(self) -> bool:
        """
        Recompute every hash and check each prev_hash link.

        Returns True for an intact (or empty) log, False on the first
        mismatch. Pure read.
        """
        prev_hash = GENESIS_HASH
        for event in self._store:
            if event.prev_hash != prev_hash:
                return False
            expected = _compute_hash(
                event.id, event.type, event.timestamp, event.data, event.prev_hash
            )
            if event.hash != expected:
                return False
            prev_hash = event.hash
        return True

    def event_count(self) -> int:
        return len(self._store)


# ===========================================================================
# SECTION 6 -- EXCEPTIONS
# ===========================================================================

class LoggingError(Exception):
    """
    Raised by EventLogger when an invariant is violated.

    Never silently swallowed. Every call site that invokes log_event()
    must either handle LoggingError or let it propagate.
    """
