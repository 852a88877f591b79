from datetime import datetime, timezone
from fractions import Fraction

import pytest

from coinhours.core.hours_layer import HoursSelectionMode, OutputHoursRequest
from coinhours.core.logging_layer import EventLogger


@pytest.fixture
def even_request() -> OutputHoursRequest:
    """13 input hours, burn factor 10 -> 11 post-fee hours over 3 destinations."""
    return OutputHoursRequest(
        input_hours=13,
        destination_coins=(100, 200, 300),
        have_change=True,
    )


@pytest.fixture
def share_request() -> OutputHoursRequest:
    """100 input hours -> 90 post-fee; half shared by coins 10/20/30."""
    return OutputHoursRequest(
        input_hours=100,
        destination_coins=(10, 20, 30),
        have_change=True,
        mode=HoursSelectionMode.SHARE,
        share_factor=Fraction(1, 2),
    )


@pytest.fixture
def event_logger() -> EventLogger:
    return EventLogger()


@pytest.fixture
def fixed_timestamp() -> datetime:
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
