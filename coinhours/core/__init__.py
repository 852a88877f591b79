# coinhours/core/__init__.py
# Core allocation types for the coinhours package.
# Authoritative import source: coinhours.core.hours_layer

from coinhours.core.logging_layer import EventLogger, Event, EventFilter, LoggingError
from coinhours.core.hours_layer import (
    HoursError,
    HoursValidationError,
    HoursOverflowError,
    HoursInvariantError,
    HoursSelectionMode,
    SpendHoursAllocation,
    OutputHoursRequest,
    OutputHoursPlan,
    distribute_spend_hours,
    distribute_coin_hours_proportional,
    plan_output_hours,
)
