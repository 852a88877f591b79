from .exceptions import (
    HoursError,
    HoursInvariantError,
    HoursOverflowError,
    HoursValidationError,
)
from .domain import (
    HoursSelectionMode,
    OutputHoursPlan,
    OutputHoursRequest,
    SpendHoursAllocation,
)
from .mathutil import add_uint64, uint64_to_int64
from .ordering import sort_indices_descending
from .spend import distribute_spend_hours
from .proportional import distribute_coin_hours_proportional
from .engine import plan_output_hours

__all__ = [
    # Exceptions
    "HoursError",
    "HoursValidationError",
    "HoursOverflowError",
    "HoursInvariantError",
    # Enumerations
    "HoursSelectionMode",
    # Domain dataclasses
    "SpendHoursAllocation",
    "OutputHoursRequest",
    "OutputHoursPlan",
    # Checked arithmetic
    "add_uint64",
    "uint64_to_int64",
    # Ordering
    "sort_indices_descending",
    # Allocators
    "distribute_spend_hours",
    "distribute_coin_hours_proportional",
    # Orchestration
    "plan_output_hours",
]
