# =============================================================================
# COINHOURS v1.0.0 -- HOURS ALLOCATION LAYER
# File:   coinhours/core/hours_layer/domain.py
# =============================================================================
#
# SCOPE
# -----
# Frozen domain dataclasses and input validation for the allocation layer.
#
#   HoursSelectionMode    -- EVEN split vs SHARE (proportional) planning.
#   SpendHoursAllocation  -- output of distribute_spend_hours().
#   OutputHoursRequest    -- input of plan_output_hours(); validated.
#   OutputHoursPlan       -- output of plan_output_hours().
#
# VALIDATION PHILOSOPHY
# ---------------------
# Validation is fail-fast, in this fixed order per field:
#
#   V1  Type   -- int (bool excluded), bool, tuple, enum member, exact
#                 rational. Floats are never accepted.
#   V2  Range  -- uint64 bounds, strictly positive coins, [0, 1] share.
#   V3  Cross  -- share_factor presence must match the selection mode.
#
# Every violation raises HoursValidationError(field_name, value, constraint).
# There is NO silent coercion anywhere in this module.
#
# INVARIANTS ENFORCED
# -------------------
# OutputHoursRequest
#   INV-RQ-01  input_hours is an int in [0, MAX_UINT64].
#   INV-RQ-02  destination_coins is a non-empty tuple.
#   INV-RQ-03  every destination coin is an int in [1, MAX_UINT64].
#   INV-RQ-04  have_change is a bool.
#   INV-RQ-05  mode is a HoursSelectionMode member.
#   INV-RQ-06  SHARE  -> share_factor is int / Fraction / finite Decimal in [0, 1].
#   INV-RQ-07  EVEN   -> share_factor is None.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Optional, Tuple, Union

from coinhours.utils.constants import MAX_UINT32, MAX_UINT64, MIN_BURN_FACTOR
from .exceptions import HoursValidationError

ShareFactor = Union[int, Fraction, Decimal]


# =============================================================================
# SECTION 1 -- ENUMERATIONS
# =============================================================================

class HoursSelectionMode(str, Enum):
    """
    How the post-fee hours of a spend are assigned to its outputs.

    EVEN   -- half (rounded up) to change, the rest split evenly across
              destinations, lowest indices taking the remainder.
    SHARE  -- share_factor of the post-fee hours to destinations, weighted
              by each destination's coins; the rest to change.
    """
    EVEN  = "EVEN"
    SHARE = "SHARE"


# =============================================================================
# SECTION 2 -- VALIDATION HELPERS
# =============================================================================
# Shared by spend.py, proportional.py, engine.py and coinhours.fee.
# Each takes an explicit field_name so messages are self-identifying.

def _check_int(field_name: str, value: object) -> None:
    """V1: value must be an int and not a bool."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be an integer",
        )


def check_hour_amount(field_name: str, value: int) -> None:
    """V1/V2: an hour amount is an int in [0, MAX_UINT64]."""
    _check_int(field_name, value)
    if value < 0:
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be >= 0",
        )
    if value > MAX_UINT64:
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be <= MAX_UINT64",
        )


def check_coin_amount(field_name: str, value: int) -> None:
    """V1/V2: a weighting coin amount is an int in [1, MAX_UINT64]."""
    _check_int(field_name, value)
    if value == 0:
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be > 0",
        )
    if value < 0:
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be >= 0",
        )
    if value > MAX_UINT64:
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be <= MAX_UINT64",
        )


def check_positive_int(field_name: str, value: int) -> None:
    """V1/V2: value must be an int >= 1."""
    _check_int(field_name, value)
    if value < 1:
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be >= 1",
        )


def check_bool(field_name: str, value: object) -> None:
    """V1: value must be exactly True or False."""
    if not isinstance(value, bool):
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be a bool",
        )


def check_burn_factor(field_name: str, value: int) -> None:
    """V1/V2: burn factor must be an int in [MIN_BURN_FACTOR, MAX_UINT32]."""
    _check_int(field_name, value)
    if value < MIN_BURN_FACTOR or value > MAX_UINT32:
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be in [MIN_BURN_FACTOR, MAX_UINT32]",
        )


def check_share_factor(field_name: str, value: object) -> Fraction:
    """
    V1/V2: share factor must be an exact rational in [0, 1].

    Accepts int, Fraction and finite Decimal. float is rejected: a binary
    float cannot express most decimal share factors exactly.
    Returns the value as a Fraction.
    """
    if isinstance(value, bool) or not isinstance(value, (int, Fraction, Decimal)):
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be an int, Fraction or Decimal",
        )
    if isinstance(value, Decimal) and not value.is_finite():
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be finite",
        )
    fraction = Fraction(value)
    if not (0 <= fraction <= 1):
        raise HoursValidationError(
            field_name=field_name,
            value=value,
            constraint="must be in [0, 1]",
        )
    return fraction


# =============================================================================
# SECTION 3 -- SPEND HOURS ALLOCATION (OUTPUT CONTRACT)
# =============================================================================

@dataclass(frozen=True)
class SpendHoursAllocation:
    """
    Immutable output of distribute_spend_hours().

    Attributes:
        fee_hours:     Hours burnt as the transaction fee.
        change_hours:  Hours assigned to the change output (0 without change).
        addr_hours:    Hours per destination, index-aligned with the caller's
                       destination list.
        spend_hours:   change_hours + sum(addr_hours); always equals
                       input_hours - fee_hours.

    No validation in __post_init__. Correctness is the allocator's
    responsibility.
    """

    fee_hours:     int
    change_hours:  int
    addr_hours:    Tuple[int, ...]
    spend_hours:   int


# =============================================================================
# SECTION 4 -- OUTPUT HOURS REQUEST / PLAN
# =============================================================================

@dataclass(frozen=True)
class OutputHoursRequest:
    """
    Describes the outputs of one spend for plan_output_hours().

    All fields are immutable after construction. Validation in __post_init__
    is fail-fast (see INV-RQ-*).
    """

    input_hours:        int
    """Total hours of the spent inputs. int in [0, MAX_UINT64]."""

    destination_coins:  Tuple[int, ...]
    """Coins sent to each destination, in output order. Non-empty, all > 0."""

    have_change:        bool
    """True when the transaction carries a change output."""

    mode:               HoursSelectionMode = HoursSelectionMode.EVEN
    """Selection mode. See HoursSelectionMode."""

    share_factor:       Optional[ShareFactor] = None
    """SHARE only: fraction of post-fee hours given to destinations."""

    def __post_init__(self) -> None:
        check_hour_amount("input_hours", self.input_hours)

        if not isinstance(self.destination_coins, tuple) or not self.destination_coins:
            raise HoursValidationError(
                field_name="destination_coins",
                value=self.destination_coins,
                constraint="must be a non-empty tuple",
            )
        for i, coins in enumerate(self.destination_coins):
            check_coin_amount("destination_coins[" + str(i) + "]", coins)

        check_bool("have_change", self.have_change)

        if not isinstance(self.mode, HoursSelectionMode):
            raise HoursValidationError(
                field_name="mode",
                value=self.mode,
                constraint="must be a valid HoursSelectionMode member",
            )

        if self.mode is HoursSelectionMode.SHARE:
            if self.share_factor is None:
                raise HoursValidationError(
                    field_name="share_factor",
                    value=None,
                    constraint="is required in SHARE mode",
                )
            check_share_factor("share_factor", self.share_factor)
        elif self.share_factor is not None:
            raise HoursValidationError(
                field_name="share_factor",
                value=self.share_factor,
                constraint="must be None in EVEN mode",
            )

    @property
    def share_fraction(self) -> Optional[Fraction]:
        """share_factor as an exact Fraction, or None in EVEN mode."""
        if self.share_factor is None:
            return None
        return Fraction(self.share_factor)


@dataclass(frozen=True)
class OutputHoursPlan:
    """
    Immutable output of plan_output_hours().

    Invariant: fee_hours + change_hours + sum(addr_hours) == input_hours
    of the originating request (checked by the planner before returning).
    """

    mode:          HoursSelectionMode
    fee_hours:     int
    change_hours:  int
    addr_hours:    Tuple[int, ...]

    @property
    def total_hours(self) -> int:
        return self.fee_hours + self.change_hours + sum(self.addr_hours)


__all__ = [
    "HoursSelectionMode",
    "SpendHoursAllocation",
    "OutputHoursRequest",
    "OutputHoursPlan",
    "check_hour_amount",
    "check_coin_amount",
    "check_positive_int",
    "check_bool",
    "check_burn_factor",
    "check_share_factor",
]
