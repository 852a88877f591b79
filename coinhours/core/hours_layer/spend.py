# =============================================================================
# COINHOURS v1.0.0 -- HOURS ALLOCATION LAYER
# File:   coinhours/core/hours_layer/spend.py
# =============================================================================
#
# SCOPE
# -----
# Splits the hours of a spend between the fee burn, one optional change
# output and N destination outputs.
#
#   distribute_spend_hours()  -- pure; returns SpendHoursAllocation.
#
# ALLOCATION PIPELINE ORDER (deterministic, fixed):
#   1. fee_hours          = required_fee(input_hours, burn_factor)
#   2. remaining_hours    = input_hours - fee_hours
#   3. change_hours       = ceil(remaining_hours / 2)   (have_change)
#                         = 0                           (no change)
#   4. addr_remaining     = remaining_hours - change_hours
#      share              = addr_remaining // n_addrs
#      extra              = addr_remaining - share * n_addrs
#      addr_hours[i]      = share + (1 if i < extra else 0)
#   5. spend_hours        = change_hours + sum(addr_hours)
#
# An odd remainder always goes to change, and leftover destination hours
# always go to the lowest indices. Every peer must reproduce this exactly.
#
# INVARIANTS
# ----------
# INV-SP-01: fee_hours <= input_hours.
# INV-SP-02: spend_hours == input_hours - fee_hours.
# INV-SP-03: len(addr_hours) == n_addrs.
# INV-SP-04: max(addr_hours) - min(addr_hours) <= 1, non-increasing by index.
#
# A broken INV-SP-01 or INV-SP-02 raises HoursInvariantError; nothing is
# returned.
# =============================================================================

from __future__ import annotations

from typing import List

from coinhours.fee.fee_calculator import required_fee
from coinhours.utils.constants import USER_BURN_FACTOR
from .domain import (
    SpendHoursAllocation,
    check_bool,
    check_burn_factor,
    check_hour_amount,
    check_positive_int,
)
from .exceptions import HoursInvariantError


def distribute_spend_hours(
    input_hours:  int,
    n_addrs:      int,
    have_change:  bool,
    burn_factor:  int = USER_BURN_FACTOR,
) -> SpendHoursAllocation:
    """
    Calculate the hours sent to the change output and to each destination.

    Input hours are reduced by the required fee (1/burn_factor, rounded up).
    With a change output, the remaining hours are halved and the change gets
    the larger half. The destination hours are split evenly; the remainder of
    that division is handed out one hour at a time from index 0.

    Args:
        input_hours:  Total hours of the spent inputs. int in [0, MAX_UINT64].
        n_addrs:      Number of destination outputs. int >= 1.
        have_change:  True when the transaction carries a change output.
        burn_factor:  Fee burn factor. Defaults to USER_BURN_FACTOR.

    Returns:
        SpendHoursAllocation(fee_hours, change_hours, addr_hours, spend_hours).

    Raises:
        HoursValidationError: an argument has the wrong type or range.
        HoursInvariantError:  the split does not conserve the remaining hours.
    """
    check_hour_amount("input_hours", input_hours)
    check_positive_int("n_addrs", n_addrs)
    check_bool("have_change", have_change)
    check_burn_factor("burn_factor", burn_factor)

    # ------------------------------------------------------------------
    # Steps 1-2: fee burn.
    # ------------------------------------------------------------------
    fee_hours: int = required_fee(input_hours, burn_factor)
    if fee_hours > input_hours:
        raise HoursInvariantError(
            invariant="fee_hours <= input_hours",
            detail="required_fee returned " + repr(fee_hours)
            + " for input_hours " + repr(input_hours),
        )
    remaining_hours: int = input_hours - fee_hours

    # ------------------------------------------------------------------
    # Step 3: change output takes half, plus the odd hour.
    # ------------------------------------------------------------------
    change_hours: int = 0
    if have_change:
        change_hours = remaining_hours // 2
        if remaining_hours % 2 == 1:
            change_hours += 1

    # ------------------------------------------------------------------
    # Step 4: even split across destinations; integer division leftovers
    # go to the earliest destinations.
    # ------------------------------------------------------------------
    remaining_addr_hours: int = remaining_hours - change_hours
    addr_hours_share: int = remaining_addr_hours // n_addrs

    addr_hours: List[int] = [addr_hours_share] * n_addrs

    extra_hours: int = remaining_addr_hours - addr_hours_share * n_addrs
    for i in range(extra_hours):
        addr_hours[i] += 1

    # ------------------------------------------------------------------
    # Step 5: conservation check.
    # ------------------------------------------------------------------
    spend_hours: int = change_hours + sum(addr_hours)
    if spend_hours != remaining_hours:
        raise HoursInvariantError(
            invariant="spend_hours == remaining_hours",
            detail=repr(spend_hours) + " != " + repr(remaining_hours)
            + ", calculation error",
        )

    return SpendHoursAllocation(
        fee_hours=fee_hours,
        change_hours=change_hours,
        addr_hours=tuple(addr_hours),
        spend_hours=spend_hours,
    )


__all__ = ["distribute_spend_hours"]
