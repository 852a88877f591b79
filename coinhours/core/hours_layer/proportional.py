# =============================================================================
# COINHOURS v1.0.0 -- HOURS ALLOCATION LAYER
# File:   coinhours/core/hours_layer/proportional.py
# =============================================================================
#
# SCOPE
# -----
# Distributes an hours budget across outputs in proportion to the coins
# each output holds.
#
#   distribute_coin_hours_proportional()  -- pure; returns Tuple[int, ...].
#
# DISTRIBUTION PIPELINE ORDER (deterministic, fixed):
#   1. Validate coins (non-empty, every coin > 0) and sum them (checked).
#   2. Guaranteed phase:
#        hours >= n      -> every output gets 1; hours -= n
#        0 < hours < n   -> the `hours` largest outputs (stable order) get 1;
#                           hours = 0
#   3. hours == 0        -> return.
#   4. Proportional phase:
#        frac_i = coins[i] * hours // total     (exact Python int)
#   5. remaining = hours - sum(frac_i), 0 <= remaining <= n
#   6. Remainder phase:
#        pass 1: in index order, 1 hour to each output still at 0
#        pass 2: from index 0, 1 hour per output until none remain
#
# The product in step 4 can exceed 64 bits. It is computed in Python's
# arbitrary-precision int and only the quotient is range-checked.
#
# INVARIANTS
# ----------
# INV-PR-01: sum(result) == hours.
# INV-PR-02: len(result) == len(coins); result[i] belongs to coins[i].
# INV-PR-03: hours >= len(coins) -> every result[i] >= 1.
# INV-PR-04: hours == 0 -> every result[i] == 0.
#
# A remaining count outside [0, n] after step 5 raises HoursInvariantError.
# =============================================================================

from __future__ import annotations

from typing import List, Sequence, Tuple

from coinhours.utils.constants import MAX_UINT64
from .domain import check_coin_amount, check_hour_amount
from .exceptions import HoursInvariantError, HoursOverflowError, HoursValidationError
from .mathutil import add_uint64, uint64_to_int64
from .ordering import sort_indices_descending


def _proportional_share(coins: int, hours: int, total: int) -> int:
    """floor(coins * hours / total) in exact integer arithmetic."""
    return coins * hours // total


def distribute_coin_hours_proportional(
    coins: Sequence[int],
    hours: int,
) -> Tuple[int, ...]:
    """
    Distribute `hours` amongst outputs proportional to their coin amounts.

    Every output receives at least one hour when the budget allows. When
    it does not, the outputs holding the most coins are served first and
    equal holdings are served in input order.

    Args:
        coins:  Coin amount of each output, in output order. Non-empty;
                every amount an int in [1, MAX_UINT64].
        hours:  Hours budget. int in [0, MAX_UINT64].

    Returns:
        Tuple of hours per output, index-aligned with `coins`, summing to
        exactly `hours`.

    Raises:
        HoursValidationError: coins is empty, a coin is zero or malformed,
                              or hours is malformed.
        HoursOverflowError:   the coin total exceeds MAX_UINT64, or a coin,
                              the total or the proportional budget exceeds
                              MAX_INT64.
        HoursInvariantError:  the proportional phase over- or under-assigned.
    """
    if len(coins) == 0:
        raise HoursValidationError(
            field_name="coins",
            value=list(coins),
            constraint="must not be empty",
        )
    check_hour_amount("hours", hours)

    # ------------------------------------------------------------------
    # Step 1: validate and total the coins, in index order.
    # ------------------------------------------------------------------
    total: int = 0
    for i, c in enumerate(coins):
        check_coin_amount("coins[" + str(i) + "]", c)
        total = add_uint64(total, c)
        uint64_to_int64(c)

    n: int = len(coins)
    addr_hours: List[int] = [0] * n

    # ------------------------------------------------------------------
    # Step 2: guaranteed phase.
    # ------------------------------------------------------------------
    if hours >= n:
        for i in range(n):
            addr_hours[i] = 1
        hours -= n
    elif hours > 0:
        ranked = sort_indices_descending(coins)
        for i in range(hours):
            addr_hours[ranked[i]] = 1
        hours = 0

    # ------------------------------------------------------------------
    # Step 3: nothing left to share.
    # ------------------------------------------------------------------
    if hours == 0:
        return tuple(addr_hours)

    # ------------------------------------------------------------------
    # Step 4: proportional phase.
    # ------------------------------------------------------------------
    uint64_to_int64(total)
    uint64_to_int64(hours)

    assigned_hours: int = 0
    for i, c in enumerate(coins):
        frac_hours = _proportional_share(c, hours, total)
        if frac_hours < 0 or frac_hours > MAX_UINT64:
            raise HoursOverflowError(
                operation="proportional_share",
                operands=(c, hours, total),
                limit_name="MAX_UINT64",
                limit=MAX_UINT64,
            )
        addr_hours[i] = add_uint64(addr_hours[i], frac_hours)
        assigned_hours = add_uint64(assigned_hours, frac_hours)

    # ------------------------------------------------------------------
    # Step 5: truncation leftovers.
    # ------------------------------------------------------------------
    if assigned_hours > hours:
        raise HoursInvariantError(
            invariant="assigned_hours <= hours",
            detail="assigned " + repr(assigned_hours)
            + " exceeds budget " + repr(hours),
        )
    remaining_hours: int = hours - assigned_hours

    if remaining_hours > n:
        raise HoursInvariantError(
            invariant="remaining_hours <= len(coins)",
            detail="remaining " + repr(remaining_hours)
            + " exceeds output count " + repr(n),
        )

    # ------------------------------------------------------------------
    # Step 6: remainder phase. Pass 1 tops up outputs left at zero.
    # ------------------------------------------------------------------
    i = 0
    while remaining_hours > 0 and i < n:
        if addr_hours[i] == 0:
            addr_hours[i] = 1
            remaining_hours -= 1
        i += 1

    # Pass 2: one extra hour each, from the first output.
    i = 0
    while remaining_hours > 0:
        addr_hours[i] += 1
        remaining_hours -= 1
        i += 1

    return tuple(addr_hours)


__all__ = ["distribute_coin_hours_proportional"]
