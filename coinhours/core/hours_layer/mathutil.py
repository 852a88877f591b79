# =============================================================================
# COINHOURS v1.0.0 -- HOURS ALLOCATION LAYER
# File:   coinhours/core/hours_layer/mathutil.py
# =============================================================================
#
# SCOPE
# -----
# Checked fixed-width integer arithmetic. Python integers never wrap, so
# every bound the ledger relies on is enforced here explicitly.
#
#   add_uint64()       -- a + b, rejected above MAX_UINT64.
#   uint64_to_int64()  -- identity, rejected above MAX_INT64.
#
# Operands are assumed to already be non-negative ints (validated by the
# caller through domain.py). No logging, no I/O, no module state.
# =============================================================================

from __future__ import annotations

from coinhours.utils.constants import MAX_INT64, MAX_UINT64
from .exceptions import HoursOverflowError


def add_uint64(a: int, b: int) -> int:
    """Return a + b; raise HoursOverflowError if the sum exceeds MAX_UINT64."""
    c = a + b
    if c > MAX_UINT64:
        raise HoursOverflowError(
            operation="add_uint64",
            operands=(a, b),
            limit_name="MAX_UINT64",
            limit=MAX_UINT64,
        )
    return c


def uint64_to_int64(a: int) -> int:
    """
    Narrow an unsigned 64-bit amount to the signed 64-bit range.

    Raises HoursOverflowError if a > MAX_INT64.
    """
    if a > MAX_INT64:
        raise HoursOverflowError(
            operation="uint64_to_int64",
            operands=(a,),
            limit_name="MAX_INT64",
            limit=MAX_INT64,
        )
    return a


__all__ = ["add_uint64", "uint64_to_int64"]
