# =============================================================================
# COINHOURS v1.0.0 -- HOURS ALLOCATION LAYER
# File:   coinhours/core/hours_layer/engine.py
# =============================================================================
#
# SCOPE
# -----
# Orchestrates fee burn and output allocation for one spend request.
#
#   plan_output_hours()  -- OutputHoursRequest -> OutputHoursPlan.
#
# MODES
# -----
#   EVEN   -> distribute_spend_hours(input_hours, n_dest, have_change, bf)
#   SHARE  -> fee       = required_fee(input_hours, bf)
#             remaining = input_hours - fee
#             budget    = floor(remaining * share_factor)   (have_change)
#                       = remaining                         (no change)
#             addr      = distribute_coin_hours_proportional(coins, budget)
#             change    = remaining - sum(addr)
#
# The allocation itself is pure. When the caller passes an EventLogger the
# outcome is recorded before returning or re-raising:
#   HOURS_PLANNED        -- plan returned
#   REQUEST_REJECTED     -- HoursError raised (recoverable)
#   INVARIANT_VIOLATION  -- HoursInvariantError raised (defect)
# =============================================================================

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Dict, Optional

from coinhours.core.logging_layer import EventLogger, LoggingError
from coinhours.fee.fee_calculator import required_fee
from coinhours.fee.policy import FeePolicy
from .domain import HoursSelectionMode, OutputHoursPlan, OutputHoursRequest
from .exceptions import HoursError, HoursInvariantError, HoursValidationError
from .proportional import distribute_coin_hours_proportional
from .spend import distribute_spend_hours


def _plan_even(request: OutputHoursRequest, policy: FeePolicy) -> OutputHoursPlan:
    allocation = distribute_spend_hours(
        request.input_hours,
        len(request.destination_coins),
        request.have_change,
        policy.burn_factor,
    )
    return OutputHoursPlan(
        mode=HoursSelectionMode.EVEN,
        fee_hours=allocation.fee_hours,
        change_hours=allocation.change_hours,
        addr_hours=allocation.addr_hours,
    )


def _plan_share(request: OutputHoursRequest, policy: FeePolicy) -> OutputHoursPlan:
    fee_hours = required_fee(request.input_hours, policy.burn_factor)
    remaining_hours = request.input_hours - fee_hours

    if request.have_change:
        addr_budget = math.floor(remaining_hours * request.share_fraction)
    else:
        # Without a change output nothing can hold the unshared hours.
        addr_budget = remaining_hours

    addr_hours = distribute_coin_hours_proportional(
        request.destination_coins, addr_budget
    )
    return OutputHoursPlan(
        mode=HoursSelectionMode.SHARE,
        fee_hours=fee_hours,
        change_hours=remaining_hours - sum(addr_hours),
        addr_hours=addr_hours,
    )


def _check_plan(request: OutputHoursRequest, plan: OutputHoursPlan) -> None:
    if plan.change_hours < 0:
        raise HoursInvariantError(
            invariant="change_hours >= 0",
            detail="destinations were assigned " + repr(sum(plan.addr_hours))
            + " hours, leaving change " + repr(plan.change_hours),
        )
    if not request.have_change and plan.change_hours != 0:
        raise HoursInvariantError(
            invariant="change_hours == 0 without a change output",
            detail="change_hours is " + repr(plan.change_hours),
        )
    if plan.total_hours != request.input_hours:
        raise HoursInvariantError(
            invariant="fee + change + sum(addr) == input_hours",
            detail=repr(plan.total_hours) + " != " + repr(request.input_hours),
        )


def _request_payload(request: OutputHoursRequest) -> Dict[str, Any]:
    return {
        "input_hours":       request.input_hours,
        "destination_coins": request.destination_coins,
        "have_change":       request.have_change,
        "mode":              request.mode.value,
        "share_factor":      request.share_factor,
    }


def plan_output_hours(
    request:       OutputHoursRequest,
    policy:        Optional[FeePolicy] = None,
    event_logger:  Optional[EventLogger] = None,
    timestamp:     Optional[datetime] = None,
) -> OutputHoursPlan:
    """
    Compute fee, change and destination hours for one spend.

    Args:
        request:       Validated OutputHoursRequest.
        policy:        FeePolicy; defaults to FeePolicy() (USER_BURN_FACTOR).
        event_logger:  Optional caller-owned EventLogger. When given, the
                       outcome is recorded as one event.
        timestamp:     Event timestamp. Required when event_logger is given.

    Returns:
        OutputHoursPlan with fee + change + sum(addr) == request.input_hours.

    Raises:
        HoursValidationError: request/policy of the wrong type.
        HoursError:           any recoverable allocation error.
        HoursInvariantError:  the plan does not conserve the input hours.
        LoggingError:         event_logger given without a timestamp.
    """
    if not isinstance(request, OutputHoursRequest):
        raise HoursValidationError(
            field_name="request",
            value=request,
            constraint="must be an OutputHoursRequest",
        )
    if policy is None:
        policy = FeePolicy()
    if not isinstance(policy, FeePolicy):
        raise HoursValidationError(
            field_name="policy",
            value=policy,
            constraint="must be a FeePolicy",
        )
    if event_logger is not None and timestamp is None:
        raise LoggingError("timestamp is required when event_logger is given")

    try:
        if request.mode is HoursSelectionMode.SHARE:
            plan = _plan_share(request, policy)
        else:
            plan = _plan_even(request, policy)

        _check_plan(request, plan)
    except HoursInvariantError as exc:
        if event_logger is not None:
            payload = _request_payload(request)
            payload["invariant"] = exc.invariant
            payload["detail"] = exc.detail
            event_logger.log_event("INVARIANT_VIOLATION", payload, timestamp)
        raise
    except HoursError as exc:
        if event_logger is not None:
            payload = _request_payload(request)
            payload["error"] = type(exc).__name__
            payload["field_name"] = exc.field_name
            payload["message"] = exc.message
            event_logger.log_event("REQUEST_REJECTED", payload, timestamp)
        raise

    if event_logger is not None:
        payload = _request_payload(request)
        payload["fee_hours"] = plan.fee_hours
        payload["change_hours"] = plan.change_hours
        payload["addr_hours"] = plan.addr_hours
        event_logger.log_event("HOURS_PLANNED", payload, timestamp)

    return plan


__all__ = ["plan_output_hours"]
