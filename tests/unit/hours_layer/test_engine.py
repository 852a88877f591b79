from decimal import Decimal
from fractions import Fraction

import pytest

from coinhours.core.hours_layer import (
    HoursInvariantError,
    HoursOverflowError,
    HoursSelectionMode,
    HoursValidationError,
    OutputHoursPlan,
    OutputHoursRequest,
    SpendHoursAllocation,
    plan_output_hours,
)
from coinhours.core.hours_layer import engine as engine_module
from coinhours.core.logging_layer import EventFilter, LoggingError
from coinhours.fee.policy import FeePolicy


# =============================================================================
# SHARED HELPERS
# =============================================================================
#
# Default FeePolicy: burn factor 10.
# input_hours=100 -> fee 10 -> 90 post-fee hours.
# =============================================================================

def _share_request(
    share_factor,
    input_hours: int = 100,
    coins: tuple = (10, 20, 30),
    have_change: bool = True,
) -> OutputHoursRequest:
    return OutputHoursRequest(
        input_hours=input_hours,
        destination_coins=coins,
        have_change=have_change,
        mode=HoursSelectionMode.SHARE,
        share_factor=share_factor,
    )


# =============================================================================
# SECTION 1 -- EVEN mode
# =============================================================================

class TestEvenMode:

    def test_matches_spend_allocator(self, even_request):
        plan = plan_output_hours(even_request)
        assert plan == OutputHoursPlan(
            mode=HoursSelectionMode.EVEN,
            fee_hours=2,
            change_hours=6,
            addr_hours=(2, 2, 1),
        )

    def test_total_hours_conserved(self, even_request):
        assert plan_output_hours(even_request).total_hours == 13

    def test_custom_policy(self, even_request):
        # burn factor 2: fee 7 -> 6 left -> change 3 -> (1, 1, 1).
        plan = plan_output_hours(even_request, FeePolicy(burn_factor=2))
        assert plan.fee_hours == 7
        assert plan.change_hours == 3
        assert plan.addr_hours == (1, 1, 1)

    def test_coin_amounts_do_not_weight_even_split(self):
        request = OutputHoursRequest(
            input_hours=13, destination_coins=(1, 1_000_000, 5), have_change=True
        )
        assert plan_output_hours(request).addr_hours == (2, 2, 1)


# =============================================================================
# SECTION 2 -- SHARE mode
# =============================================================================

class TestShareMode:

    def test_half_share(self, share_request):
        plan = plan_output_hours(share_request)
        assert plan.fee_hours == 10
        assert plan.addr_hours == (8, 15, 22)
        assert plan.change_hours == 45

    def test_zero_share_keeps_everything_in_change(self):
        plan = plan_output_hours(_share_request(0))
        assert plan.addr_hours == (0, 0, 0)
        assert plan.change_hours == 90

    def test_full_share_leaves_no_change(self):
        # 90 -> 1 each, 87 left; 14, 29, 43 -> 1 leftover to index 0.
        plan = plan_output_hours(_share_request(1))
        assert plan.addr_hours == (16, 30, 44)
        assert plan.change_hours == 0

    def test_one_third_share(self):
        # budget 30 -> 1 each, 27 left; 4, 9, 13 -> 1 leftover to index 0.
        plan = plan_output_hours(_share_request(Fraction(1, 3)))
        assert plan.addr_hours == (6, 10, 14)
        assert plan.change_hours == 60

    def test_budget_is_floored(self):
        # 90 * 0.333 = 29.97 -> 29.
        plan = plan_output_hours(_share_request(Decimal("0.333")))
        assert sum(plan.addr_hours) == 29
        assert plan.change_hours == 61

    def test_no_change_gives_all_hours_to_destinations(self):
        plan = plan_output_hours(
            _share_request(Decimal("0.25"), input_hours=20, coins=(1, 1, 1), have_change=False)
        )
        assert plan.fee_hours == 2
        assert plan.change_hours == 0
        assert plan.addr_hours == (6, 6, 6)

    @pytest.mark.parametrize("share", [0, Fraction(1, 7), Decimal("0.5"), 1])
    def test_total_hours_conserved(self, share):
        for input_hours in (0, 1, 9, 57, 1_000, 123_456_789):
            plan = plan_output_hours(_share_request(share, input_hours=input_hours))
            assert plan.total_hours == input_hours
            assert plan.change_hours >= 0

    def test_overflowing_coin_rejected(self):
        with pytest.raises(HoursOverflowError):
            plan_output_hours(_share_request(Fraction(1, 2), coins=(2**63,)))


# =============================================================================
# SECTION 3 -- Argument validation
# =============================================================================

class TestArgumentValidation:

    def test_non_request_rejected(self):
        with pytest.raises(HoursValidationError) as info:
            plan_output_hours({"input_hours": 13})  # type: ignore[arg-type]
        assert info.value.field_name == "request"

    def test_non_policy_rejected(self, even_request):
        with pytest.raises(HoursValidationError) as info:
            plan_output_hours(even_request, policy=10)  # type: ignore[arg-type]
        assert info.value.field_name == "policy"

    def test_logger_without_timestamp_rejected(self, even_request, event_logger):
        with pytest.raises(LoggingError):
            plan_output_hours(even_request, event_logger=event_logger)
        assert event_logger.event_count() == 0


# =============================================================================
# SECTION 4 -- Invariant checks
# =============================================================================

class TestInvariantChecks:

    def test_over_assigned_destinations(self, monkeypatch, share_request):
        monkeypatch.setattr(
            engine_module, "distribute_coin_hours_proportional",
            lambda coins, hours: (100, 0, 0),
        )
        with pytest.raises(HoursInvariantError) as info:
            plan_output_hours(share_request)
        assert info.value.invariant == "change_hours >= 0"

    def test_change_without_change_output(self, monkeypatch):
        monkeypatch.setattr(
            engine_module, "distribute_coin_hours_proportional",
            lambda coins, hours: (0, 0, 0),
        )
        request = _share_request(1, have_change=False)
        with pytest.raises(HoursInvariantError) as info:
            plan_output_hours(request)
        assert info.value.invariant == "change_hours == 0 without a change output"

    def test_lost_hours(self, monkeypatch, even_request):
        monkeypatch.setattr(
            engine_module, "distribute_spend_hours",
            lambda input_hours, n_addrs, have_change, burn_factor: SpendHoursAllocation(
                fee_hours=2, change_hours=6, addr_hours=(1, 1, 1), spend_hours=9,
            ),
        )
        with pytest.raises(HoursInvariantError) as info:
            plan_output_hours(even_request)
        assert info.value.invariant == "fee + change + sum(addr) == input_hours"


# =============================================================================
# SECTION 5 -- Event logging
# =============================================================================

class TestEventLogging:

    def test_success_records_hours_planned(self, even_request, event_logger, fixed_timestamp):
        plan_output_hours(even_request, event_logger=event_logger, timestamp=fixed_timestamp)
        events = event_logger.query_events(EventFilter(event_type="HOURS_PLANNED"))
        assert len(events) == 1
        data = events[0].data
        assert data["mode"] == "EVEN"
        assert data["fee_hours"] == 2
        assert data["change_hours"] == 6
        assert data["addr_hours"] == (2, 2, 1)
        assert events[0].timestamp == fixed_timestamp

    def test_share_factor_recorded_as_string(self, share_request, event_logger, fixed_timestamp):
        plan_output_hours(share_request, event_logger=event_logger, timestamp=fixed_timestamp)
        event = event_logger.query_events(EventFilter())[0]
        assert event.data["share_factor"] == "1/2"

    def test_recoverable_error_recorded_and_reraised(self, event_logger, fixed_timestamp):
        request = _share_request(Fraction(1, 2), coins=(2**63,))
        with pytest.raises(HoursOverflowError):
            plan_output_hours(request, event_logger=event_logger, timestamp=fixed_timestamp)
        events = event_logger.query_events(EventFilter(event_type="REQUEST_REJECTED"))
        assert len(events) == 1
        assert events[0].data["error"] == "HoursOverflowError"
        assert events[0].data["field_name"] == "uint64_to_int64"

    def test_invariant_violation_recorded_and_reraised(
        self, monkeypatch, share_request, event_logger, fixed_timestamp
    ):
        monkeypatch.setattr(
            engine_module, "distribute_coin_hours_proportional",
            lambda coins, hours: (100, 0, 0),
        )
        with pytest.raises(HoursInvariantError):
            plan_output_hours(share_request, event_logger=event_logger, timestamp=fixed_timestamp)
        events = event_logger.query_events(EventFilter(event_type="INVARIANT_VIOLATION"))
        assert len(events) == 1
        assert events[0].data["invariant"] == "change_hours >= 0"

    def test_no_events_without_logger(self, even_request):
        assert plan_output_hours(even_request).total_hours == 13

    def test_chain_intact_after_several_plans(
        self, even_request, share_request, event_logger, fixed_timestamp
    ):
        plan_output_hours(even_request, event_logger=event_logger, timestamp=fixed_timestamp)
        plan_output_hours(share_request, event_logger=event_logger, timestamp=fixed_timestamp)
        assert event_logger.event_count() == 2
        assert event_logger.verify_chain() is True
