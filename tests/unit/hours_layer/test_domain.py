import dataclasses
from decimal import Decimal
from fractions import Fraction

import pytest

from coinhours.core.hours_layer import (
    HoursSelectionMode,
    HoursValidationError,
    OutputHoursPlan,
    OutputHoursRequest,
)
from coinhours.core.hours_layer.domain import check_share_factor
from coinhours.utils.constants import MAX_UINT64


def _request(**overrides) -> OutputHoursRequest:
    fields = dict(
        input_hours=100,
        destination_coins=(10, 20),
        have_change=True,
    )
    fields.update(overrides)
    return OutputHoursRequest(**fields)


class TestHoursSelectionMode:

    def test_members(self):
        assert {m.value for m in HoursSelectionMode} == {"EVEN", "SHARE"}

    def test_str_inheritance(self):
        assert HoursSelectionMode.SHARE == "SHARE"


class TestOutputHoursRequestValid:

    def test_defaults_to_even_mode(self):
        request = _request()
        assert request.mode is HoursSelectionMode.EVEN
        assert request.share_factor is None
        assert request.share_fraction is None

    def test_share_mode_with_fraction(self):
        request = _request(mode=HoursSelectionMode.SHARE, share_factor=Fraction(2, 5))
        assert request.share_fraction == Fraction(2, 5)

    def test_share_mode_with_decimal(self):
        request = _request(mode=HoursSelectionMode.SHARE, share_factor=Decimal("0.4"))
        assert request.share_fraction == Fraction(2, 5)

    def test_boundaries_accepted(self):
        _request(input_hours=0)
        _request(input_hours=MAX_UINT64)
        _request(destination_coins=(MAX_UINT64,))

    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            _request().input_hours = 5  # type: ignore[misc]


class TestOutputHoursRequestInvalid:

    @pytest.mark.parametrize("value", [-1, MAX_UINT64 + 1, 1.0, True])
    def test_input_hours(self, value):
        with pytest.raises(HoursValidationError) as info:
            _request(input_hours=value)
        assert info.value.field_name == "input_hours"

    @pytest.mark.parametrize("value", [(), [10, 20], None])
    def test_destination_coins_container(self, value):
        with pytest.raises(HoursValidationError) as info:
            _request(destination_coins=value)
        assert info.value.field_name == "destination_coins"

    def test_zero_destination_coin(self):
        with pytest.raises(HoursValidationError) as info:
            _request(destination_coins=(10, 0))
        assert info.value.field_name == "destination_coins[1]"
        assert info.value.constraint == "must be > 0"

    def test_have_change_must_be_bool(self):
        with pytest.raises(HoursValidationError) as info:
            _request(have_change=0)
        assert info.value.field_name == "have_change"

    def test_mode_must_be_enum_member(self):
        with pytest.raises(HoursValidationError) as info:
            _request(mode="SHARE")
        assert info.value.field_name == "mode"

    def test_share_mode_requires_share_factor(self):
        with pytest.raises(HoursValidationError) as info:
            _request(mode=HoursSelectionMode.SHARE)
        assert info.value.constraint == "is required in SHARE mode"

    def test_even_mode_forbids_share_factor(self):
        with pytest.raises(HoursValidationError) as info:
            _request(share_factor=Fraction(1, 2))
        assert info.value.constraint == "must be None in EVEN mode"


class TestCheckShareFactor:

    @pytest.mark.parametrize("value, expected", [
        (0, Fraction(0)),
        (1, Fraction(1)),
        (Fraction(3, 4), Fraction(3, 4)),
        (Decimal("0.125"), Fraction(1, 8)),
    ])
    def test_valid(self, value, expected):
        assert check_share_factor("share_factor", value) == expected

    @pytest.mark.parametrize("value", [0.5, True, "0.5", None])
    def test_wrong_type(self, value):
        with pytest.raises(HoursValidationError) as info:
            check_share_factor("share_factor", value)
        assert info.value.constraint == "must be an int, Fraction or Decimal"

    @pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("Infinity")])
    def test_non_finite_decimal(self, value):
        with pytest.raises(HoursValidationError) as info:
            check_share_factor("share_factor", value)
        assert info.value.constraint == "must be finite"

    @pytest.mark.parametrize("value", [-1, 2, Fraction(5, 4), Decimal("-0.1")])
    def test_out_of_range(self, value):
        with pytest.raises(HoursValidationError) as info:
            check_share_factor("share_factor", value)
        assert info.value.constraint == "must be in [0, 1]"


class TestOutputHoursPlan:

    def test_total_hours(self):
        plan = OutputHoursPlan(
            mode=HoursSelectionMode.EVEN,
            fee_hours=2,
            change_hours=6,
            addr_hours=(2, 2, 1),
        )
        assert plan.total_hours == 13
