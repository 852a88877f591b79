# usage_example.py
# Minimal usage example for the coinhours allocation layer.
# This file is not part of the coinhours package. For reference only.

from fractions import Fraction

from coinhours.core.hours_layer import (
    HoursSelectionMode,
    OutputHoursRequest,
    distribute_coin_hours_proportional,
    distribute_spend_hours,
    plan_output_hours,
)

# Even split: 13 input hours, burn factor 10 -> fee 2, 11 left.
allocation = distribute_spend_hours(input_hours=13, n_addrs=3, have_change=True)
print(allocation.fee_hours, allocation.change_hours, allocation.addr_hours)
# 2 6 (2, 2, 1)

# Proportional split of 6 hours by coins.
print(distribute_coin_hours_proportional([10, 20, 30], 6))
# (2, 2, 2)

# Share half of the post-fee hours with the destinations.
plan = plan_output_hours(OutputHoursRequest(
    input_hours=100,
    destination_coins=(10, 20, 30),
    have_change=True,
    mode=HoursSelectionMode.SHARE,
    share_factor=Fraction(1, 2),
))
print(plan.fee_hours, plan.change_hours, plan.addr_hours)
# 10 45 (8, 15, 22)

# HoursValidationError examples:
# distribute_coin_hours_proportional([], 5)         # empty coins
# distribute_coin_hours_proportional([5, 0, 3], 2)  # zero-valued coin
# distribute_spend_hours(10, 0, True)               # no destinations
