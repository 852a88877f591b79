# coinhours/fee/__init__.py
# External fee burn module.
# External to coinhours/core/ per architecture rules.

from coinhours.fee.fee_calculator import (
    InsufficientFeeError,
    remaining_hours,
    required_fee,
    verify_fee_for_hours,
)
from coinhours.fee.policy import FeePolicy, fee_policy_from_env

__all__ = [
    "required_fee",
    "remaining_hours",
    "verify_fee_for_hours",
    "InsufficientFeeError",
    "FeePolicy",
    "fee_policy_from_env",
]
