# coinhours/utils/constants.py
# Version: 1.0.0
# Consensus constants for coin hour allocation and fee burning.
# Changing any value below changes transaction validity for every peer.
#
# Standard import pattern:
#   from coinhours.utils.constants import (
#       MAX_UINT64,
#       MAX_INT64,
#       USER_BURN_FACTOR,
#   )


# ---------------------------------------------------------------------------
# INTEGER WIDTHS
# ---------------------------------------------------------------------------
# Python ints never wrap; these bounds emulate the fixed-width ledger fields.

MAX_UINT64: int = 2**64 - 1
MAX_INT64:  int = 2**63 - 1
MAX_UINT32: int = 2**32 - 1


# ---------------------------------------------------------------------------
# FEE POLICY
# ---------------------------------------------------------------------------
# A burn factor of N means 1/N of the input hours (rounded up) is destroyed
# as the transaction fee.

USER_BURN_FACTOR: int = 10   # Applied to user-created transactions
MIN_BURN_FACTOR:  int = 2    # Lower bound accepted by FeePolicy

# Environment variable that overrides USER_BURN_FACTOR via fee_policy_from_env().
BURN_FACTOR_ENV_VAR: str = "USER_BURN_FACTOR"
