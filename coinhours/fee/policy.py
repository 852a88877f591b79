# coinhours/fee/policy.py
# Version: 1.0.0
# Fee policy configuration.
#
# The default burn factor is the consensus constant USER_BURN_FACTOR.
# A process may override it through the USER_BURN_FACTOR environment
# variable; the override is read only by fee_policy_from_env(), never at
# import time.
#
# Standard import pattern:
#   from coinhours.fee.policy import FeePolicy, fee_policy_from_env

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from coinhours.utils.constants import (
    BURN_FACTOR_ENV_VAR,
    MAX_UINT32,
    MIN_BURN_FACTOR,
    USER_BURN_FACTOR,
)


@dataclass(frozen=True)
class FeePolicy:
    """
    Immutable fee burn configuration.

    Fields
    ------
    burn_factor : 1/burn_factor of input hours (rounded up) is burnt.
                  int in [MIN_BURN_FACTOR, MAX_UINT32].
    """

    burn_factor: int = USER_BURN_FACTOR

    def __post_init__(self) -> None:
        if not isinstance(self.burn_factor, int) or isinstance(self.burn_factor, bool):
            raise ValueError(
                f"burn_factor must be an integer. Received: {self.burn_factor!r}"
            )
        if self.burn_factor < MIN_BURN_FACTOR or self.burn_factor > MAX_UINT32:
            raise ValueError(
                f"burn_factor must be in [{MIN_BURN_FACTOR}, {MAX_UINT32}]. "
                f"Received: {self.burn_factor}"
            )


def fee_policy_from_env(environ: Optional[Mapping[str, str]] = None) -> FeePolicy:
    """
    Build a FeePolicy, applying the USER_BURN_FACTOR override if set.

    Parameters
    ----------
    environ : Mapping[str, str], optional
        Environment to read. Defaults to os.environ.

    Returns
    -------
    FeePolicy
        FeePolicy() when the variable is unset or empty, otherwise a policy
        with the parsed burn factor.

    Raises
    ------
    ValueError
        If the variable is not a base-10 integer, or is out of range.
    """
    if environ is None:
        environ = os.environ

    raw = environ.get(BURN_FACTOR_ENV_VAR, "").strip()
    if not raw:
        return FeePolicy()

    if not (raw.isascii() and raw.isdigit()):
        raise ValueError(
            f"{BURN_FACTOR_ENV_VAR} must be a base-10 integer. Received: {raw!r}"
        )
    return FeePolicy(burn_factor=int(raw))
