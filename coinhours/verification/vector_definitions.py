# coinhours/verification/vector_definitions.py
# Version: 1.0.0
# Fixed, version-controlled input matrix for the determinism vector gate.
#
# NO VECTOR IS GENERATED AT RUNTIME. NO VECTOR IS SAMPLED.
# Expected outputs are hand-derived and must never be regenerated from the
# implementation under test.
#
# Execution order: G-SP, G-PR, G-PL.
# Within each group: ascending numeric order of vector ID suffix.
#
# Expected shapes:
#   SPEND         (fee_hours, change_hours, addr_hours, spend_hours)
#   PROPORTIONAL  result tuple
#   PLAN          (fee_hours, change_hours, addr_hours)

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, Optional, Tuple

from coinhours.core.hours_layer.domain import HoursSelectionMode, OutputHoursRequest
from coinhours.utils.constants import MAX_UINT64

OPERATIONS = ("SPEND", "PROPORTIONAL", "PLAN")


@dataclass(frozen=True)
class HoursVector:
    """
    One fixed input with its expected output.

    Fields
    ------
    vector_id       : Unique ID, e.g. "SP-01".
    group_id        : "G-SP", "G-PR" or "G-PL".
    operation       : One of OPERATIONS.
    kwargs          : Keyword arguments for the operation.
    expected        : Expected normalised output; None when an error is expected.
    expect_error    : Exception class name expected, or "" for success.
    description     : Free text.
    """
    vector_id:     str
    group_id:      str
    operation:     str
    kwargs:        Dict[str, Any]
    expected:      Optional[Tuple[Any, ...]] = None
    expect_error:  str = ""
    description:   str = ""

    def __post_init__(self) -> None:
        if self.operation not in OPERATIONS:
            raise ValueError(
                f"HoursVector {self.vector_id}: unknown operation {self.operation!r}"
            )
        if (self.expected is None) == (not self.expect_error):
            raise ValueError(
                f"HoursVector {self.vector_id}: exactly one of expected / "
                f"expect_error must be set"
            )


# ---------------------------------------------------------------------------
# G-SP: distribute_spend_hours, default burn factor 10
# ---------------------------------------------------------------------------

_G_SP = (
    HoursVector(
        "SP-01", "G-SP", "SPEND",
        {"input_hours": 13, "n_addrs": 3, "have_change": True},
        expected=(2, 6, (2, 2, 1), 11),
        description="11 post-fee hours; odd hour to change; leftovers to lowest indices",
    ),
    HoursVector(
        "SP-02", "G-SP", "SPEND",
        {"input_hours": 0, "n_addrs": 1, "have_change": True},
        expected=(0, 0, (0,), 0),
        description="zero input hours",
    ),
    HoursVector(
        "SP-03", "G-SP", "SPEND",
        {"input_hours": 100, "n_addrs": 4, "have_change": False},
        expected=(10, 0, (23, 23, 22, 22), 90),
        description="no change output; 90 hours over 4 destinations",
    ),
    HoursVector(
        "SP-04", "G-SP", "SPEND",
        {"input_hours": 1, "n_addrs": 2, "have_change": True},
        expected=(1, 0, (0, 0), 0),
        description="fee rounds up and consumes the only hour",
    ),
    HoursVector(
        "SP-05", "G-SP", "SPEND",
        {"input_hours": MAX_UINT64, "n_addrs": 1, "have_change": True},
        expected=(
            1844674407370955162,
            8301034833169298227,
            (8301034833169298226,),
            16602069666338596453,
        ),
        description="full uint64 input",
    ),
    HoursVector(
        "SP-06", "G-SP", "SPEND",
        {"input_hours": 10, "n_addrs": 0, "have_change": True},
        expect_error="HoursValidationError",
        description="no destinations",
    ),
)


# ---------------------------------------------------------------------------
# G-PR: distribute_coin_hours_proportional
# ---------------------------------------------------------------------------

_G_PR = (
    HoursVector(
        "PR-01", "G-PR", "PROPORTIONAL",
        {"coins": (10, 20, 30), "hours": 6},
        expected=(2, 2, 2),
        description="guaranteed hour each, one remainder hour to index 0",
    ),
    HoursVector(
        "PR-02", "G-PR", "PROPORTIONAL",
        {"coins": (), "hours": 5},
        expect_error="HoursValidationError",
        description="empty coins",
    ),
    HoursVector(
        "PR-03", "G-PR", "PROPORTIONAL",
        {"coins": (5, 0, 3), "hours": 2},
        expect_error="HoursValidationError",
        description="zero-valued coin",
    ),
    HoursVector(
        "PR-04", "G-PR", "PROPORTIONAL",
        {"coins": (5, 50, 1), "hours": 2},
        expected=(1, 1, 0),
        description="scarcity branch: largest two outputs",
    ),
    HoursVector(
        "PR-05", "G-PR", "PROPORTIONAL",
        {"coins": (1, 2, 3), "hours": 0},
        expected=(0, 0, 0),
        description="zero hours",
    ),
    HoursVector(
        "PR-06", "G-PR", "PROPORTIONAL",
        {"coins": (7, 7, 7, 7), "hours": 2},
        expected=(1, 1, 0, 0),
        description="scarcity branch with equal coins keeps input order",
    ),
    HoursVector(
        "PR-07", "G-PR", "PROPORTIONAL",
        {"coins": (2**63, 1), "hours": 10},
        expect_error="HoursOverflowError",
        description="coin above MAX_INT64",
    ),
    HoursVector(
        "PR-08", "G-PR", "PROPORTIONAL",
        {"coins": (10**18, 3 * 10**18), "hours": 10**12},
        expected=(250000000001, 749999999999),
        description="product exceeds 64 bits before division",
    ),
    HoursVector(
        "PR-09", "G-PR", "PROPORTIONAL",
        {"coins": (1,), "hours": MAX_UINT64},
        expect_error="HoursOverflowError",
        description="proportional budget above MAX_INT64",
    ),
)


# ---------------------------------------------------------------------------
# G-PL: plan_output_hours, default FeePolicy
# ---------------------------------------------------------------------------

_G_PL = (
    HoursVector(
        "PL-01", "G-PL", "PLAN",
        {"request": OutputHoursRequest(
            input_hours=13,
            destination_coins=(100, 200, 300),
            have_change=True,
        )},
        expected=(2, 6, (2, 2, 1)),
        description="EVEN mode mirrors SP-01",
    ),
    HoursVector(
        "PL-02", "G-PL", "PLAN",
        {"request": OutputHoursRequest(
            input_hours=100,
            destination_coins=(10, 20, 30),
            have_change=True,
            mode=HoursSelectionMode.SHARE,
            share_factor=Fraction(1, 2),
        )},
        expected=(10, 45, (8, 15, 22)),
        description="SHARE mode, half of 90 post-fee hours to destinations",
    ),
    HoursVector(
        "PL-03", "G-PL", "PLAN",
        {"request": OutputHoursRequest(
            input_hours=20,
            destination_coins=(1, 1, 1),
            have_change=False,
            mode=HoursSelectionMode.SHARE,
            share_factor=Decimal("0.25"),
        )},
        expected=(2, 0, (6, 6, 6)),
        description="SHARE mode without change: all post-fee hours to destinations",
    ),
)


ALL_VECTORS: Tuple[HoursVector, ...] = _G_SP + _G_PR + _G_PL
