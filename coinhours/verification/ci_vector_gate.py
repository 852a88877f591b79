#!/usr/bin/env python3
# =============================================================================
# COINHOURS v1.0.0 -- DETERMINISM VECTOR GATE
# File:   coinhours/verification/ci_vector_gate.py
# =============================================================================
#
# PURPOSE
# -------
# Runs every fixed vector twice and checks that:
#   1. both runs are identical (determinism), and
#   2. the output equals the hand-derived expectation.
#
# Intended for CI integration:
#   python -m coinhours.verification.ci_vector_gate
#
# Exit codes:
#   0 -- PASS: every vector matched on both runs.
#   1 -- FAIL: at least one vector failed.
#
# No I/O beyond stdout/stderr. No network calls. No external dependencies.
# =============================================================================

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

from coinhours.core.hours_layer import (
    HoursError,
    HoursInvariantError,
    distribute_coin_hours_proportional,
    distribute_spend_hours,
    plan_output_hours,
)
from coinhours.verification.vector_definitions import ALL_VECTORS, HoursVector


@dataclass(frozen=True)
class VectorFailure:
    """
    failure_type is one of:
      NONDETERMINISTIC     -- the two runs disagreed
      EXPECTED_MISMATCH    -- output differs from the expectation
      INVARIANT_VIOLATION  -- the allocator raised HoursInvariantError
    """
    vector_id:     str
    failure_type:  str
    detail:        str


@dataclass(frozen=True)
class VectorGateReport:
    vectors_run:  int
    failures:     Tuple[VectorFailure, ...]

    @property
    def passed(self) -> bool:
        return not self.failures


def _execute(vector: HoursVector) -> Tuple[Any, ...]:
    """
    Run one vector and normalise its outcome.

    Success -> the expected-shape tuple. HoursError -> ("ERROR", class name).
    HoursInvariantError propagates.
    """
    try:
        if vector.operation == "SPEND":
            a = distribute_spend_hours(**vector.kwargs)
            return (a.fee_hours, a.change_hours, a.addr_hours, a.spend_hours)
        if vector.operation == "PROPORTIONAL":
            return distribute_coin_hours_proportional(**vector.kwargs)
        plan = plan_output_hours(**vector.kwargs)
        return (plan.fee_hours, plan.change_hours, plan.addr_hours)
    except HoursError as exc:
        return ("ERROR", type(exc).__name__)


def run_vectors(vectors: Iterable[HoursVector] = ALL_VECTORS) -> VectorGateReport:
    """Execute each vector twice and collect every failure."""
    failures: List[VectorFailure] = []
    count = 0
    for vector in vectors:
        count += 1
        try:
            first = _execute(vector)
            second = _execute(vector)
        except HoursInvariantError as exc:
            failures.append(VectorFailure(vector.vector_id, "INVARIANT_VIOLATION", exc.message))
            continue

        if first != second:
            failures.append(VectorFailure(
                vector.vector_id,
                "NONDETERMINISTIC",
                f"run 1 = {first!r}, run 2 = {second!r}",
            ))
            continue

        if vector.expect_error:
            expected: Tuple[Any, ...] = ("ERROR", vector.expect_error)
        else:
            expected = vector.expected
        if first != expected:
            failures.append(VectorFailure(
                vector.vector_id,
                "EXPECTED_MISMATCH",
                f"expected {expected!r}, observed {first!r}",
            ))

    return VectorGateReport(vectors_run=count, failures=tuple(failures))


def main() -> int:
    report = run_vectors()
    for failure in report.failures:
        print(
            f"VECTOR-GATE FAIL [{failure.vector_id}] {failure.failure_type}: "
            f"{failure.detail}",
            file=sys.stderr,
        )
    if report.passed:
        print(f"VECTOR-GATE: {report.vectors_run} vectors PASS. Merge permitted.")
        return 0
    print(
        f"VECTOR-GATE: {len(report.failures)} of {report.vectors_run} vectors "
        f"FAILED. Merge BLOCKED.",
        file=sys.stderr,
    )
    return 1


if __name__ == "__main__":
    sys.exit(main())
