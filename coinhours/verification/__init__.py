# coinhours/verification/__init__.py
# Determinism vector gate for the hours allocation layer.
#
# No production import chain may import any module from
# coinhours.verification. The gate is a development and CI dependency only.
#
# CI GATE:
#   python -m coinhours.verification.ci_vector_gate

from .vector_definitions import ALL_VECTORS, HoursVector
from .ci_vector_gate import (
    VectorFailure,
    VectorGateReport,
    run_vectors,
)
from .ci_vector_gate import main as run_ci_gate

__all__ = [
    # Vector matrix
    "ALL_VECTORS",
    "HoursVector",
    # Gate
    "VectorFailure",
    "VectorGateReport",
    "run_vectors",
    # Entry point
    "run_ci_gate",
]
