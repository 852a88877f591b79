# =============================================================================
# COINHOURS v1.0.0 -- HOURS ALLOCATION LAYER
# File:   coinhours/core/hours_layer/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Defines the exception hierarchy for the Hours Allocation Layer.
# All exceptions are pure value objects: no side effects, no logging,
# no external references, no I/O of any kind.
#
# EXCEPTION HIERARCHY
# -------------------
#   HoursError(Exception)                      -- base; never raised directly
#     HoursValidationError(HoursError)         -- empty / zero / type / range
#     HoursOverflowError(HoursError)           -- fixed-width range exceeded
#
#   HoursInvariantError(Exception)             -- algorithm defect; NOT a
#                                                 HoursError subclass
#
# HoursError subclasses are recoverable: the caller rejects the request and
# no partial allocation exists. HoursInvariantError means the allocator
# itself produced an inconsistent result. It sits outside the HoursError
# tree so that `except HoursError` never catches it.
#
# MESSAGE CONTRACT
# ----------------
# Every exception message is:
#   - Deterministic: identical inputs -> identical message string.
#   - Explicit: field name and violating value always included.
#   - ASCII-safe: no Unicode outside the basic Latin block.
#   - Non-empty.
#
# =============================================================================

from __future__ import annotations

from typing import Any


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class HoursError(Exception):
    """
    Base class for all recoverable Hours Allocation Layer exceptions.

    Never raised directly. Use a concrete subclass.

    Attributes:
        field_name:  Name of the offending field, or empty string if not
                     applicable.
        value:       The offending value at the time of validation,
                     or None if the violation is not field-local.
        message:     Human-readable description of the violation.
                     Always non-empty. Always deterministic.
    """

    def __init__(
        self,
        message:    str,
        field_name: str = "",
        value:      Any = None,
    ) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError(
                "HoursError: message must be a non-empty string"
            )
        if not isinstance(field_name, str):
            raise ValueError(
                "HoursError: field_name must be a string"
            )
        super().__init__(message)
        self.field_name: str = field_name
        self.value:      Any = value
        self.message:    str = message

    def __repr__(self) -> str:
        return (
            self.__class__.__name__
            + "(field_name=" + repr(self.field_name)
            + ", value=" + repr(self.value)
            + ", message=" + repr(self.message)
            + ")"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HoursError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.field_name == other.field_name
            and self.value == other.value
            and self.message == other.message
        )

    __hash__ = Exception.__hash__


# =============================================================================
# CONCRETE RECOVERABLE EXCEPTIONS
# =============================================================================

class HoursValidationError(HoursError):
    """
    Raised when an input violates a type, sign, range or emptiness constraint.

    This covers:
      - An empty coin sequence.
      - A zero-valued coin.
      - A non-integer (or bool) where an integer amount is required.
      - An amount outside the uint64 range.
      - A share factor outside [0, 1].
      - A burn factor outside [MIN_BURN_FACTOR, MAX_UINT32].

    Message format:
        "HoursValidationError: field '<field_name>' violates constraint
         '<constraint>': got <value>."

    Raises:
        ValueError if field_name or constraint is empty.
    """

    def __init__(
        self,
        field_name:  str,
        value:       Any,
        constraint:  str,
    ) -> None:
        if not field_name:
            raise ValueError(
                "HoursValidationError: field_name must be a non-empty string"
            )
        if not isinstance(constraint, str) or not constraint:
            raise ValueError(
                "HoursValidationError: constraint must be a non-empty string"
            )
        message = (
            "HoursValidationError: field '"
            + field_name
            + "' violates constraint '"
            + constraint
            + "': got "
            + repr(value)
            + "."
        )
        super().__init__(message=message, field_name=field_name, value=value)
        self.constraint: str = constraint


class HoursOverflowError(HoursError):
    """
    Raised when a sum, product or narrowing conversion cannot be represented
    in the fixed width used by the ledger.

    Message format:
        "HoursOverflowError: <operation> of <operands> exceeds <limit_name>
         (<limit>)."

    Args:
        operation:   Short name of the checked operation
                     (e.g. "add_uint64", "uint64_to_int64").
        operands:    Tuple of the operand values. Stored as `value`.
        limit_name:  Name of the violated bound (e.g. "MAX_UINT64").
        limit:       Numeric value of the violated bound.

    Raises:
        ValueError if operation or limit_name is empty.
    """

    def __init__(
        self,
        operation:   str,
        operands:    tuple,
        limit_name:  str,
        limit:       int,
    ) -> None:
        if not operation:
            raise ValueError(
                "HoursOverflowError: operation must be a non-empty string"
            )
        if not limit_name:
            raise ValueError(
                "HoursOverflowError: limit_name must be a non-empty string"
            )
        message = (
            "HoursOverflowError: "
            + operation
            + " of "
            + repr(operands)
            + " exceeds "
            + limit_name
            + " ("
            + repr(limit)
            + ")."
        )
        super().__init__(message=message, field_name=operation, value=operands)
        self.operation:  str = operation
        self.operands:   tuple = operands
        self.limit_name: str = limit_name
        self.limit:      int = limit


# =============================================================================
# UNRECOVERABLE FAULT
# =============================================================================

class HoursInvariantError(Exception):
    """
    Raised when an allocation result fails its own conservation check.

    This is not an input error. It signals a defect in the allocation
    algorithm (or a broken collaborator contract) and the computation is
    abandoned rather than returning an allocation that could create or
    destroy hours. Callers must not retry or downgrade it to a rejection.

    Message format:
        "HoursInvariantError: <invariant>: <detail>."

    Attributes:
        invariant:  Short identifier of the violated relation
                    (e.g. "spend_hours == remaining_hours").
        detail:     Deterministic description including the observed values.
    """

    def __init__(self, invariant: str, detail: str) -> None:
        if not invariant:
            raise ValueError(
                "HoursInvariantError: invariant must be a non-empty string"
            )
        if not isinstance(detail, str) or not detail:
            raise ValueError(
                "HoursInvariantError: detail must be a non-empty string"
            )
        message = "HoursInvariantError: " + invariant + ": " + detail + "."
        super().__init__(message)
        self.invariant: str = invariant
        self.detail:    str = detail
        self.message:   str = message

    def __repr__(self) -> str:
        return (
            "HoursInvariantError("
            + "invariant=" + repr(self.invariant)
            + ", detail=" + repr(self.detail)
            + ")"
        )


# =============================================================================
# MODULE __all__
# =============================================================================

__all__ = [
    "HoursError",
    "HoursValidationError",
    "HoursOverflowError",
    "HoursInvariantError",
]
