# coinhours/fee/fee_calculator.py
# Version: 1.0.0
# External fee burn module.
# External to coinhours/core/: the allocation layer consumes required_fee()
# as a collaborator and nothing here imports from coinhours.core.
#
# DETERMINISM GUARANTEE:
#   Integer arithmetic only. No floats. No external state reads.
#   No side effects. No file I/O. No logging.
#   Output is a pure function of inputs.
#
# Standard import pattern:
#   from coinhours.fee.fee_calculator import required_fee, remaining_hours

from coinhours.utils.constants import MAX_UINT32, MAX_UINT64


class InsufficientFeeError(ValueError):
    """
    Raised by verify_fee_for_hours() when the fee does not meet the burn
    requirement for the transaction's total hours.

    Attributes
    ----------
    fee, required, total_hours, burn_factor : int
    """

    def __init__(self, fee: int, required: int, total_hours: int, burn_factor: int) -> None:
        self.fee = fee
        self.required = required
        self.total_hours = total_hours
        self.burn_factor = burn_factor
        super().__init__(
            f"Transaction fee {fee} is below the required {required} "
            f"for {total_hours} total hours at burn factor {burn_factor}"
        )


def _validate_hours(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an integer. Received: {value!r}")
    if value < 0 or value > MAX_UINT64:
        raise ValueError(
            f"{name} must be in [0, {MAX_UINT64}]. Received: {value}"
        )


def _validate_burn_factor(burn_factor: int) -> None:
    if not isinstance(burn_factor, int) or isinstance(burn_factor, bool):
        raise ValueError(
            f"burn_factor must be an integer. Received: {burn_factor!r}"
        )
    if burn_factor < 1 or burn_factor > MAX_UINT32:
        raise ValueError(
            f"burn_factor must be in [1, {MAX_UINT32}]. Received: {burn_factor}"
        )


def required_fee(hours: int, burn_factor: int) -> int:
    """
    Return the number of hours that must be burnt from `hours`.

    Parameters
    ----------
    hours : int
        Total input hours. Must be in [0, MAX_UINT64].
    burn_factor : int
        1/burn_factor of the hours is burnt. Must be in [1, MAX_UINT32].

    Returns
    -------
    int
        ceil(hours / burn_factor). Never exceeds `hours`.

    Raises
    ------
    ValueError
        If either argument is not an integer or is out of range.
    """
    _validate_hours("hours", hours)
    _validate_burn_factor(burn_factor)

    fee_hours = hours // burn_factor
    if hours % burn_factor != 0:
        fee_hours += 1
    return fee_hours


def remaining_hours(hours: int, burn_factor: int) -> int:
    """
    Return the hours left after the required fee is burnt.

    Equivalent to hours - required_fee(hours, burn_factor).
    """
    return hours - required_fee(hours, burn_factor)


def verify_fee_for_hours(hours: int, fee: int, burn_factor: int) -> None:
    """
    Check that `fee` satisfies the burn requirement for a transaction whose
    outputs carry `hours` and whose fee is `fee`.

    The requirement is computed on the pre-burn total (hours + fee).

    Raises
    ------
    ValueError
        If any argument is invalid, or hours + fee exceeds MAX_UINT64.
    InsufficientFeeError
        If fee < required_fee(hours + fee, burn_factor).
    """
    _validate_hours("hours", hours)
    _validate_hours("fee", fee)
    _validate_burn_factor(burn_factor)

    total = hours + fee
    if total > MAX_UINT64:
        raise ValueError(
            f"hours + fee overflows uint64. Received: hours={hours}, fee={fee}"
        )

    required = required_fee(total, burn_factor)
    if fee < required:
        raise InsufficientFeeError(fee, required, total, burn_factor)
