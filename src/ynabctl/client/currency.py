"""Conversion between currency amounts and YNAB milliunits.

The YNAB API expresses every monetary value as a signed integer of
milliunits: 1000 milliunits equal one unit of the budget's currency.
"""
import math

from ..utils.exceptions import UsageError

MILLIUNITS_PER_UNIT = 1000


def amount_to_milliunits(amount: float) -> int:
    """Convert an amount to milliunits, truncating toward zero.

    Floating-point error is not corrected, so an input whose binary
    representation sits just below a milliunit boundary loses that milliunit.

    Raises:
        UsageError: If the amount is NaN or infinite
    """
    if not math.isfinite(amount):
        raise UsageError(f"invalid amount: {amount} (must be a finite number)")
    return int(amount * MILLIUNITS_PER_UNIT)


def milliunits_to_amount(milliunits: int) -> float:
    """Convert milliunits to an amount for display."""
    return milliunits / MILLIUNITS_PER_UNIT
