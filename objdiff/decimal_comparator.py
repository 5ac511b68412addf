# objdiff/decimal_comparator.py
# DecimalComparator -- tolerant equality for decimal.Decimal field values.
#
# Procedure, applied to both operands:
#   1. If strip_trailing_zeros is set, drop trailing fractional zeros
#      (value-preserving, exponent-raising). Never rounds significant digits.
#   2. If max_scale is set, quantize to that many fractional digits with
#      ROUND_HALF_UP.
#   3. Equal iff value AND exponent match. Decimal('0.5') and Decimal('0.50')
#      are unequal unless step 1 or 2 unified their exponents.
#
# Non-finite decimals (NaN, sNaN, Infinity) skip steps 1 and 2 and are equal
# only when compare_total() reports them identical.
# Every arithmetic step runs in a local context wide enough to be exact.

from __future__ import annotations

from dataclasses import dataclass
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from objdiff.exceptions import InvalidConfigurationError


@dataclass(frozen=True)
class DecimalPolicy:
    """
    Decimal comparison policy.

    Fields
    ------
    strip_trailing_zeros : Normalize away trailing fractional zeros before
                           comparing. Default True.
    max_scale            : Round both operands half-up to this many
                           fractional digits before comparing. Default None
                           (no rounding). Must be a non-negative int.
    """
    strip_trailing_zeros: bool          = True
    max_scale:            Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.strip_trailing_zeros, bool):
            raise InvalidConfigurationError(
                "strip_trailing_zeros must be a bool, got "
                + repr(self.strip_trailing_zeros)
            )
        if self.max_scale is None:
            return
        if isinstance(self.max_scale, bool) or not isinstance(self.max_scale, int):
            raise InvalidConfigurationError(
                "max_scale must be a non-negative int or None, got "
                + repr(self.max_scale)
            )
        if self.max_scale < 0:
            raise InvalidConfigurationError(
                "max_scale must be >= 0, got " + repr(self.max_scale)
            )


def strip_trailing_zeros(value: Decimal) -> Decimal:
    """
    Remove trailing fractional zeros without rounding.

    Mirrors normalize() but with enough precision to keep every digit:
    Decimal('1.500') -> Decimal('1.5'), Decimal('0.000') -> Decimal('0').
    """
    if not value.is_finite():
        return value
    with localcontext() as ctx:
        ctx.prec = max(len(value.as_tuple().digits), 1)
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        return value.normalize()


def round_to_scale(value: Decimal, scale: int) -> Decimal:
    """Quantize value to scale fractional digits, rounding half-up."""
    if not value.is_finite():
        return value
    exponent = Decimal((0, (1,), -scale))
    with localcontext() as ctx:
        ctx.prec = max(value.adjusted() + scale + 2, 1)
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


class DecimalComparator:
    """
    Pure comparison of two Decimal values under a DecimalPolicy.

    Method:
      equal(a, b) -> bool
    """

    def __init__(self, policy: Optional[DecimalPolicy] = None) -> None:
        self.policy: DecimalPolicy = policy if policy is not None else DecimalPolicy()

    def equal(self, a: Decimal, b: Decimal) -> bool:
        if not a.is_finite() or not b.is_finite():
            return a.compare_total(b) == 0

        if self.policy.strip_trailing_zeros:
            a = strip_trailing_zeros(a)
            b = strip_trailing_zeros(b)

        if self.policy.max_scale is not None:
            a = round_to_scale(a, self.policy.max_scale)
            b = round_to_scale(b, self.policy.max_scale)

        return a == b and a.as_tuple().exponent == b.as_tuple().exponent
