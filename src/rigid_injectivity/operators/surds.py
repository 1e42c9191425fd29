"""
Exact Quadratic Surds
=====================

Numbers of the form  A + B*sqrt(C)  with A, B rational and C an integer.

Every cosine, sine, rotated coordinate and remainder that the algorithms
touch has this form (Pythagorean angles give B = 0, hinge angles give one
square root). Ordering decisions near a critical boundary flip under
floating-point rounding, so all comparisons here are exact.

CANONICAL FORM (enforced in __post_init__):
    - rational value:   coeff = 0, radicand = 0
    - irrational value: radicand square-free integer > 1, coeff != 0

    sqrt(n/d) = sqrt(n*d)/d clears the denominator, square factors of the
    radicand are pulled into coeff, perfect squares collapse to rationals.
    With this form, structural equality IS value equality, and a value
    that is a half-integer is visibly rational before any rounding.

SIGN-THEN-SQUARE:
    sign(A + B*sqrt(C)):
        sign(A) and sign(B) agree (or one is 0)  -> that sign
        otherwise                                -> compare A^2 with B^2*C

    compare_surds(x, y) = sign(x - y) where x - y = D + S,
        D = A1 - A2,  S = B1*sqrt(C1) - B2*sqrt(C2)
    Four sign cases for (D, S); only opposite signs need squaring:
        D^2 - S^2 = (D^2 - B1^2*C1 - B2^2*C2) + 2*B1*B2*sqrt(C1*C2)
    which is again a single surd.

Floats appear only in floor_surd, as a starting guess that is then
corrected by exact comparisons.
"""

import math
import numbers
from dataclasses import dataclass
from fractions import Fraction
from typing import Tuple

import numpy as np

from ..spec.constants import HALF


def _sign(value) -> int:
    return (value > 0) - (value < 0)


def square_free_decomposition(n: int) -> Tuple[int, int]:
    """
    Split n >= 0 as n = outer^2 * inner with inner square-free.

    Trial division up to n^(1/3); the leftover cofactor is then 1, a prime,
    a prime squared, or a product of two distinct primes, so a perfect
    square test finishes the job.
    """
    if n < 0:
        raise ValueError(f"Cannot decompose negative radicand {n}")
    if n == 0:
        return 0, 0
    outer, inner = 1, 1
    i = 2
    while i * i * i <= n:
        if n % i == 0:
            e = 0
            while n % i == 0:
                n //= i
                e += 1
            outer *= i ** (e // 2)
            if e % 2:
                inner *= i
        i += 1
    r = math.isqrt(n)
    if r * r == n:
        outer *= r
    else:
        inner *= n
    return outer, inner


def _to_fraction(value) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, numbers.Rational) and not isinstance(value, bool):
        return Fraction(value)
    raise TypeError(f"Expected an exact rational, got {value!r}")


@dataclass(frozen=True, eq=False)
class Surd:
    """linear + coeff * sqrt(radicand), kept in canonical form."""
    linear: Fraction
    coeff: Fraction = Fraction(0)
    radicand: int = 0

    def __post_init__(self):
        linear = _to_fraction(self.linear)
        coeff = _to_fraction(self.coeff)
        radicand = _to_fraction(self.radicand)
        if radicand < 0:
            raise ValueError(f"Negative radicand {radicand}: value is not real")

        # sqrt(n/d) = sqrt(n*d) / d
        n, d = radicand.numerator, radicand.denominator
        outer, inner = square_free_decomposition(n * d)
        coeff = coeff * Fraction(outer, d)

        if coeff == 0 or inner == 0:
            coeff, inner = Fraction(0), 0
        elif inner == 1:
            linear, coeff, inner = linear + coeff, Fraction(0), 0

        object.__setattr__(self, 'linear', linear)
        object.__setattr__(self, 'coeff', coeff)
        object.__setattr__(self, 'radicand', inner)

    # -------------------------------------------------------------------------
    # Construction / coercion
    # -------------------------------------------------------------------------

    @classmethod
    def rational(cls, value) -> "Surd":
        return cls(_to_fraction(value))

    @staticmethod
    def coerce(value) -> "Surd":
        if isinstance(value, Surd):
            return value
        return Surd.rational(value)

    @property
    def is_rational(self) -> bool:
        return self.radicand == 0

    # -------------------------------------------------------------------------
    # Arithmetic (shared radicand only)
    # -------------------------------------------------------------------------

    def _merge_radicand(self, other: "Surd") -> int:
        if self.radicand == 0:
            return other.radicand
        if other.radicand == 0 or other.radicand == self.radicand:
            return self.radicand
        raise ValueError(
            f"Cannot add surds over different radicands ({self.radicand}, {other.radicand})"
        )

    def __add__(self, other):
        try:
            other = Surd.coerce(other)
        except TypeError:
            return NotImplemented
        radicand = self._merge_radicand(other)
        return Surd(self.linear + other.linear, self.coeff + other.coeff, radicand)

    __radd__ = __add__

    def __neg__(self):
        return Surd(-self.linear, -self.coeff, self.radicand)

    def __sub__(self, other):
        try:
            other = Surd.coerce(other)
        except TypeError:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        return (-self) + other

    def __mul__(self, other):
        if isinstance(other, Surd):
            if not other.is_rational:
                if self.is_rational:
                    return other * self.linear
                raise ValueError("Product of two irrational surds is not supported")
            other = other.linear
        try:
            factor = _to_fraction(other)
        except TypeError:
            return NotImplemented
        return Surd(self.linear * factor, self.coeff * factor, self.radicand)

    __rmul__ = __mul__

    def __truediv__(self, other):
        factor = _to_fraction(other.linear if isinstance(other, Surd) and other.is_rational else other)
        return self * (1 / factor)

    def __abs__(self):
        return -self if self.sign() < 0 else self

    # -------------------------------------------------------------------------
    # Sign and ordering
    # -------------------------------------------------------------------------

    def sign(self) -> int:
        """Exact sign of linear + coeff*sqrt(radicand)."""
        s_lin = _sign(self.linear)
        s_rad = _sign(self.coeff)
        if s_rad == 0:
            return s_lin
        if s_lin == 0 or s_lin == s_rad:
            return s_rad
        diff = self.linear * self.linear - self.coeff * self.coeff * self.radicand
        if diff > 0:
            return s_lin
        if diff < 0:
            return s_rad
        return 0

    def __eq__(self, other):
        try:
            other = Surd.coerce(other)
        except TypeError:
            return NotImplemented
        return (self.linear, self.coeff, self.radicand) == (other.linear, other.coeff, other.radicand)

    def __hash__(self):
        if self.is_rational:
            return hash(self.linear)
        return hash((self.linear, self.coeff, self.radicand))

    def __lt__(self, other):
        return compare_surds(self, other) < 0

    def __le__(self, other):
        return compare_surds(self, other) <= 0

    def __gt__(self, other):
        return compare_surds(self, other) > 0

    def __ge__(self, other):
        return compare_surds(self, other) >= 0

    def __float__(self):
        return float(self.linear) + float(self.coeff) * math.sqrt(self.radicand)

    def __repr__(self):
        if self.is_rational:
            return f"Surd({self.linear})"
        return f"Surd({self.linear} + {self.coeff}*sqrt({self.radicand}))"


def _radical_sign(b1: Fraction, c1: int, b2: Fraction, c2: int) -> int:
    """sign(b1*sqrt(c1) + b2*sqrt(c2)), c1, c2 >= 0."""
    s1 = _sign(b1) if c1 else 0
    s2 = _sign(b2) if c2 else 0
    if s1 == 0:
        return s2
    if s2 == 0 or s1 == s2:
        return s1
    diff = b1 * b1 * c1 - b2 * b2 * c2
    if diff > 0:
        return s1
    if diff < 0:
        return s2
    return 0


def compare_surds(x, y) -> int:
    """
    Exact ordering of two surds: -1 if x < y, 0 if equal, 1 if x > y.

    Radicands may differ.
    """
    x = Surd.coerce(x)
    y = Surd.coerce(y)

    if x.radicand == y.radicand or x.is_rational or y.is_rational:
        return (x - y).sign()

    d = x.linear - y.linear
    b1, c1 = x.coeff, x.radicand
    b2, c2 = -y.coeff, y.radicand

    s_d = _sign(d)
    s_rad = _radical_sign(b1, c1, b2, c2)

    # (0, 0): equal; one side zero or matching signs: immediate
    if s_rad == 0:
        return s_d
    if s_d == 0 or s_d == s_rad:
        return s_rad

    # (+, -) or (-, +): square both sides
    gap = Surd(d * d - b1 * b1 * c1 - b2 * b2 * c2, -2 * b1 * b2, c1 * c2).sign()
    if gap > 0:
        return s_d
    if gap < 0:
        return s_rad
    return 0


def floor_surd(x) -> int:
    """Largest integer n with n <= x."""
    x = Surd.coerce(x)
    if x.is_rational:
        return math.floor(x.linear)
    guess = float(x)
    n = int(np.floor(guess)) if math.isfinite(guess) else math.floor(x.linear)
    while compare_surds(x, n) < 0:
        n -= 1
    while compare_surds(x, n + 1) >= 0:
        n += 1
    return n


def round_half_up(x) -> int:
    """Nearest integer, halves rounded up: floor(x + 1/2)."""
    return floor_surd(Surd.coerce(x) + HALF)


def is_half_integer(x) -> bool:
    """True iff x = n + 1/2 for an integer n."""
    x = Surd.coerce(x)
    return x.is_rational and (x.linear - HALF).denominator == 1


# Self-test when run directly
# Run with: python -m rigid_injectivity.operators.surds (from src/)
if __name__ == "__main__":
    print("=" * 60)
    print("EXACT SURD ARITHMETIC - VERIFICATION")
    print("=" * 60)

    a = Surd(1, 1, 2)       # 1 + sqrt(2)
    b = Surd(0, 1, 6)       # sqrt(6)
    print(f"\n{a!r} ~ {float(a):.6f}")
    print(f"{b!r} ~ {float(b):.6f}")
    print(f"compare(a, b) = {compare_surds(a, b)} (should be -1)")

    c = Surd(0, 1, Fraction(3, 4))
    print(f"\nsqrt(3/4) canonical: {c!r} (should be 1/2*sqrt(3))")
    print(f"sqrt(12) canonical: {Surd(0, 1, 12)!r} (should be 2*sqrt(3))")
    print(f"1/2 + 1/2*sqrt(9) canonical: {Surd(Fraction(1, 2), Fraction(1, 2), 9)!r} (should be 2)")

    print(f"\nfloor(sqrt(2)) = {floor_surd(Surd(0, 1, 2))} (should be 1)")
    print(f"floor(-sqrt(2)) = {floor_surd(Surd(0, -1, 2))} (should be -2)")
    print(f"round(-1/2) = {round_half_up(Fraction(-1, 2))} (should be 0)")
