"""Complex-number helpers, constants and denormal prevention for filter code."""

from __future__ import annotations

import cmath
import math

DOUBLE_PI = math.pi
DOUBLE_PI_2 = math.pi / 2
DOUBLE_LN2 = math.log(2.0)
DOUBLE_LN10 = math.log(10.0)

ANTI_DENORMAL_VSA = 1e-8

__all__ = [
    "ANTI_DENORMAL_VSA",
    "DOUBLE_LN10",
    "DOUBLE_LN2",
    "DOUBLE_PI",
    "DOUBLE_PI_2",
    "DenormalPrevention",
    "acosh",
    "addmul",
    "adjust_imag",
    "asinh",
    "infinity",
    "is_nan",
    "recip",
    "solve_quadratic_1",
    "solve_quadratic_2",
]


def solve_quadratic_1(a: float, b: float, c: float) -> complex:
    """Root of a*x^2 + b*x + c taken with the positive square root."""
    return (-b + cmath.sqrt(complex(b * b - 4 * a * c, 0.0))) / (2.0 * a)


def solve_quadratic_2(a: float, b: float, c: float) -> complex:
    """Root of a*x^2 + b*x + c taken with the negative square root."""
    return (-b - cmath.sqrt(complex(b * b - 4 * a * c, 0.0))) / (2.0 * a)


def infinity() -> complex:
    """Complex value with an infinite real part and zero imaginary part."""
    return complex(math.inf, 0.0)


def adjust_imag(c: complex) -> complex:
    """Drop an imaginary part that is negligibly small."""
    if abs(c.imag) < 1e-30:
        return complex(c.real, 0.0)
    return c


def addmul(c: complex, v: float, c1: complex) -> complex:
    """Return c + v * c1, computed component-wise."""
    return complex(c.real + v * c1.real, c.imag + v * c1.imag)


def recip(c: complex) -> complex:
    """Scale c by the inverse of its squared magnitude."""
    n = 1.0 / (c.real * c.real + c.imag * c.imag)
    return complex(n * c.real, n * c.imag)


def _log(v: float) -> float:
    if math.isnan(v):
        return math.nan
    if v > 0.0:
        return math.log(v)
    if v == 0.0:
        return -math.inf
    return math.nan


def _sqrt(v: float) -> float:
    if math.isnan(v) or v < 0.0:
        return math.nan
    return math.sqrt(v)


def asinh(x: float) -> float:
    """Inverse hyperbolic sine via the logarithmic formula."""
    return _log(x + _sqrt(x * x + 1.0))


def acosh(x: float) -> float:
    """Inverse hyperbolic cosine via the logarithmic formula; NaN below 1."""
    return _log(x + _sqrt(x * x - 1.0))


def is_nan(v: float | complex) -> bool:
    """True if v, or either part of a complex v, is NaN."""
    if isinstance(v, complex):
        return math.isnan(v.real) or math.isnan(v.imag)
    return v != v


class DenormalPrevention:
    """Supplies a tiny alternating offset that keeps filter states out of denormals."""

    def __init__(self) -> None:
        self._v = ANTI_DENORMAL_VSA

    def ac(self) -> float:
        """Small alternating current: flips sign on every call."""
        self._v = -self._v
        return self._v

    @staticmethod
    def dc() -> float:
        """Small direct current."""
        return ANTI_DENORMAL_VSA