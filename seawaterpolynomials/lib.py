"""Library of simple types and functions shared by the seawater polynomials"""

import re
from dataclasses import dataclass
from typing import Any

import numpy as np

# Floating point types that a seawater polynomial may be evaluated in.
precisions = (np.float32, np.float64)

DEFAULT_PRECISION = np.float64


class UnknownCoefficientSet(ValueError):
    """Requested coefficient set is not one of the published sets."""


class PrecisionMismatch(TypeError):
    """Reference density and polynomial disagree on floating point precision."""


class InvalidSalinity(ValueError):
    """Absolute salinity lies outside the domain of the reduced salinity."""


def as_precision(precision=None):
    """Normalize a precision specifier to a numpy floating point scalar type

    Parameters
    ----------
    precision : type, numpy.dtype, str, or None

        Anything `numpy.dtype` understands, such as `np.float32`, `float`,
        or `"float64"`.  If None, `DEFAULT_PRECISION` is returned.

    Returns
    -------
    FT : type
        Either `np.float32` or `np.float64`.
    """
    if precision is None:
        return DEFAULT_PRECISION
    try:
        FT = np.dtype(precision).type
    except TypeError:
        FT = None
    if FT not in precisions:
        raise ValueError(
            f"Precision {precision} not (yet) implemented."
            " Currently, precision must be one of "
            + str([p.__name__ for p in precisions])
        )
    return FT


def convert(FT, x):
    """Convert a scalar `x` to precision `FT`, refusing to lose range.

    A finite `x` that overflows to infinity in `FT` raises `PrecisionMismatch`.
    """
    with np.errstate(over="ignore"):
        y = FT(x)
    if np.isfinite(x) and not np.isfinite(y):
        raise PrecisionMismatch(
            f"{x} cannot be represented as {FT.__name__} without overflow"
        )
    return y


def eltype(x):
    """Floating point type of a seawater polynomial or an equation of state"""
    if isinstance(x, EquationOfState):
        x = x.seawater_polynomial
    return x.float_type


def summary(x):
    """Short description of `x`, such as 'TEOS10SeawaterPolynomial{float32}'"""
    return f"{type(x).__name__}{{{eltype(x).__name__}}}"


def with_float_type(precision, polynomial):
    """Return a copy of `polynomial` with coefficients converted to `precision`."""
    return polynomial.with_float_type(as_precision(precision))


def shortest_str(x):
    """Shortest round-trip rendering of a number, with a compact exponent.

    For example 2.4677e-05 is written as '2.4677e-5'.
    """
    text = str(x)
    return re.sub(
        r"e([+-])0*(\d)",
        lambda m: "e" + ("-" if m.group(1) == "-" else "") + m.group(2),
        text,
    )


@dataclass(frozen=True)
class EquationOfState:
    """Boussinesq equation of state

    Pairs a seawater polynomial giving the density anomaly with the reference
    density `reference_density` [kg m-3] about which the anomaly is taken.
    Instances are immutable.

    A reference density given as a plain Python number is converted to the
    precision of `seawater_polynomial`.  A numpy floating point scalar of
    another precision raises `PrecisionMismatch`; use `rebind_precision` or
    convert explicitly.
    """

    seawater_polynomial: Any
    reference_density: Any

    def __post_init__(self):
        poly = self.seawater_polynomial
        if not hasattr(poly, "with_float_type"):
            raise TypeError(
                f"Expected a seawater polynomial; got {type(poly).__name__}"
            )
        FT = poly.float_type

        # Make every coefficient share the polynomial's precision
        if any(type(v) is not FT for v in _values(poly)):
            object.__setattr__(self, "seawater_polynomial", poly.with_float_type(FT))

        rho_r = self.reference_density
        if isinstance(rho_r, np.floating) and type(rho_r) is not FT:
            raise PrecisionMismatch(
                f"reference_density is {type(rho_r).__name__} but the"
                f" seawater polynomial is {FT.__name__}"
            )
        object.__setattr__(self, "reference_density", convert(FT, rho_r))

    def __str__(self):
        return (
            f"{summary(self)} with reference density {self.reference_density}"
            f" kg m-3 and {self.seawater_polynomial}"
        )


# Alias matching the terminology of Roquet et al. (2015)
BoussinesqEquationOfState = EquationOfState


def _values(poly):
    # Stored coefficients of a polynomial, empty for coefficient-free markers
    return tuple(poly) if isinstance(poly, tuple) else ()
