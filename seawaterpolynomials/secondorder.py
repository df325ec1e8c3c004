"""
Second-order polynomial equations of state for seawater from Roquet et al. (2015) [1]_

Types:

SecondOrderSeawaterPolynomial :: the seven coefficients of a polynomial in
    absolute salinity, conservative temperature and geopotential height that
    is at most second order overall

CoefficientSet :: the published sets of optimized coefficients

Functions:

rho_prime :: computes the density anomaly from Conservative Temperature,
    Absolute Salinity and geopotential height

thermal_sensitivity :: computes the temperature derivative of the density anomaly

haline_sensitivity :: computes the salinity derivative of the density anomaly

Notes:
The three functions above are the compiled kernels.  They take the
polynomial itself as their last argument; to evaluate an equation of state
use `seawaterpolynomials.tools`.

.. [1] Roquet, F., G. Madec, L. Brodeau, J. Nycander, 2015: Defining a
   Simplified Yet "Realistic" Equation of State for Seawater. Journal of
   Physical Oceanography, 45, pp. 2564-2579.
"""

import enum
import warnings
from typing import NamedTuple

import numba as nb
import numpy as np

from .lib import (
    DEFAULT_PRECISION,
    EquationOfState,
    UnknownCoefficientSet,
    as_precision,
    convert,
    shortest_str,
)

# Average density of seawater at the surface of the world ocean [kg m-3]
ROQUET_REFERENCE_DENSITY = 1024.6


class SecondOrderSeawaterPolynomial(NamedTuple):
    """Coefficients of a second-order polynomial for the seawater density anomaly

    The coefficient `Rbcp` multiplies the term of order `b` in absolute
    salinity `Sᴬ`, order `c` in conservative temperature `Θ`, and order `p` in
    geopotential height `Z`, with `b + c + p <= 2`.  The density anomaly is

        ρ' = R100 Sᴬ + R010 Θ + R020 Θ² - R011 Θ Z
             + R200 Sᴬ² - R101 Sᴬ Z + R110 Sᴬ Θ

    Absent terms have zero coefficients.
    """

    R100: float = 0.0
    R010: float = 0.0
    R101: float = 0.0
    R011: float = 0.0
    R110: float = 0.0
    R020: float = 0.0
    R200: float = 0.0

    @property
    def float_type(self):
        # Plain Python numbers carry no precision of their own
        floats = [type(v) for v in self if isinstance(v, np.floating)]
        if not floats:
            return DEFAULT_PRECISION
        return as_precision(np.result_type(*floats))

    def with_float_type(self, FT):
        return type(self)(*(convert(FT, v) for v in self))

    def __str__(self):
        terms = (
            (self.R010, "Θ"),
            (self.R020, "Θ²"),
            (self.R011, "Θ Z"),
            (self.R200, "Sᴬ²"),
            (self.R101, "Sᴬ Z"),
            (self.R110, "Sᴬ Θ"),
        )
        text = f"ρ' = {shortest_str(self.R100)} Sᴬ"
        for R, name in terms:
            sign = " - " if R < 0 else " + "
            text += f"{sign}{shortest_str(abs(R))} {name}"
        return text


class CoefficientSet(enum.Enum):
    """Optimized coefficient sets from Table 3 and equation (17) of Roquet et al. (2015)

    - `Linear`: ρ' = R010 Θ + R100 Sᴬ
    - `Cabbeling`: adds the quadratic temperature term R020 Θ²
    - `CabbelingThermobaricity`: adds the thermobaric term - R011 Θ Z
    - `Freezing`: as `CabbelingThermobaricity`, tuned to be accurate near freezing
    - `SecondOrder`: adds quadratic salinity, halobaric and thermohaline terms
    - `SimplestRealistic`: the simplest yet "realistic" equation of state, eq. (17)
    """

    Linear = "Linear"
    Cabbeling = "Cabbeling"
    CabbelingThermobaricity = "CabbelingThermobaricity"
    Freezing = "Freezing"
    SecondOrder = "SecondOrder"
    SimplestRealistic = "SimplestRealistic"


def _make(FT, **coeffs):
    FT = as_precision(FT)
    return SecondOrderSeawaterPolynomial(
        *(convert(FT, coeffs.get(f, 0.0)) for f in SecondOrderSeawaterPolynomial._fields)
    )


def LinearRoquetSeawaterPolynomial(precision=DEFAULT_PRECISION):
    """Linear equation of state optimized for the present-day ocean"""
    return _make(precision, R010=-1.775e-1, R100=7.718e-1)


def CabbelingRoquetSeawaterPolynomial(precision=DEFAULT_PRECISION):
    """Minimal equation of state that describes cabbeling"""
    return _make(precision, R010=-0.844e-1, R100=7.718e-1, R020=-4.561e-3)


def CabbelingThermobaricityRoquetSeawaterPolynomial(precision=DEFAULT_PRECISION):
    """Minimal equation of state that describes cabbeling and thermobaricity"""
    return _make(
        precision, R010=-0.651e-1, R100=7.718e-1, R020=-5.027e-3, R011=-2.5681e-5
    )


def FreezingRoquetSeawaterPolynomial(precision=DEFAULT_PRECISION):
    """Minimal equation of state that is accurate near the freezing point"""
    return _make(
        precision, R010=-0.491e-1, R100=7.718e-1, R020=-5.027e-3, R011=-2.5681e-5
    )


def SecondOrderRoquetSeawaterPolynomial(precision=DEFAULT_PRECISION):
    """Fully second-order equation of state"""
    # fmt: off
    return _make(
        precision,
        R010 =  0.182e-1,
        R100 =  8.078e-1,
        R020 = -4.937e-3,
        R011 = -2.4677e-5,
        R200 = -1.115e-4,
        R101 = -8.241e-6,
        R110 = -2.446e-3,
    )
    # fmt: on


def SimplestRealisticRoquetSeawaterPolynomial(precision=DEFAULT_PRECISION):
    """Simplest yet "realistic" equation of state, equation (17) of Roquet et al. (2015)

    The constant term R000 = -Cb Θ0² / 2 of equation (17) is dropped since it
    has no effect on the dynamics.
    """
    Cb = 0.011  # kg m-3 K-2
    Th = 2.5e-5  # kg m-4 K-1
    b0 = 0.77  # kg m-3 (g/kg)-1
    T0 = -4.5  # degC

    return _make(precision, R100=b0, R010=Cb * T0, R020=-Cb / 2, R011=-Th)


_constructors = {
    CoefficientSet.Linear: LinearRoquetSeawaterPolynomial,
    CoefficientSet.Cabbeling: CabbelingRoquetSeawaterPolynomial,
    CoefficientSet.CabbelingThermobaricity: CabbelingThermobaricityRoquetSeawaterPolynomial,
    CoefficientSet.Freezing: FreezingRoquetSeawaterPolynomial,
    CoefficientSet.SecondOrder: SecondOrderRoquetSeawaterPolynomial,
    CoefficientSet.SimplestRealistic: SimplestRealisticRoquetSeawaterPolynomial,
}


def parse_coefficient_set(name):
    """The `CoefficientSet` named by `name`, which may already be a `CoefficientSet`."""
    if isinstance(name, CoefficientSet):
        return name
    try:
        return CoefficientSet[name]
    except KeyError:
        raise UnknownCoefficientSet(
            f"Coefficient set {name!r} not recognized."
            " Currently, coefficient_set must be one of "
            + str([c.name for c in CoefficientSet])
        ) from None


def RoquetSeawaterPolynomial(
    precision=DEFAULT_PRECISION, coefficient_set=CoefficientSet.SecondOrder
):
    """Second-order seawater polynomial with coefficients from Roquet et al. (2015)

    Parameters
    ----------
    precision : type or str, Default np.float64

        Floating point type of the coefficients, `np.float32` or `np.float64`.

    coefficient_set : CoefficientSet or str, Default CoefficientSet.SecondOrder

        Which optimized set of coefficients to use.  See `CoefficientSet`.

    Returns
    -------
    polynomial : SecondOrderSeawaterPolynomial

    Notes
    -----
    The optimization minimizes errors in the horizontal density gradient
    estimated from climatological temperature and salinity between each
    simplified form and the full TEOS-10 equation of state.
    """
    return _constructors[parse_coefficient_set(coefficient_set)](precision)


def RoquetEquationOfState(
    precision=DEFAULT_PRECISION,
    coefficient_set=CoefficientSet.SecondOrder,
    reference_density=ROQUET_REFERENCE_DENSITY,
):
    """Boussinesq equation of state with a `RoquetSeawaterPolynomial`

    The default `reference_density` of 1024.6 kg m-3 is the average density of
    seawater at the surface of the world ocean.
    """
    FT = as_precision(precision)
    return EquationOfState(
        RoquetSeawaterPolynomial(FT, coefficient_set), convert(FT, reference_density)
    )


def RoquetLinearSeawaterPolynomial(precision=DEFAULT_PRECISION):
    warnings.warn(
        "Replace with `LinearRoquetSeawaterPolynomial(precision)`",
        DeprecationWarning,
        2,
    )
    return LinearRoquetSeawaterPolynomial(precision)


# Θ, Sᴬ, Z share the precision of p.  Doubling is written as a sum: integer
# literals would promote float32 arithmetic to float64.


@nb.njit
def rho_prime(T, S, Z, p):
    # Density anomaly, ρ - ρᵣ [kg m-3]
    return (
        p.R100 * S
        + p.R010 * T
        + p.R020 * (T * T)
        - p.R011 * T * Z
        + p.R200 * (S * S)
        - p.R101 * S * Z
        + p.R110 * S * T
    )


@nb.njit
def thermal_sensitivity(T, S, Z, p):
    # R010 + 2 R020 Θ - R011 Z + R110 Sᴬ
    return p.R010 + p.R020 * (T + T) - p.R011 * Z + p.R110 * S


@nb.njit
def haline_sensitivity(T, S, Z, p):
    # R100 + 2 R200 Sᴬ - R101 Z + R110 Θ
    return p.R100 + p.R200 * (S + S) - p.R101 * Z + p.R110 * T
