"""Tools for building and evaluating Boussinesq equations of state"""

import enum

from . import secondorder, teos10
from .lib import (
    DEFAULT_PRECISION,
    EquationOfState,
    as_precision,
    convert,
    eltype,
)
from .secondorder import SecondOrderSeawaterPolynomial


class Family(enum.Enum):
    """Families of seawater polynomials"""

    SecondOrder = "second_order"
    TEOS10 = "teos10"


# Names accepted for each family by `make_equation_of_state`
families = {
    "second_order": Family.SecondOrder,
    "roquet": Family.SecondOrder,
    "teos10": Family.TEOS10,
}


def make_equation_of_state(
    family,
    precision=DEFAULT_PRECISION,
    coefficient_set=None,
    reference_density=None,
):
    """Make a Boussinesq equation of state

    Parameters
    ----------
    family : str or Family

        - `'second_order'` (or `'roquet'`) for a second-order polynomial with
          coefficients optimized by Roquet et al. (2015) [1]_,
        - `'teos10'` for the 55-term polynomial approximation [2]_ to TEOS-10.

    precision : type or str, Default np.float64

        Floating point type, `np.float32` or `np.float64`, in which the
        coefficients are stored and the equation of state is evaluated.

    coefficient_set : CoefficientSet or str, Default None

        Only for the second-order family, the optimized coefficient set.
        If None, `CoefficientSet.SecondOrder` is used.

    reference_density : float, Default None

        Boussinesq reference density [kg m-3].  If None, 1024.6 for the
        second-order family and 1020 for TEOS-10.

    Returns
    -------
    eos : EquationOfState

    Notes
    -----
    .. [1] Roquet, F., G. Madec, L. Brodeau, J. Nycander, 2015: Defining a
       Simplified Yet "Realistic" Equation of State for Seawater. Journal of
       Physical Oceanography, 45, pp. 2564-2579.

    .. [2] Roquet, F., G. Madec, T.J. McDougall, P.M. Barker, 2015: Accurate
       polynomial expressions for the density and specifc volume of seawater
       using the TEOS-10 standard. Ocean Modelling., 90, pp. 29-43.
    """

    if not isinstance(family, Family):
        if not isinstance(family, str) or family not in families:
            raise ValueError(
                f"Seawater polynomial family {family} not (yet) implemented."
                " Currently, family must be one of " + str(list(families))
            )
        family = families[family]

    FT = as_precision(precision)

    if family is Family.SecondOrder:
        if coefficient_set is None:
            coefficient_set = secondorder.CoefficientSet.SecondOrder
        if reference_density is None:
            reference_density = secondorder.ROQUET_REFERENCE_DENSITY
        return secondorder.RoquetEquationOfState(FT, coefficient_set, reference_density)

    if coefficient_set is not None:
        raise ValueError("The TEOS-10 polynomial has no coefficient sets to choose from")
    if reference_density is None:
        reference_density = teos10.TEOS10_REFERENCE_DENSITY
    return teos10.TEOS10EquationOfState(FT, reference_density)


def rebind_precision(precision, eos):
    """Return a copy of `eos` with all coefficients converted to `precision`."""
    FT = as_precision(precision)
    return EquationOfState(
        eos.seawater_polynomial.with_float_type(FT),
        convert(FT, eos.reference_density),
    )


def reference_density(eos):
    """Boussinesq reference density [kg m-3] of `eos`"""
    return eos.reference_density


def _prepare(T, S, Z, eos, singular=False):
    # Convert the state to the precision of `eos`, and find the coefficients
    FT = eltype(eos)
    T, S, Z = FT(T), FT(S), FT(Z)
    poly = eos.seawater_polynomial
    if isinstance(poly, SecondOrderSeawaterPolynomial):
        return FT, secondorder, T, S, Z, poly
    c = teos10.coefficients(FT)
    teos10.check_salinity(S, c, singular)
    return FT, teos10, T, S, Z, c


def density(T, S, Z, eos):
    """In-situ density [kg m-3]

    Parameters
    ----------
    T : float
        Conservative Temperature [degC]
    S : float
        Absolute Salinity [g/kg]
    Z : float
        Geopotential height [m], zero at the sea surface and negative below
    eos : EquationOfState
        The equation of state

    Returns
    -------
    rho : float
        In-situ density, of the precision of `eos`
    """
    FT, mod, T, S, Z, c = _prepare(T, S, Z, eos)
    if mod is teos10:
        return FT(teos10.rho(T, S, Z, c))
    return eos.reference_density + FT(secondorder.rho_prime(T, S, Z, c))


def density_anomaly(T, S, Z, eos):
    """In-situ density minus the reference density [kg m-3]. See `density`."""
    FT, mod, T, S, Z, c = _prepare(T, S, Z, eos)
    if mod is teos10:
        return FT(teos10.rho(T, S, Z, c)) - eos.reference_density
    return FT(secondorder.rho_prime(T, S, Z, c))


def thermal_sensitivity(T, S, Z, eos):
    """Thermal sensitivity [kg m-3 K-1]. See `density`."""
    FT, mod, T, S, Z, c = _prepare(T, S, Z, eos)
    return FT(mod.thermal_sensitivity(T, S, Z, c))


def haline_sensitivity(T, S, Z, eos):
    """Haline sensitivity [kg m-3 (g/kg)-1]. See `density`.

    For TEOS-10, raises `InvalidSalinity` at `S == -32`, where the reduced
    salinity vanishes.
    """
    FT, mod, T, S, Z, c = _prepare(T, S, Z, eos, singular=True)
    return FT(mod.haline_sensitivity(T, S, Z, c))


def thermal_expansion(T, S, Z, eos):
    """Thermal expansion coefficient, the thermal sensitivity over the reference density [K-1]"""
    return thermal_sensitivity(T, S, Z, eos) / eos.reference_density


def haline_contraction(T, S, Z, eos):
    """Haline contraction coefficient, the haline sensitivity over the reference density [(g/kg)-1]"""
    return haline_sensitivity(T, S, Z, eos) / eos.reference_density


# Short names, as in ρ and ρ′
rho = density
rho_prime = density_anomaly
