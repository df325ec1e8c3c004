import numpy as np
import pytest

from seawaterpolynomials import secondorder, tools
from seawaterpolynomials.lib import EquationOfState, UnknownCoefficientSet
from seawaterpolynomials.secondorder import (
    CoefficientSet,
    RoquetEquationOfState,
    RoquetSeawaterPolynomial,
    SecondOrderSeawaterPolynomial,
)

precisions = (np.float64, np.float32)


@pytest.mark.parametrize("coefficient_set", list(CoefficientSet))
@pytest.mark.parametrize("precision", precisions)
def test_instantiate(precision, coefficient_set):
    poly = RoquetSeawaterPolynomial(precision, coefficient_set)
    assert isinstance(poly, SecondOrderSeawaterPolynomial)
    assert all(type(v) is precision for v in poly)

    eos = RoquetEquationOfState(precision, coefficient_set)
    assert eos.seawater_polynomial == poly
    assert type(eos.reference_density) is precision
    assert eos.reference_density == precision(1024.6)


@pytest.mark.parametrize("coefficient_set", list(CoefficientSet))
@pytest.mark.parametrize("precision", precisions)
def test_zero_state(precision, coefficient_set):
    eos = RoquetEquationOfState(precision, coefficient_set)
    assert tools.density_anomaly(0, 0, 0, eos) == 0
    assert tools.density(0, 0, 0, eos) == eos.reference_density


@pytest.mark.parametrize("precision", precisions)
def test_derivatives_at_origin(precision):
    eos = RoquetEquationOfState(precision, CoefficientSet.SecondOrder)
    poly = eos.seawater_polynomial
    assert tools.haline_sensitivity(0, 0, 0, eos) == poly.R100
    assert tools.thermal_sensitivity(0, 0, 0, eos) == poly.R010


def test_linear():
    poly = RoquetSeawaterPolynomial(coefficient_set="Linear")
    assert poly.R010 == -1.775e-1
    assert poly.R100 == 7.718e-1
    assert poly.R020 == poly.R011 == poly.R200 == poly.R101 == poly.R110 == 0


def test_second_order():
    poly = secondorder.SecondOrderRoquetSeawaterPolynomial()
    assert poly == SecondOrderSeawaterPolynomial(
        R010=0.182e-1,
        R100=8.078e-1,
        R020=-4.937e-3,
        R011=-2.4677e-5,
        R200=-1.115e-4,
        R101=-8.241e-6,
        R110=-2.446e-3,
    )


def test_simplest_realistic():
    # Derived from equation (17) of Roquet et al. (2015), not Table 3
    poly = RoquetSeawaterPolynomial(np.float64, CoefficientSet.SimplestRealistic)
    assert poly.R100 == 0.77
    assert poly.R010 == 0.011 * -4.5
    assert poly.R020 == -0.011 / 2
    assert poly.R011 == -2.5e-5
    assert poly.R200 == poly.R101 == poly.R110 == 0


def test_freezing_differs_from_thermobaric_only_in_R010():
    a = secondorder.FreezingRoquetSeawaterPolynomial()
    b = secondorder.CabbelingThermobaricityRoquetSeawaterPolynomial()
    assert a.R010 != b.R010
    assert a._replace(R010=b.R010) == b


@pytest.mark.parametrize("name", ["SecondOrderPolynomial", "linear", "", None])
def test_unknown_coefficient_set(name):
    with pytest.raises(UnknownCoefficientSet):
        RoquetSeawaterPolynomial(np.float64, name)
    with pytest.raises(UnknownCoefficientSet):
        RoquetEquationOfState(np.float64, name)


def test_unknown_coefficient_set_is_value_error():
    with pytest.raises(ValueError):
        RoquetSeawaterPolynomial(np.float64, "Quadratic")


def test_str():
    poly = RoquetSeawaterPolynomial(np.float64, CoefficientSet.SecondOrder)
    assert str(poly) == (
        "ρ' = 0.8078 Sᴬ + 0.0182 Θ - 0.004937 Θ² - 2.4677e-5 Θ Z"
        " - 0.0001115 Sᴬ² - 8.241e-6 Sᴬ Z - 0.002446 Sᴬ Θ"
    )


def test_str_linear():
    poly = RoquetSeawaterPolynomial(np.float64, CoefficientSet.Linear)
    assert str(poly) == (
        "ρ' = 0.7718 Sᴬ - 0.1775 Θ + 0.0 Θ² + 0.0 Θ Z + 0.0 Sᴬ² + 0.0 Sᴬ Z + 0.0 Sᴬ Θ"
    )


def test_closed_form():
    # Arbitrary, exactly representable coefficients and state
    poly = SecondOrderSeawaterPolynomial(
        R100=0.5, R010=-0.25, R020=-0.125, R011=-2.0, R200=0.0625, R101=4.0, R110=-1.0
    )
    eos = EquationOfState(poly, 1000.0)
    T, S, Z = 2.0, 4.0, -8.0

    rho_prime = 0.5 * S - 0.25 * T - 0.125 * T**2 + 2.0 * T * Z + 0.0625 * S**2 - 4.0 * S * Z - 1.0 * S * T
    assert tools.density_anomaly(T, S, Z, eos) == rho_prime
    assert tools.density(T, S, Z, eos) == 1000.0 + rho_prime
    assert tools.thermal_sensitivity(T, S, Z, eos) == -0.25 + 2 * -0.125 * T + 2.0 * Z - 1.0 * S
    assert tools.haline_sensitivity(T, S, Z, eos) == 0.5 + 2 * 0.0625 * S - 4.0 * Z - 1.0 * T


@pytest.mark.parametrize("coefficient_set", list(CoefficientSet))
def test_eos_derivs(coefficient_set):
    """Check the sensitivities against centred differences of the density anomaly

    With the sign conventions of Roquet et al. (2015), both sensitivities are
    the plain partial derivatives of the second-order polynomial.
    """
    eos = RoquetEquationOfState(np.float64, coefficient_set)

    t, s, z = (25.0, 35.0, -2000.0)
    dt, ds = (1e-3, 1e-3)

    rt_centred = (tools.density_anomaly(t + dt, s, z, eos) - tools.density_anomaly(t - dt, s, z, eos)) / (2.0 * dt)
    rs_centred = (tools.density_anomaly(t, s + ds, z, eos) - tools.density_anomaly(t, s - ds, z, eos)) / (2.0 * ds)

    assert np.isclose(rt_centred, tools.thermal_sensitivity(t, s, z, eos), atol=1e-10, rtol=1e-7)
    assert np.isclose(rs_centred, tools.haline_sensitivity(t, s, z, eos), atol=1e-10, rtol=1e-7)


def test_float32_stays_float32():
    eos = RoquetEquationOfState(np.float32)
    for fn in (
        tools.density,
        tools.density_anomaly,
        tools.thermal_sensitivity,
        tools.haline_sensitivity,
        tools.thermal_expansion,
        tools.haline_contraction,
    ):
        assert type(fn(10.0, 35.0, -100.0, eos)) is np.float32


def test_deprecated_alias():
    with pytest.warns(DeprecationWarning):
        poly = secondorder.RoquetLinearSeawaterPolynomial()
    assert poly == secondorder.LinearRoquetSeawaterPolynomial()
