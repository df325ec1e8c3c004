import dataclasses

import numpy as np
import pytest

import seawaterpolynomials as sp
from seawaterpolynomials import tools
from seawaterpolynomials.lib import (
    EquationOfState,
    PrecisionMismatch,
    UnknownCoefficientSet,
    as_precision,
    eltype,
    summary,
    with_float_type,
)
from seawaterpolynomials.secondorder import CoefficientSet, SecondOrderSeawaterPolynomial
from seawaterpolynomials.teos10 import TEOS10SeawaterPolynomial


@pytest.mark.parametrize(
    "family,rho_r,poly_type",
    [
        ("second_order", 1024.6, SecondOrderSeawaterPolynomial),
        ("roquet", 1024.6, SecondOrderSeawaterPolynomial),
        (tools.Family.SecondOrder, 1024.6, SecondOrderSeawaterPolynomial),
        ("teos10", 1020.0, TEOS10SeawaterPolynomial),
        (tools.Family.TEOS10, 1020.0, TEOS10SeawaterPolynomial),
    ],
)
@pytest.mark.parametrize("precision", [np.float64, np.float32, "float32", float])
def test_make_equation_of_state(family, rho_r, poly_type, precision):
    eos = tools.make_equation_of_state(family, precision)
    FT = as_precision(precision)
    assert isinstance(eos.seawater_polynomial, poly_type)
    assert eltype(eos) is FT
    assert type(tools.reference_density(eos)) is FT
    assert tools.reference_density(eos) == FT(rho_r)


def test_make_equation_of_state_options():
    eos = tools.make_equation_of_state(
        "second_order", np.float64, CoefficientSet.Cabbeling, reference_density=1000
    )
    assert eos.seawater_polynomial == sp.CabbelingRoquetSeawaterPolynomial()
    assert eos.reference_density == 1000.0

    eos = tools.make_equation_of_state("teos10", reference_density=1026.0)
    assert eos.reference_density == 1026.0


def test_make_equation_of_state_errors():
    with pytest.raises(ValueError):
        tools.make_equation_of_state("jmd95")
    with pytest.raises(UnknownCoefficientSet):
        tools.make_equation_of_state("second_order", coefficient_set="Cubic")
    with pytest.raises(ValueError):
        tools.make_equation_of_state("teos10", coefficient_set=CoefficientSet.Linear)
    with pytest.raises(ValueError):
        tools.make_equation_of_state("teos10", np.float16)
    with pytest.raises(ValueError):
        tools.make_equation_of_state("teos10", "complex128")
    with pytest.raises(ValueError):
        tools.make_equation_of_state(["teos10"])


@pytest.mark.parametrize("family", ["second_order", "teos10"])
def test_rebind_idempotent(family):
    eos = tools.make_equation_of_state(family, np.float64)
    once = tools.rebind_precision(np.float32, eos)
    twice = tools.rebind_precision(np.float32, once)
    assert once == twice
    assert eltype(once) is np.float32

    # The source is left untouched
    assert eltype(eos) is np.float64


def test_rebind_round_trip():
    # Coefficients exactly representable in single precision
    poly = SecondOrderSeawaterPolynomial(R100=0.75, R010=-0.125, R020=-2.0**-10, R011=-2.0**-15)
    eos = EquationOfState(poly, 1024.0)

    back = tools.rebind_precision(np.float64, tools.rebind_precision(np.float32, eos))
    assert back == eos
    assert all(type(v) is np.float64 for v in back.seawater_polynomial)


def test_rebind_evaluates_in_new_precision():
    eos = tools.make_equation_of_state("teos10", np.float64)
    eos32 = tools.rebind_precision("float32", eos)
    rho64 = tools.density(10.0, 30.0, -1000.0, eos)
    rho32 = tools.density(10.0, 30.0, -1000.0, eos32)
    assert type(rho32) is np.float32
    assert np.isclose(rho32, rho64, atol=0, rtol=1e-5)


def test_rebind_overflow():
    eos = EquationOfState(TEOS10SeawaterPolynomial(np.float64), 1e300)
    with pytest.raises(PrecisionMismatch):
        tools.rebind_precision(np.float32, eos)


def test_precision_mismatch():
    poly = TEOS10SeawaterPolynomial(np.float32)
    with pytest.raises(PrecisionMismatch):
        EquationOfState(poly, np.float64(1020.0))

    # A plain number carries no precision, and is converted
    eos = EquationOfState(poly, 1020.0)
    assert type(eos.reference_density) is np.float32

    # Explicit conversion is always fine
    eos = EquationOfState(poly, np.float32(np.float64(1020.0)))
    assert eos.reference_density == 1020.0


def test_precision_mismatch_is_type_error():
    poly = sp.RoquetSeawaterPolynomial(np.float64)
    with pytest.raises(TypeError):
        EquationOfState(poly, np.float32(1024.6))


def test_not_a_polynomial():
    with pytest.raises(TypeError):
        EquationOfState("teos10", 1020.0)


def test_mixed_coefficients_are_unified():
    poly = SecondOrderSeawaterPolynomial(R100=np.float32(0.5), R010=-0.25)
    eos = EquationOfState(poly, 1000)
    assert all(type(v) is np.float32 for v in eos.seawater_polynomial)
    assert type(eos.reference_density) is np.float32


def test_precision_from_any_coefficient():
    poly = SecondOrderSeawaterPolynomial(R010=np.float32(-0.1775))
    assert poly.float_type is np.float32

    eos = EquationOfState(poly, np.float32(1024.6))
    assert all(type(v) is np.float32 for v in eos.seawater_polynomial)
    assert eos.seawater_polynomial.R010 == np.float32(-0.1775)


def test_mixed_precisions_take_the_wider():
    poly = SecondOrderSeawaterPolynomial(R100=np.float32(0.5), R010=np.float64(-0.25))
    assert poly.float_type is np.float64


def test_integer_coefficients():
    poly = SecondOrderSeawaterPolynomial(R100=1, R010=-2)
    assert poly.float_type is np.float64

    eos = EquationOfState(poly, 1000.0)
    assert all(type(v) is np.float64 for v in eos.seawater_polynomial)
    assert tools.density_anomaly(1.0, 1.0, 0.0, eos) == -1.0


def test_integer_reference_density():
    poly = TEOS10SeawaterPolynomial(np.float32)
    eos = EquationOfState(poly, np.int64(1020))
    assert type(eos.reference_density) is np.float32
    assert eos.reference_density == 1020.0


def test_immutable():
    eos = tools.make_equation_of_state("teos10")
    with pytest.raises(dataclasses.FrozenInstanceError):
        eos.reference_density = 1000.0
    with pytest.raises(AttributeError):
        eos.seawater_polynomial.float_type = np.float32


def test_with_float_type():
    poly = sp.RoquetSeawaterPolynomial(np.float64, "Freezing")
    poly32 = with_float_type("float32", poly)
    assert all(type(v) is np.float32 for v in poly32)
    assert poly32 == sp.RoquetSeawaterPolynomial(np.float32, "Freezing")


def test_summary():
    assert summary(sp.RoquetSeawaterPolynomial(np.float32)) == "SecondOrderSeawaterPolynomial{float32}"
    assert summary(TEOS10SeawaterPolynomial()) == "TEOS10SeawaterPolynomial{float64}"
    assert summary(sp.TEOS10EquationOfState(np.float32)) == "EquationOfState{float32}"


def test_str_equation_of_state():
    eos = sp.RoquetEquationOfState(np.float64, "SecondOrder")
    text = str(eos)
    assert text.startswith("EquationOfState{float64} with reference density 1024.6 kg m-3")
    assert text.endswith(str(eos.seawater_polynomial))


def test_aliases():
    eos = sp.RoquetEquationOfState()
    assert sp.BoussinesqEquationOfState is EquationOfState
    assert sp.rho(10.0, 35.0, -100.0, eos) == sp.density(10.0, 35.0, -100.0, eos)
    assert sp.rho_prime(10.0, 35.0, -100.0, eos) == sp.density_anomaly(10.0, 35.0, -100.0, eos)


@pytest.mark.parametrize("family", ["second_order", "teos10"])
def test_density_is_reference_plus_anomaly(family):
    eos = tools.make_equation_of_state(family)
    state = (4.0, 34.5, -500.0)
    rho = tools.density(*state, eos)
    rho_prime = tools.density_anomaly(*state, eos)
    assert np.isclose(rho, eos.reference_density + rho_prime, atol=0, rtol=1e-15)
