__version__ = "0.1.0"

import importlib as _importlib

# Import from modules
from .lib import (
    BoussinesqEquationOfState,
    DEFAULT_PRECISION,
    EquationOfState,
    InvalidSalinity,
    PrecisionMismatch,
    UnknownCoefficientSet,
    eltype,
    summary,
    with_float_type,
)
from .secondorder import (
    CabbelingRoquetSeawaterPolynomial,
    CabbelingThermobaricityRoquetSeawaterPolynomial,
    CoefficientSet,
    FreezingRoquetSeawaterPolynomial,
    LinearRoquetSeawaterPolynomial,
    ROQUET_REFERENCE_DENSITY,
    RoquetEquationOfState,
    RoquetLinearSeawaterPolynomial,
    RoquetSeawaterPolynomial,
    SecondOrderRoquetSeawaterPolynomial,
    SecondOrderSeawaterPolynomial,
    SimplestRealisticRoquetSeawaterPolynomial,
)
from .teos10 import (
    TEOS10_REFERENCE_DENSITY,
    TEOS10_REFERENCE_HEAT_CAPACITY,
    TEOS10EquationOfState,
    TEOS10SeawaterPolynomial,
)
from .tools import (
    Family,
    density,
    density_anomaly,
    haline_contraction,
    haline_sensitivity,
    make_equation_of_state,
    rebind_precision,
    reference_density,
    rho,
    rho_prime,
    thermal_expansion,
    thermal_sensitivity,
)

# Modules, importable as attributes
modules = ["lib", "secondorder", "teos10", "tools"]

__all__ = modules + [
    k for (k, v) in locals().items() if not k.startswith("_") and k not in ("modules",)
]  # all local, public names


def __dir__():
    return __all__


# Lazy load of modules
def __getattr__(name):
    if name in modules:
        return _importlib.import_module(f"seawaterpolynomials.{name}")
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'seawaterpolynomials' has no attribute '{name}'"
            )
