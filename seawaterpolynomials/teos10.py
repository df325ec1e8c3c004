"""
In-situ density using the 55-term polynomial approximation [1]_ to the TEOS-10
Gibbs Sea Water standard [2]_, in its Boussinesq form.

Types:

TEOS10SeawaterPolynomial :: marker for the 55-term polynomial, carrying only
    the floating point precision in which it is evaluated

Functions:

rho :: computes in-situ density from Conservative Temperature, Absolute
    Salinity and geopotential height

rho_vert, rho_horiz :: the vertical reference profile of density and the
    density anomaly fit about it, whose sum is `rho`

thermal_sensitivity :: computes -∂ρ/∂Θ

haline_sensitivity :: computes ∂ρ/∂Sᴬ

Notes:
The coefficients are tabulated once for each supported precision
(`coefficients(np.float64)`, `coefficients(np.float32)`).  The compiled kernels
take the table as their last argument so that arithmetic stays in the
table's precision.

Every polynomial is evaluated by Horner's method, highest degree first.  The
published coefficients were fitted assuming this evaluation order.

.. [1] Roquet, F., G. Madec, T.J. McDougall, P.M. Barker, 2015: Accurate
       polynomial expressions for the density and specifc volume of seawater
       using the TEOS-10 standard. Ocean Modelling., 90, pp. 29-43.

.. [2] McDougall, T.J. and P.M. Barker, 2011: Getting started with TEOS-10 and
    the Gibbs Seawater (GSW) Oceanographic Toolbox, 28pp., SCOR/IAPSO WG127,
    ISBN 978-0-646-55621-5.
"""

from collections import namedtuple
from dataclasses import dataclass

import numpy as np
import numba as nb

from .lib import (
    DEFAULT_PRECISION,
    EquationOfState,
    InvalidSalinity,
    as_precision,
    convert,
)

# Reference density used by Roquet et al. (2015) when fitting the polynomial
# to TEOS-10.  See the discussion before their equation (8).
TEOS10_REFERENCE_DENSITY = 1020.0

# Constant reference heat capacity converting between Conservative Temperature
# and potential enthalpy, TEOS-10 manual eq. (3.3.3) [J kg-1 K-1]
TEOS10_REFERENCE_HEAT_CAPACITY = 3991.86795711963


@dataclass(frozen=True)
class TEOS10SeawaterPolynomial:
    """The 55-term polynomial approximation to the TEOS-10 density of seawater.

    Carries no coefficients: they are fixed tables in this module, one per
    precision.
    """

    float_type: type = DEFAULT_PRECISION

    def __post_init__(self):
        object.__setattr__(self, "float_type", as_precision(self.float_type))

    def with_float_type(self, FT):
        return TEOS10SeawaterPolynomial(FT)

    def __str__(self):
        return "55-term polynomial approximation to TEOS-10"


def TEOS10EquationOfState(
    precision=DEFAULT_PRECISION, reference_density=TEOS10_REFERENCE_DENSITY
):
    """Boussinesq equation of state with a `TEOS10SeawaterPolynomial`

    Note that according to Roquet et al. (2015), "In a Boussinesq model, the
    choice of the ρ₀ value is important, yet it varies significantly among
    OGCMs, as it is a matter of personal preference."
    """
    FT = as_precision(precision)
    return EquationOfState(TEOS10SeawaterPolynomial(FT), convert(FT, reference_density))


# Scales of the reduced coordinates (τ, s, ζ), then the vertical reference
# profile R0*, the density anomaly EOS***, the thermal sensitivity ALP*** and
# the haline sensitivity BET***.  Subscripts give the powers of s, τ, ζ.
# fmt: off
Coefficients = namedtuple(
    "Coefficients",
    """Tu Zu dS Su
    R00 R01 R02 R03 R04 R05 EOS000 EOS100 EOS200 EOS300
    EOS400 EOS500 EOS600 EOS010 EOS110 EOS210 EOS310 EOS410 EOS510 EOS020
    EOS120 EOS220 EOS320 EOS420 EOS030 EOS130 EOS230 EOS330 EOS040 EOS140
    EOS240 EOS050 EOS150 EOS060 EOS001 EOS101 EOS201 EOS301 EOS401 EOS011
    EOS111 EOS211 EOS311 EOS021 EOS121 EOS221 EOS031 EOS131 EOS041 EOS002
    EOS102 EOS202 EOS012 EOS112 EOS022 EOS003 EOS103 EOS013 ALP000 ALP100
    ALP200 ALP300 ALP400 ALP500 ALP010 ALP110 ALP210 ALP310 ALP410 ALP020
    ALP120 ALP220 ALP320 ALP030 ALP130 ALP230 ALP040 ALP140 ALP050 ALP001
    ALP101 ALP201 ALP301 ALP011 ALP111 ALP211 ALP021 ALP121 ALP031 ALP002
    ALP102 ALP012 ALP003 BET000 BET100 BET200 BET300 BET400 BET500 BET010
    BET110 BET210 BET310 BET410 BET020 BET120 BET220 BET320 BET030 BET130
    BET230 BET040 BET140 BET050 BET001 BET101 BET201 BET301 BET011 BET111
    BET211 BET021 BET121 BET031 BET002 BET102 BET012 BET003""",
)

f8 = np.float64
f4 = np.float32

# From Roquet et al. (2015) Appendix A.1 and NEMO eosbn2.F90
_float64 = Coefficients(
    Tu=f8(40.0),
    Zu=f8(1.0e4),
    dS=f8(32.0),
    Su=f8(40.0 * 35.16504 / 35.0),
    R00=f8(4.6494977072e01),
    R01=f8(-5.2099962525e00),
    R02=f8(2.2601900708e-01),
    R03=f8(6.4326772569e-02),
    R04=f8(1.5616995503e-02),
    R05=f8(-1.7243708991e-03),
    EOS000=f8(8.0189615746e02),
    EOS100=f8(8.6672408165e02),
    EOS200=f8(-1.7864682637e03),
    EOS300=f8(2.0375295546e03),
    EOS400=f8(-1.2849161071e03),
    EOS500=f8(4.3227585684e02),
    EOS600=f8(-6.0579916612e01),
    EOS010=f8(2.6010145068e01),
    EOS110=f8(-6.5281885265e01),
    EOS210=f8(8.1770425108e01),
    EOS310=f8(-5.6888046321e01),
    EOS410=f8(1.7681814114e01),
    EOS510=f8(-1.9193502195),
    EOS020=f8(-3.7074170417e01),
    EOS120=f8(6.1548258127e01),
    EOS220=f8(-6.0362551501e01),
    EOS320=f8(2.9130021253e01),
    EOS420=f8(-5.4723692739),
    EOS030=f8(2.1661789529e01),
    EOS130=f8(-3.3449108469e01),
    EOS230=f8(1.9717078466e01),
    EOS330=f8(-3.1742946532),
    EOS040=f8(-8.3627885467),
    EOS140=f8(1.1311538584e01),
    EOS240=f8(-5.3563304045),
    EOS050=f8(5.4048723791e-01),
    EOS150=f8(4.8169980163e-01),
    EOS060=f8(-1.9083568888e-01),
    EOS001=f8(1.9681925209e01),
    EOS101=f8(-4.2549998214e01),
    EOS201=f8(5.0774768218e01),
    EOS301=f8(-3.0938076334e01),
    EOS401=f8(6.6051753097),
    EOS011=f8(-1.3336301113e01),
    EOS111=f8(-4.4870114575),
    EOS211=f8(5.0042598061),
    EOS311=f8(-6.5399043664e-01),
    EOS021=f8(6.7080479603),
    EOS121=f8(3.5063081279),
    EOS221=f8(-1.8795372996),
    EOS031=f8(-2.4649669534),
    EOS131=f8(-5.5077101279e-01),
    EOS041=f8(5.5927935970e-01),
    EOS002=f8(2.0660924175),
    EOS102=f8(-4.9527603989),
    EOS202=f8(2.5019633244),
    EOS012=f8(2.0564311499),
    EOS112=f8(-2.1311365518e-01),
    EOS022=f8(-1.2419983026),
    EOS003=f8(-2.3342758797e-02),
    EOS103=f8(-1.8507636718e-02),
    EOS013=f8(3.7969820455e-01),
    ALP000=f8(-6.5025362670e-01),
    ALP100=f8(1.6320471316),
    ALP200=f8(-2.0442606277),
    ALP300=f8(1.4222011580),
    ALP400=f8(-4.4204535284e-01),
    ALP500=f8(4.7983755487e-02),
    ALP010=f8(1.8537085209),
    ALP110=f8(-3.0774129064),
    ALP210=f8(3.0181275751),
    ALP310=f8(-1.4565010626),
    ALP410=f8(2.7361846370e-01),
    ALP020=f8(-1.6246342147),
    ALP120=f8(2.5086831352),
    ALP220=f8(-1.4787808849),
    ALP320=f8(2.3807209899e-01),
    ALP030=f8(8.3627885467e-01),
    ALP130=f8(-1.1311538584),
    ALP230=f8(5.3563304045e-01),
    ALP040=f8(-6.7560904739e-02),
    ALP140=f8(-6.0212475204e-02),
    ALP050=f8(2.8625353333e-02),
    ALP001=f8(3.3340752782e-01),
    ALP101=f8(1.1217528644e-01),
    ALP201=f8(-1.2510649515e-01),
    ALP301=f8(1.6349760916e-02),
    ALP011=f8(-3.3540239802e-01),
    ALP111=f8(-1.7531540640e-01),
    ALP211=f8(9.3976864981e-02),
    ALP021=f8(1.8487252150e-01),
    ALP121=f8(4.1307825959e-02),
    ALP031=f8(-5.5927935970e-02),
    ALP002=f8(-5.1410778748e-02),
    ALP102=f8(5.3278413794e-03),
    ALP012=f8(6.2099915132e-02),
    ALP003=f8(-9.4924551138e-03),
    BET000=f8(1.0783203594e01),
    BET100=f8(-4.4452095908e01),
    BET200=f8(7.6048755820e01),
    BET300=f8(-6.3944280668e01),
    BET400=f8(2.6890441098e01),
    BET500=f8(-4.5221697773),
    BET010=f8(-8.1219372432e-01),
    BET110=f8(2.0346663041),
    BET210=f8(-2.1232895170),
    BET310=f8(8.7994140485e-01),
    BET410=f8(-1.1939638360e-01),
    BET020=f8(7.6574242289e-01),
    BET120=f8(-1.5019813020),
    BET220=f8(1.0872489522),
    BET320=f8(-2.7233429080e-01),
    BET030=f8(-4.1615152308e-01),
    BET130=f8(4.9061350869e-01),
    BET230=f8(-1.1847737788e-01),
    BET040=f8(1.4073062708e-01),
    BET140=f8(-1.3327978879e-01),
    BET050=f8(5.9929880134e-03),
    BET001=f8(-5.2937873009e-01),
    BET101=f8(1.2634116779),
    BET201=f8(-1.1547328025),
    BET301=f8(3.2870876279e-01),
    BET011=f8(-5.5824407214e-02),
    BET111=f8(1.2451933313e-01),
    BET211=f8(-2.4409539932e-02),
    BET021=f8(4.3623149752e-02),
    BET121=f8(-4.6767901790e-02),
    BET031=f8(-6.8523260060e-03),
    BET002=f8(-6.1618945251e-02),
    BET102=f8(6.2255521644e-02),
    BET012=f8(-2.6514181169e-03),
    BET003=f8(-2.3025968587e-04),
)

# Single precision table: the double precision constants above, each rounded
# to the 8 significant digits float32 holds.  Not an independent fit.
_float32 = Coefficients(
    Tu=f4(40.0),
    Zu=f4(1.0e4),
    dS=f4(32.0),
    Su=f4(4.0188617e+01),
    R00=f4(4.6494977e+01),
    R01=f4(-5.2099963e+00),
    R02=f4(2.2601901e-01),
    R03=f4(6.4326773e-02),
    R04=f4(1.5616996e-02),
    R05=f4(-1.7243709e-03),
    EOS000=f4(8.0189616e+02),
    EOS100=f4(8.6672408e+02),
    EOS200=f4(-1.7864683e+03),
    EOS300=f4(2.0375296e+03),
    EOS400=f4(-1.2849161e+03),
    EOS500=f4(4.3227586e+02),
    EOS600=f4(-6.0579917e+01),
    EOS010=f4(2.6010145e+01),
    EOS110=f4(-6.5281885e+01),
    EOS210=f4(8.1770425e+01),
    EOS310=f4(-5.6888046e+01),
    EOS410=f4(1.7681814e+01),
    EOS510=f4(-1.9193502e+00),
    EOS020=f4(-3.7074170e+01),
    EOS120=f4(6.1548258e+01),
    EOS220=f4(-6.0362552e+01),
    EOS320=f4(2.9130021e+01),
    EOS420=f4(-5.4723693e+00),
    EOS030=f4(2.1661790e+01),
    EOS130=f4(-3.3449108e+01),
    EOS230=f4(1.9717078e+01),
    EOS330=f4(-3.1742947e+00),
    EOS040=f4(-8.3627885e+00),
    EOS140=f4(1.1311539e+01),
    EOS240=f4(-5.3563304e+00),
    EOS050=f4(5.4048724e-01),
    EOS150=f4(4.8169980e-01),
    EOS060=f4(-1.9083569e-01),
    EOS001=f4(1.9681925e+01),
    EOS101=f4(-4.2549998e+01),
    EOS201=f4(5.0774768e+01),
    EOS301=f4(-3.0938076e+01),
    EOS401=f4(6.6051753e+00),
    EOS011=f4(-1.3336301e+01),
    EOS111=f4(-4.4870115e+00),
    EOS211=f4(5.0042598e+00),
    EOS311=f4(-6.5399044e-01),
    EOS021=f4(6.7080480e+00),
    EOS121=f4(3.5063081e+00),
    EOS221=f4(-1.8795373e+00),
    EOS031=f4(-2.4649670e+00),
    EOS131=f4(-5.5077101e-01),
    EOS041=f4(5.5927936e-01),
    EOS002=f4(2.0660924e+00),
    EOS102=f4(-4.9527604e+00),
    EOS202=f4(2.5019633e+00),
    EOS012=f4(2.0564311e+00),
    EOS112=f4(-2.1311366e-01),
    EOS022=f4(-1.2419983e+00),
    EOS003=f4(-2.3342759e-02),
    EOS103=f4(-1.8507637e-02),
    EOS013=f4(3.7969820e-01),
    ALP000=f4(-6.5025363e-01),
    ALP100=f4(1.6320471e+00),
    ALP200=f4(-2.0442606e+00),
    ALP300=f4(1.4222012e+00),
    ALP400=f4(-4.4204535e-01),
    ALP500=f4(4.7983755e-02),
    ALP010=f4(1.8537085e+00),
    ALP110=f4(-3.0774129e+00),
    ALP210=f4(3.0181276e+00),
    ALP310=f4(-1.4565011e+00),
    ALP410=f4(2.7361846e-01),
    ALP020=f4(-1.6246342e+00),
    ALP120=f4(2.5086831e+00),
    ALP220=f4(-1.4787809e+00),
    ALP320=f4(2.3807210e-01),
    ALP030=f4(8.3627885e-01),
    ALP130=f4(-1.1311539e+00),
    ALP230=f4(5.3563304e-01),
    ALP040=f4(-6.7560905e-02),
    ALP140=f4(-6.0212475e-02),
    ALP050=f4(2.8625353e-02),
    ALP001=f4(3.3340753e-01),
    ALP101=f4(1.1217529e-01),
    ALP201=f4(-1.2510650e-01),
    ALP301=f4(1.6349761e-02),
    ALP011=f4(-3.3540240e-01),
    ALP111=f4(-1.7531541e-01),
    ALP211=f4(9.3976865e-02),
    ALP021=f4(1.8487252e-01),
    ALP121=f4(4.1307826e-02),
    ALP031=f4(-5.5927936e-02),
    ALP002=f4(-5.1410779e-02),
    ALP102=f4(5.3278414e-03),
    ALP012=f4(6.2099915e-02),
    ALP003=f4(-9.4924551e-03),
    BET000=f4(1.0783204e+01),
    BET100=f4(-4.4452096e+01),
    BET200=f4(7.6048756e+01),
    BET300=f4(-6.3944281e+01),
    BET400=f4(2.6890441e+01),
    BET500=f4(-4.5221698e+00),
    BET010=f4(-8.1219372e-01),
    BET110=f4(2.0346663e+00),
    BET210=f4(-2.1232895e+00),
    BET310=f4(8.7994140e-01),
    BET410=f4(-1.1939638e-01),
    BET020=f4(7.6574242e-01),
    BET120=f4(-1.5019813e+00),
    BET220=f4(1.0872490e+00),
    BET320=f4(-2.7233429e-01),
    BET030=f4(-4.1615152e-01),
    BET130=f4(4.9061351e-01),
    BET230=f4(-1.1847738e-01),
    BET040=f4(1.4073063e-01),
    BET140=f4(-1.3327979e-01),
    BET050=f4(5.9929880e-03),
    BET001=f4(-5.2937873e-01),
    BET101=f4(1.2634117e+00),
    BET201=f4(-1.1547328e+00),
    BET301=f4(3.2870876e-01),
    BET011=f4(-5.5824407e-02),
    BET111=f4(1.2451933e-01),
    BET211=f4(-2.4409540e-02),
    BET021=f4(4.3623150e-02),
    BET121=f4(-4.6767902e-02),
    BET031=f4(-6.8523260e-03),
    BET002=f4(-6.1618945e-02),
    BET102=f4(6.2255522e-02),
    BET012=f4(-2.6514181e-03),
    BET003=f4(-2.3025969e-04),
)
# fmt: on


def coefficients(precision=DEFAULT_PRECISION):
    """Coefficient table for `precision`, `np.float32` or `np.float64`"""
    FT = as_precision(precision)
    return _float32 if FT is np.float32 else _float64


def check_salinity(S, c, singular=False):
    """Raise `InvalidSalinity` unless the reduced salinity s(S) is defined.

    If `singular` is True, also reject `S == -dS`, where s(S) = 0 and the
    haline sensitivity divides by zero.  NaN passes through.
    """
    radicand = S + c.dS
    if radicand < 0 or (singular and radicand == 0):
        bound = ">" if singular else ">="
        raise InvalidSalinity(
            f"Absolute salinity {S} g/kg is outside the domain of the TEOS-10"
            f" polynomial, which requires S {bound} {-c.dS} g/kg"
        )


@nb.njit
def _process(T, S, Z, c):
    # Reduced coordinates τ, s, ζ.  Z is negative downward; ζ is positive.
    tau = T / c.Tu
    s = np.sqrt((S + c.dS) / c.Su)
    zeta = -Z / c.Zu
    return tau, s, zeta


@nb.njit
def _r0(zeta, c):
    # Vertical reference profile of density.
    # Check value from Roquet et al. (2015):
    #   for Z=-1000, should get 4.59763035
    return (((((c.R05 * zeta + c.R04) * zeta + c.R03) * zeta + c.R02) * zeta + c.R01) * zeta + c.R00) * zeta


# fmt: off
@nb.njit
def _r_prime(x, y, z, c):
    # Density anomaly about the vertical reference profile.
    # x, y, z are the reduced salinity, temperature and depth s, τ, ζ.
    # Check value from Roquet et al. (2015):
    #   for S=30, T=10, Z=-1000, should get 1022.85377
    n3 = c.EOS013*y + c.EOS103*x + c.EOS003
    n2 = ((c.EOS022*y
        + c.EOS112*x + c.EOS012)*y
        + (c.EOS202*x + c.EOS102)*x + c.EOS002
    )
    n1 = ((((c.EOS041*y
        + c.EOS131*x + c.EOS031)*y
        + (c.EOS221*x + c.EOS121)*x + c.EOS021)*y
        + ((c.EOS311*x + c.EOS211)*x + c.EOS111)*x + c.EOS011)*y
        + (((c.EOS401*x + c.EOS301)*x + c.EOS201)*x + c.EOS101)*x + c.EOS001
    )
    n0 = ((((((c.EOS060*y
        + c.EOS150*x + c.EOS050)*y
        + (c.EOS240*x + c.EOS140)*x + c.EOS040)*y
        + ((c.EOS330*x + c.EOS230)*x + c.EOS130)*x + c.EOS030)*y
        + (((c.EOS420*x + c.EOS320)*x + c.EOS220)*x + c.EOS120)*x + c.EOS020)*y
        + ((((c.EOS510*x + c.EOS410)*x + c.EOS310)*x + c.EOS210)*x + c.EOS110)*x + c.EOS010)*y
        + (((((c.EOS600*x + c.EOS500)*x + c.EOS400)*x + c.EOS300)*x + c.EOS200)*x + c.EOS100)*x + c.EOS000
    )
    return ((n3 * z + n2) * z + n1) * z + n0


@nb.njit
def _a(x, y, z, c):
    # Thermal sensitivity -∂ρ/∂Θ [kg m-3 K-1]
    return (
        ((c.ALP003*z + c.ALP012*y + c.ALP102*x + c.ALP002)*z
        + ((c.ALP031*y + c.ALP121*x + c.ALP021)*y
            + (c.ALP211*x + c.ALP111)*x + c.ALP011)*y
        + ((c.ALP301*x + c.ALP201)*x + c.ALP101)*x + c.ALP001)*z
        + ((((c.ALP050*y + c.ALP140*x + c.ALP040)*y
            + (c.ALP230*x + c.ALP130)*x + c.ALP030)*y
            + ((c.ALP320*x + c.ALP220)*x + c.ALP120)*x + c.ALP020)*y
            + (((c.ALP410*x + c.ALP310)*x + c.ALP210)*x + c.ALP110)*x + c.ALP010)*y
        + ((((c.ALP500*x + c.ALP400)*x + c.ALP300)*x + c.ALP200)*x + c.ALP100)*x + c.ALP000
    )


@nb.njit
def _b(x, y, z, c):
    # Haline sensitivity ∂ρ/∂Sᴬ multiplied by the reduced salinity s
    return (
        ((c.BET003*z + c.BET012*y + c.BET102*x + c.BET002)*z
        + ((c.BET031*y + c.BET121*x + c.BET021)*y
            + (c.BET211*x + c.BET111)*x + c.BET011)*y
        + ((c.BET301*x + c.BET201)*x + c.BET101)*x + c.BET001)*z
        + ((((c.BET050*y + c.BET140*x + c.BET040)*y
            + (c.BET230*x + c.BET130)*x + c.BET030)*y
            + ((c.BET320*x + c.BET220)*x + c.BET120)*x + c.BET020)*y
            + (((c.BET410*x + c.BET310)*x + c.BET210)*x + c.BET110)*x + c.BET010)*y
        + ((((c.BET500*x + c.BET400)*x + c.BET300)*x + c.BET200)*x + c.BET100)*x + c.BET000
    )
# fmt: on


@nb.njit
def rho(T, S, Z, c):
    # Calculate the in-situ density [kg m-3].
    y, x, z = _process(T, S, Z, c)
    return _r0(z, c) + _r_prime(x, y, z, c)


@nb.njit
def thermal_sensitivity(T, S, Z, c):
    # Calculate -∂ρ/∂Θ [kg m-3 K-1].
    y, x, z = _process(T, S, Z, c)
    return _a(x, y, z, c)


@nb.njit
def haline_sensitivity(T, S, Z, c):
    # Calculate ∂ρ/∂Sᴬ [kg m-3 (g/kg)-1].  Singular where s == 0.
    y, x, z = _process(T, S, Z, c)
    return _b(x, y, z, c) / x


def rho_vert(Z, precision=DEFAULT_PRECISION):
    """Vertical reference profile of density r₀ [kg m-3] at geopotential height `Z` [m]"""
    c = coefficients(precision)
    FT = type(c.Zu)
    return FT(_r0(-FT(Z) / c.Zu, c))


def rho_horiz(T, S, Z, precision=DEFAULT_PRECISION):
    """Density anomaly r′ [kg m-3] about the vertical reference profile

    Parameters
    ----------
    T : float
        Conservative Temperature [degC]
    S : float
        Absolute Salinity [g/kg]
    Z : float
        Geopotential height [m], negative below the sea surface
    precision : type or str, Default np.float64
        Floating point type used in the evaluation

    Returns
    -------
    r : float
        `rho(T, S, Z) - rho_vert(Z)`, of type `precision`
    """
    c = coefficients(precision)
    FT = type(c.Zu)
    T, S, Z = FT(T), FT(S), FT(Z)
    check_salinity(S, c)
    y, x, z = _process(T, S, Z, c)
    return FT(_r_prime(x, y, z, c))
