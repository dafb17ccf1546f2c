# reference/corrections.py

from __future__ import annotations

from ..engines.astro.series import (
    LinComb,
    PlanetaryTerm,
    TrigTerm,
    eval_planetary,
    eval_trig_series,
)
from .elements import OrbitalElements, T_from_k


def _t(amp: float, m: int = 0, mp: int = 0, f: int = 0, omega: int = 0, *, e: int = 0, kind: str = "sin") -> TrigTerm:
    return TrigTerm(amp=amp, theta=LinComb(m=m, mp=mp, f=f, omega=omega), kind=kind, e_power=e)


# Periodic terms of Meeus table 49.A, in days.
# _t(amplitude, M, M', F, Omega, e=power of E)
NEW_MOON_TERMS = (
    _t(-0.40720, mp=1),
    _t(+0.17241, m=1, e=1),
    _t(+0.01608, mp=2),
    _t(+0.01039, f=2),
    _t(+0.00739, m=-1, mp=1, e=1),
    _t(-0.00514, m=1, mp=1, e=1),
    _t(+0.00208, m=2, e=2),
    _t(-0.00111, mp=1, f=-2),
    _t(-0.00057, mp=1, f=2),
    _t(+0.00056, m=1, mp=2, e=1),
    _t(-0.00042, mp=3),
    _t(+0.00042, m=1, f=2, e=1),
    _t(+0.00038, m=1, f=-2, e=1),
    _t(-0.00024, m=-1, mp=2, e=1),
    _t(-0.00017, omega=1),
    _t(-0.00007, m=2, mp=1),
    _t(+0.00004, mp=2, f=-2),
    _t(+0.00004, m=3),
    _t(+0.00003, m=1, mp=1, f=-2),
    _t(+0.00003, mp=2, f=2),
    _t(-0.00003, m=1, mp=1, f=2),
    _t(+0.00003, m=-1, mp=1, f=2),
    _t(-0.00002, m=-1, mp=1, f=-2),
    _t(-0.00002, m=1, mp=3),
    _t(+0.00002, mp=4),
)

FULL_MOON_TERMS = (
    _t(-0.40614, mp=1),
    _t(+0.17302, m=1, e=1),
    _t(+0.01614, mp=2),
    _t(+0.01043, f=2),
    _t(+0.00734, m=-1, mp=1, e=1),
    _t(-0.00515, m=1, mp=1, e=1),
    _t(+0.00209, m=2, e=2),
    _t(-0.00111, mp=1, f=-2),
    _t(-0.00057, mp=1, f=2),
    _t(+0.00056, m=1, mp=2, e=1),
    _t(-0.00042, mp=3),
    _t(+0.00042, m=1, f=2, e=1),
    _t(+0.00038, m=1, f=-2, e=1),
    _t(-0.00024, m=-1, mp=2, e=1),
    _t(-0.00017, omega=1),
    _t(-0.00007, m=2, mp=1),
    _t(+0.00004, mp=2, f=-2),
    _t(+0.00004, m=3),
    _t(+0.00003, m=1, mp=1, f=-2),
    _t(+0.00003, mp=2, f=2),
    _t(-0.00003, m=1, mp=1, f=2),
    _t(+0.00003, m=-1, mp=1, f=2),
    _t(-0.00002, m=-1, mp=1, f=-2),
    _t(-0.00002, m=1, mp=3),
    _t(+0.00002, mp=4),
)

# Shared by first and last quarter.
QUARTER_TERMS = (
    _t(-0.62801, mp=1),
    _t(+0.17172, m=1, e=1),
    _t(-0.01183, m=1, mp=1, e=1),
    _t(+0.00862, mp=2),
    _t(+0.00804, f=2),
    _t(+0.00454, m=-1, mp=1, e=1),
    _t(+0.00204, m=2, e=2),
    _t(-0.00180, mp=1, f=-2),
    _t(-0.00070, mp=1, f=2),
    _t(-0.00040, mp=3),
    _t(-0.00034, m=-1, mp=2, e=1),
    _t(+0.00032, m=1, f=2, e=1),
    _t(+0.00032, m=1, f=-2, e=1),
    _t(-0.00028, m=2, mp=1, e=2),
    _t(+0.00027, m=1, mp=2, e=1),
    _t(-0.00017, omega=1),
    _t(-0.00005, m=-1, mp=1, f=-2),
    _t(+0.00004, mp=2, f=2),
    _t(-0.00004, m=1, mp=1, f=2),
    _t(+0.00004, m=-2, mp=1),
    _t(+0.00003, m=1, mp=1, f=-2),
    _t(+0.00003, m=3),
    _t(+0.00002, mp=2, f=-2),
    _t(+0.00002, m=-1, mp=1, f=2),
    _t(-0.00002, m=1, mp=3),
)

# W in Meeus: added for first quarter, subtracted for last quarter.
# The constant 0.00306 is cos(0).
QUARTER_SPECIFIC_TERMS = (
    _t(+0.00306, kind="cos"),
    _t(-0.00038, m=1, e=1, kind="cos"),
    _t(+0.00026, mp=1, kind="cos"),
    _t(-0.00002, m=-1, mp=1, kind="cos"),
    _t(+0.00002, m=1, mp=1, kind="cos"),
    _t(+0.00002, f=2, kind="cos"),
)

# Additional corrections for all phases (Meeus 49, A1..A14), days.
PLANETARY_TERMS = (
    PlanetaryTerm(0.000325, 299.77, 0.107408, -0.009173),
    PlanetaryTerm(0.000165, 251.88, 0.016321),
    PlanetaryTerm(0.000164, 251.83, 26.651886),
    PlanetaryTerm(0.000126, 349.42, 36.412478),
    PlanetaryTerm(0.000110, 84.66, 18.206239),
    PlanetaryTerm(0.000062, 141.74, 53.303771),
    PlanetaryTerm(0.000060, 207.14, 2.453732),
    PlanetaryTerm(0.000056, 154.84, 7.306860),
    PlanetaryTerm(0.000047, 34.52, 27.261239),
    PlanetaryTerm(0.000042, 207.19, 0.121824),
    PlanetaryTerm(0.000040, 291.34, 1.844379),
    PlanetaryTerm(0.000037, 161.72, 24.198154),
    PlanetaryTerm(0.000035, 239.56, 25.513099),
    PlanetaryTerm(0.000023, 331.55, 3.592518),
)


def new_moon_correction(el: OrbitalElements) -> float:
    return eval_trig_series(NEW_MOON_TERMS, el)


def full_moon_correction(el: OrbitalElements) -> float:
    return eval_trig_series(FULL_MOON_TERMS, el)


def quarter_correction(el: OrbitalElements) -> float:
    return eval_trig_series(QUARTER_TERMS, el)


def quarter_specific(el: OrbitalElements) -> float:
    return eval_trig_series(QUARTER_SPECIFIC_TERMS, el)


def periodic_correction(phase: str, el: OrbitalElements) -> float:
    """
    Periodic correction (days) for one phase variant.

    Quarters share a table; the quarter-specific series W enters with
    a plus sign for the first quarter and a minus sign for the last.
    """
    if phase == "new_moon":
        return new_moon_correction(el)
    if phase == "full_moon":
        return full_moon_correction(el)
    if phase == "first_quarter":
        return quarter_correction(el) + quarter_specific(el)
    if phase == "last_quarter":
        return quarter_correction(el) - quarter_specific(el)
    raise ValueError(f"Unknown phase '{phase}'")


def planetary_correction(k: float) -> float:
    """Planetary perturbation (days), the same for every phase variant."""
    return eval_planetary(PLANETARY_TERMS, k, T_from_k(k))
