from __future__ import annotations

from dataclasses import dataclass
from math import fmod

import math


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

K_PER_CENTURY = 1236.85  # lunations per Julian century

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360). Non-finite input gives NaN."""
    if not math.isfinite(x_deg):
        return math.nan
    y = fmod(x_deg, 360.0)
    if y < 0:
        y += 360.0
        if y >= 360.0:  # tiny negatives round up to 360
            y = 0.0
    return y

def T_from_k(k: float) -> float:
    """Julian centuries from J2000.0 implied by lunation index k."""
    return k / K_PER_CENTURY


# ------------------------------------------------------------
# Mean phase (Meeus 49.1)
# ------------------------------------------------------------

def jde_mean_phase(k: float) -> float:
    """
    Mean Julian Ephemeris Day (TT) of the phase identified by k.

    Meeus mean-phase polynomial:
      JDE = 2451550.09766 + 29.530588861 k
            + 0.00015437 T^2 - 0.000000150 T^3 + 0.00000000073 T^4,
      T = k / 1236.85.

    Good to about 0.6 day before periodic corrections.
    """
    T = T_from_k(k)
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2
    return (
        2451550.09766
        + 29.530588861 * k
        + 0.00015437 * T2
        - 0.000000150 * T3
        + 0.00000000073 * T4
    )


# ------------------------------------------------------------
# Orbital elements at the phase instant
# ------------------------------------------------------------

@dataclass(frozen=True)
class OrbitalElements:
    """Angles in radians, wrapped from [0,360) degrees. E is a plain factor."""
    T: float
    M: float
    Mp: float
    F: float
    Omega: float
    E: float

    @property
    def M_deg(self) -> float: return math.degrees(self.M)
    @property
    def Mp_deg(self) -> float: return math.degrees(self.Mp)
    @property
    def F_deg(self) -> float: return math.degrees(self.F)
    @property
    def Omega_deg(self) -> float: return math.degrees(self.Omega)


def eccentricity_factor(T: float) -> float:
    """
    Eccentricity factor E for the Earth's orbit.
    Scales the terms that depend on the Sun's mean anomaly.
    """
    return 1.0 - 0.002516 * T - 0.0000074 * (T * T)


def orbital_elements(k: float) -> OrbitalElements:
    """
    Mean elements at the phase instant for lunation index k (Meeus 49.4-49.7):

      M     = 2.5534   + 29.10535670 k  - 0.0000014 T^2 - 0.00000011 T^3
      M'    = 201.5643 + 385.81693528 k + 0.0107582 T^2 + 0.00001238 T^3 - 0.000000058 T^4
      F     = 160.7108 + 390.67050284 k - 0.0016118 T^2 - 0.00000227 T^3 + 0.000000011 T^4
      Omega = 124.7746 - 1.56375588 k   + 0.0020672 T^2 + 0.00000215 T^3
    """
    T = T_from_k(k)
    T2 = T * T
    T3 = T2 * T
    T4 = T2 * T2

    M = (
        2.5534
        + 29.10535670 * k
        - 0.0000014 * T2
        - 0.00000011 * T3
    )
    Mp = (
        201.5643
        + 385.81693528 * k
        + 0.0107582 * T2
        + 0.00001238 * T3
        - 0.000000058 * T4
    )
    F = (
        160.7108
        + 390.67050284 * k
        - 0.0016118 * T2
        - 0.00000227 * T3
        + 0.000000011 * T4
    )
    Omega = (
        124.7746
        - 1.56375588 * k
        + 0.0020672 * T2
        + 0.00000215 * T3
    )

    return OrbitalElements(
        T=T,
        M=math.radians(wrap_deg(M)),
        Mp=math.radians(wrap_deg(Mp)),
        F=math.radians(wrap_deg(F)),
        Omega=math.radians(wrap_deg(Omega)),
        E=eccentricity_factor(T),
    )
