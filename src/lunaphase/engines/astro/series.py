from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Literal, Tuple

from ...reference.elements import OrbitalElements

TrigKind = Literal["sin", "cos"]

@dataclass(frozen=True)
class LinComb:
    """Integer multipliers on (M, M', F, Omega)."""
    m: int = 0
    mp: int = 0
    f: int = 0
    omega: int = 0

def eval_lincomb_rad(el: OrbitalElements, lc: LinComb) -> float:
    return lc.m * el.M + lc.mp * el.Mp + lc.f * el.F + lc.omega * el.Omega

@dataclass(frozen=True)
class TrigTerm:
    amp: float             # days
    theta: LinComb
    kind: TrigKind = "sin"
    e_power: int = 0       # amplitude scaled by E**e_power

def eval_trig_term(el: OrbitalElements, term: TrigTerm) -> float:
    ang = eval_lincomb_rad(el, term.theta)
    trig = math.sin(ang) if term.kind == "sin" else math.cos(ang)
    return term.amp * (el.E ** term.e_power) * trig

def eval_trig_series(terms: Tuple[TrigTerm, ...], el: OrbitalElements) -> float:
    """Σ amp_i * E^p_i * trig_i(theta_i)  (days)."""
    total = 0.0
    for term in terms:
        total += eval_trig_term(el, term)
    return total

@dataclass(frozen=True)
class PlanetaryTerm:
    """amp * sin(A), A = c0 + c1*k + c2*T^2 in degrees."""
    amp: float
    c0: float
    c1: float
    c2: float = 0.0

    def argument_deg(self, k: float, T: float) -> float:
        return self.c0 + self.c1 * k + self.c2 * T * T

def eval_planetary(terms: Tuple[PlanetaryTerm, ...], k: float, T: float) -> float:
    total = 0.0
    for term in terms:
        total += term.amp * math.sin(math.radians(term.argument_deg(k, T)))
    return total
