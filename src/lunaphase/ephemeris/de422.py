#ephemeris/de422.py
from __future__ import annotations

import math
import pathlib
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Tuple

from ..core.types import PHASE_OFFSETS

EPS_J2000 = math.radians(23.439291111)  # obliquity of the ecliptic at J2000
EMRAT_DEFAULT = 81.30056907419062        # Earth/Moon mass ratio, DE4xx value

# TT Julian days covered by the de422 kernel (-3000 .. +3000)
DE422_JD_MIN = 625648.5
DE422_JD_MAX = 2816816.5


def wrap180(deg: float) -> float:
    """Signed angle in [-180, 180]."""
    return math.remainder(deg, 360.0)


def phase_target_deg(phase: str) -> float:
    """Moon-Sun elongation (deg) that defines a phase: 0, 90, 180, 270."""
    if phase not in PHASE_OFFSETS:
        raise ValueError(f"Unknown phase '{phase}'")
    return 360.0 * PHASE_OFFSETS[phase]


def _ecliptic_lon_deg(v) -> float:
    """Ecliptic longitude of an ICRF (equatorial J2000) vector, in [0,360)."""
    x, y, z = float(v[0]), float(v[1]), float(v[2])
    y_ecl = y * math.cos(EPS_J2000) + z * math.sin(EPS_J2000)
    return math.degrees(math.atan2(y_ecl, x)) % 360.0


def _emrat(de422_mod) -> float:
    """EMRAT from the constants.npy shipped beside the de422 package, else the default."""
    path = pathlib.Path(de422_mod.__file__).resolve().with_name("constants.npy")
    if not path.exists():
        return EMRAT_DEFAULT
    import numpy as np
    consts = np.load(path, allow_pickle=True).item()
    if not isinstance(consts, dict):
        return EMRAT_DEFAULT
    return float(consts.get("EMRAT", consts.get("emrat", EMRAT_DEFAULT)))


class Elongation(Protocol):
    def elong_deg(self, jd_tt: float) -> float: ...


@dataclass
class DE422Elongation:
    """
    Geocentric ecliptic elongation λ_moon - λ_sun (deg) from DE422.

    Requires optional deps:
      pip install "lunaphase[ephemeris]"
    """
    eph: object
    emrat: float

    @classmethod
    def load(cls) -> "DE422Elongation":
        try:
            import de422  # type: ignore
            from jplephem import Ephemeris  # type: ignore
        except ImportError as e:
            raise RuntimeError(
                "DE422 ephemeris not available. Install extras:\n"
                "  pip install \"lunaphase[ephemeris]\""
            ) from e
        return cls(eph=Ephemeris(de422), emrat=_emrat(de422))

    def elong_deg(self, jd_tt: float) -> float:
        # kernel gives the barycentric EMB and Sun, and the geocentric Moon
        emb, moon, sun = (self.eph.compute(name, jd_tt)[:3] for name in ("earthmoon", "moon", "sun"))
        earth = emb - moon / (1.0 + self.emrat)
        return (_ecliptic_lon_deg(moon) - _ecliptic_lon_deg(sun - earth)) % 360.0


# --------------------------
# root finding for elongation targets
# --------------------------

Fn = Callable[[float], float]


def _secant(f: Fn, t0: float, t1: float, *, max_iter: int = 12) -> Optional[float]:
    """Secant iteration; None when it stalls or does not settle."""
    f0, f1 = f(t0), f(t1)
    for _ in range(max_iter):
        if abs(f1) < 1e-8:
            return t1
        if f1 == f0:
            break
        t0, t1 = t1, t1 - f1 * (t1 - t0) / (f1 - f0)
        f0, f1 = f1, f(t1)
    return t1 if abs(f1) < 1e-6 else None


def _bracket(f: Fn, t: float, w: float, w_max: float = 10.0) -> Optional[Tuple[float, float]]:
    while w <= w_max:
        a, b = t - w, t + w
        if f(a) * f(b) <= 0:
            return a, b
        w *= 1.6
    return None


def _bisect(f: Fn, a: float, b: float, max_iter: int = 100) -> float:
    fa = f(a)
    for _ in range(max_iter):
        m = 0.5 * (a + b)
        if m in (a, b):  # interval at float resolution
            break
        fm = f(m)
        if fa * fm <= 0:
            b = m
        else:
            a, fa = m, fm
    return 0.5 * (a + b)


def solve_target_near(el: Elongation, t_guess: float, target_deg: float, halfwidth_days: float = 3.0) -> float:
    """
    TT JD where elong(t) = target_deg, near t_guess.

    Secant first; if it wanders beyond halfwidth_days, bisect a bracket
    around t_guess (widened up to 10 days). RuntimeError if none is found.
    """
    def f(t: float) -> float:
        return wrap180(el.elong_deg(t) - target_deg)

    t = _secant(f, t_guess, t_guess + 0.01)
    if t is not None and abs(t - t_guess) <= halfwidth_days:
        return t

    ab = _bracket(f, t_guess, halfwidth_days)
    if ab is None:
        raise RuntimeError(f"no elongation {target_deg:g} deg found near JD {t_guess:.5f}")
    return _bisect(f, *ab)


def find_phase_near(el: Elongation, jd0: float, phase: str, halfwidth_days: float = 3.0) -> float:
    """
    Instant of `phase` near jd0: coarse grid scan, then refine.
    """
    try:
        import numpy as np
    except ImportError as e:
        raise RuntimeError('This function needs numpy. Install: pip install "lunaphase[ephemeris]"') from e

    target = phase_target_deg(phase)
    grid = np.linspace(jd0 - halfwidth_days, jd0 + halfwidth_days, 241)
    resid = np.abs([wrap180(el.elong_deg(float(t)) - target) for t in grid])
    return solve_target_near(el, float(grid[resid.argmin()]), target, halfwidth_days=1.0)
