from __future__ import annotations

import math
import warnings

from ..core.errors import AccuracyWarning, InvalidIndexError
from ..core.time import DateLike, year_decimal
from ..core.types import PHASE_NAMES, PHASE_OFFSETS, PhaseName
from .corrections import periodic_correction, planetary_correction
from .elements import jde_mean_phase, orbital_elements

K_PER_YEAR = 12.3685   # lunations per tropical year
ACCURACY_K_LIMIT = 12000.0  # about 1000 years either side of 2000


def phase_index(k: float) -> int:
    """floor(frac(k) * 4) in {0,1,2,3}; frac is the floored modulo, so negative k work."""
    if not math.isfinite(k):
        return 0
    return int(math.floor((k % 1.0) * 4.0)) % 4


def phase_name(k: float) -> PhaseName:
    return PHASE_NAMES[phase_index(k)]


def require_finite_k(k: float) -> float:
    k = float(k)
    if not math.isfinite(k):
        raise InvalidIndexError(f"lunation index must be finite, got {k!r}")
    return k


def check_accuracy(k: float, *, limit: float = ACCURACY_K_LIMIT, stacklevel: int = 2) -> bool:
    """
    Warn (AccuracyWarning) if k is far from the epoch. Returns True when within limit.

    stacklevel follows warnings.warn, counted from this function.
    """
    if math.isfinite(k) and abs(k) > limit:
        warnings.warn(
            f"k={k:g} is more than {limit:g} lunations from 2000; "
            "phase instants lose accuracy this far from the epoch",
            AccuracyWarning,
            stacklevel=stacklevel,
        )
        return False
    return True


def calculate_jde(k: float, *, stacklevel: int = 2) -> float:
    """
    JDE (dynamical time) of the phase identified by k.

      JDE = JDE0(k) + periodic(phase(k), elements(k)) + planetary(k)

    A non-finite k gives NaN; nothing is raised here. stacklevel places
    the AccuracyWarning (2 = the caller of this function).
    """
    if not math.isfinite(k):
        return math.nan
    check_accuracy(k, stacklevel=stacklevel + 1)
    el = orbital_elements(k)
    return jde_mean_phase(k) + periodic_correction(phase_name(k), el) + planetary_correction(k)


def estimate_k(d: DateLike) -> int:
    """
    Lunation index of the new moon nearest d (Meeus 49.2):
      k ≈ (year - 2000) * 12.3685
    rounded half-up. Add k_for_phase offsets to target other phases.
    """
    x = (year_decimal(d) - 2000.0) * K_PER_YEAR
    return int(math.floor(x + 0.5))


def k_for_phase(k: int, phase: str) -> float:
    if phase not in PHASE_OFFSETS:
        raise ValueError(f"Unknown phase '{phase}'. Available: {list(PHASE_NAMES)}")
    return k + PHASE_OFFSETS[phase]
