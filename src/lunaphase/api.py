from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Sequence

from .core.time import JDE_MIN, DateLike, as_utc, datetime_to_jde, in_datetime_range, jde_to_datetime
from .core.types import PHASE_NAMES, PhaseEvent
from .reference import phases as ph
from .reference.corrections import periodic_correction, planetary_correction, quarter_specific
from .reference.elements import jde_mean_phase, orbital_elements


def calculate_jde(k: float) -> float:
    """Julian Ephemeris Day of the phase event identified by k."""
    return ph.calculate_jde(k, stacklevel=3)

def jde_to_timestamp(jde: float) -> datetime:
    """JDE -> UTC datetime (millisecond precision, no ΔT)."""
    return jde_to_datetime(jde)

def estimate_index_for_date(d: DateLike) -> int:
    """Lunation index of the new moon nearest d."""
    return ph.estimate_k(d)

def _phase_event(k: float, stacklevel: int) -> PhaseEvent:
    k = ph.require_finite_k(k)
    jde = ph.calculate_jde(k, stacklevel=stacklevel + 1)
    return PhaseEvent(k=k, phase=ph.phase_name(k), jde=jde, utc=jde_to_datetime(jde))

def phase_event(k: float) -> PhaseEvent:
    """Phase, JDE and UTC instant for k. Raises DateRangeError outside the years 1-9999."""
    return _phase_event(k, stacklevel=3)

def phases_between(
    start: DateLike,
    end: DateLike,
    *,
    phases: Sequence[str] = PHASE_NAMES,
) -> List[PhaseEvent]:
    """
    Phase instants with start <= utc < end, ordered by k.

    Walks k in quarter steps from the last new moon at or before start
    until an instant reaches end. The walk stays inside the years
    1-9999: instants a datetime cannot hold are skipped at the start and
    end the walk at the far side.
    """
    t0, t1 = as_utc(start), as_utc(end)
    if t0 > t1:
        raise ValueError("start must not be after end")
    for p in phases:
        if p not in PHASE_NAMES:
            raise ValueError(f"Unknown phase '{p}'. Available: {list(PHASE_NAMES)}")

    wanted = set(phases)
    out: List[PhaseEvent] = []
    j0 = datetime_to_jde(t0)
    q = 4 * ph.estimate_k(t0)  # quarter counter, k = q/4 exactly
    # far from 2000 the estimate drifts by weeks
    while ph.calculate_jde(q / 4.0, stacklevel=3) > j0:
        q -= 4
    while ph.calculate_jde(q / 4.0, stacklevel=3) < JDE_MIN:
        q += 1
    while True:
        jde = ph.calculate_jde(q / 4.0, stacklevel=3)
        if not in_datetime_range(jde):
            break
        ev = PhaseEvent(k=q / 4.0, phase=ph.phase_name(q / 4.0), jde=jde, utc=jde_to_datetime(jde))
        if ev.utc >= t1:
            break
        if ev.utc >= t0 and ev.phase in wanted:
            out.append(ev)
        q += 1
    return out

def explain(k: float) -> Dict[str, Any]:
    """Intermediate quantities of the phase computation for k."""
    k = ph.require_finite_k(k)
    name = ph.phase_name(k)
    el = orbital_elements(k)
    jde0 = jde_mean_phase(k)
    periodic = periodic_correction(name, el)
    planetary = planetary_correction(k)
    jde = ph.calculate_jde(k, stacklevel=3)
    w = quarter_specific(el) if name in ("first_quarter", "last_quarter") else 0.0
    return {
        "k": k,
        "phase": name,
        "T": el.T,
        "M_deg": el.M_deg,
        "Mp_deg": el.Mp_deg,
        "F_deg": el.F_deg,
        "Omega_deg": el.Omega_deg,
        "E": el.E,
        "jde_mean": jde0,
        "periodic": periodic,
        "quarter_specific": w,
        "planetary": planetary,
        "jde": jde,
        "utc": jde_to_datetime(jde),
    }
