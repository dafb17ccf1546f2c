from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Literal, Tuple

PhaseName = Literal["new_moon", "first_quarter", "full_moon", "last_quarter"]

# Ordered by floor(frac(k) * 4).
PHASE_NAMES: Tuple[PhaseName, ...] = ("new_moon", "first_quarter", "full_moon", "last_quarter")

PHASE_OFFSETS: Dict[str, float] = {
    "new_moon": 0.0,
    "first_quarter": 0.25,
    "full_moon": 0.5,
    "last_quarter": 0.75,
}

PHASE_LABELS: Dict[str, str] = {
    "new_moon": "New Moon",
    "first_quarter": "First Quarter",
    "full_moon": "Full Moon",
    "last_quarter": "Last Quarter",
}

@dataclass(frozen=True)
class PhaseEvent:
    k: float
    phase: PhaseName
    jde: float
    utc: datetime

    @property
    def label(self) -> str:
        return PHASE_LABELS[self.phase]
