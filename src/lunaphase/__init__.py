"""lunaphase public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    calculate_jde,
    jde_to_timestamp,
    estimate_index_for_date,
    phase_event,
    phases_between,
    explain,
)
from .core.errors import AccuracyWarning, DateRangeError, InvalidIndexError, LunaphaseError
from .core.types import PHASE_NAMES, PHASE_OFFSETS, PhaseEvent

__all__ = [
    "calculate_jde",
    "jde_to_timestamp",
    "estimate_index_for_date",
    "phase_event",
    "phases_between",
    "explain",
    "AccuracyWarning",
    "DateRangeError",
    "InvalidIndexError",
    "LunaphaseError",
    "PHASE_NAMES",
    "PHASE_OFFSETS",
    "PhaseEvent",
]
