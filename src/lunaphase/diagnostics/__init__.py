"""Diagnostics package.

- diagnostics.validate_phases: optional (requires ephemeris extras + DE422)
"""

__all__ = ["validate_phases"]
