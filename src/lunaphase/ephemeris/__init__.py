"""Ephemeris adapters/providers (optional).

Thin wrappers around the JPL DE422 kernel, used to check the series
against a numerical ephemeris. Install with:
  pip install "lunaphase[ephemeris]"
"""
