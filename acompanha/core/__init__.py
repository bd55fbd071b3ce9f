"""
Core evaluation layers: clinical status, recovery score, roster aggregation
and report data. Pure functions only; no storage or network access.
"""
