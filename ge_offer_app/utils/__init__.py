"""
Utility functions module.

Time Semantics:
- Tick timestamps are epoch seconds marking the start of a 5-minute bucket
- Grids are anchored at the earliest retained observation, never at wall-clock time
"""
