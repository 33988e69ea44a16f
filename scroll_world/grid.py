# scroll_world/grid.py

"""
================================================================================
TILE GRID ALLOCATOR
================================================================================
Snaps arbitrary coordinates onto the fixed tile grid so that independently
requested ranges always enumerate the same grid positions.

Data Contract:
---------------
- Inputs: integer or float coordinates, and the grid unit (positive integer).
- Outputs: grid-aligned integers.
- Side Effects: None.
- Invariants: snap_down(n, unit) % unit == 0 and snap_down(n, unit) <= n,
  including for negative n (floor division, never truncation).
================================================================================
"""

import math


def snap_down(n: float, unit: int) -> int:
    """Returns the largest multiple of unit that is <= n."""
    if unit <= 0:
        raise ValueError(f"grid unit must be positive, got {unit!r}")
    if isinstance(n, int):
        # Exact for ints of any size.
        return n // unit * unit
    return math.floor(n / unit) * unit


def snap_up(n: float, unit: int) -> int:
    """Returns the smallest multiple of unit that is >= n."""
    return -snap_down(-n, unit)


def grid_range(min_x: float, max_x: float, unit: int) -> range:
    """
    Every grid x in [snap_down(min_x), snap_down(max_x)), in increasing order.
    An inverted range is simply empty.
    """
    start = snap_down(min_x, unit)
    stop = snap_down(max_x, unit)
    return range(start, stop, unit)
