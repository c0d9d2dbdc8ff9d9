# src/leasehold/domain/relativity.py
from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

import numpy as np

from leasehold.domain.errors import InvalidInput


# (remaining years, fraction of freehold value) anchors.
# Steep below 80 years, flat towards the saturation term.
DEFAULT_ANCHORS: tuple[tuple[int, float], ...] = (
    (1, 0.060),
    (5, 0.190),
    (10, 0.330),
    (15, 0.430),
    (20, 0.520),
    (25, 0.580),
    (30, 0.630),
    (35, 0.680),
    (40, 0.720),
    (45, 0.760),
    (50, 0.790),
    (55, 0.820),
    (60, 0.850),
    (65, 0.875),
    (70, 0.898),
    (75, 0.918),
    (80, 0.936),
    (85, 0.951),
    (90, 0.963),
    (95, 0.973),
    (99, 0.980),
    (110, 0.990),
    (125, 0.996),
    (150, 1.000),
)


class RelativityTable:
    """
    Lease term -> relativity lookup over a sorted anchor table.

    Rules:
      - between anchors the fraction is linearly interpolated
      - terms below the first anchor or above the last are clamped
        to the boundary value (no error)
    """

    def __init__(self, anchors: Iterable[tuple[int, float]] = DEFAULT_ANCHORS):
        pairs = tuple((int(y), float(f)) for y, f in anchors)
        _check_anchors(pairs)
        self._anchors = pairs
        self._years = np.array([y for y, _ in pairs], dtype=float)
        self._fractions = np.array([f for _, f in pairs], dtype=float)
        self._years.setflags(write=False)
        self._fractions.setflags(write=False)

    @property
    def anchors(self) -> tuple[tuple[int, float], ...]:
        return self._anchors

    @property
    def min_years(self) -> int:
        return self._anchors[0][0]

    @property
    def max_years(self) -> int:
        return self._anchors[-1][0]

    def lookup(self, remaining_years: int) -> float:
        years = _finite_years(remaining_years)
        # np.interp holds the end values outside [xp[0], xp[-1]]
        return float(np.interp(years, self._years, self._fractions))

    def curve(self, years: Sequence[int]) -> list[float]:
        xs = np.asarray([_finite_years(y) for y in years], dtype=float)
        values = np.interp(xs, self._years, self._fractions)
        return [float(v) for v in values]


def _finite_years(remaining_years) -> float:
    try:
        years = float(remaining_years)
    except (TypeError, ValueError) as err:
        raise InvalidInput(f"remaining_years must be a number, got {remaining_years!r}") from err
    if not math.isfinite(years):
        raise InvalidInput(f"remaining_years must be finite, got {remaining_years!r}")
    return years


def _check_anchors(pairs: tuple[tuple[int, float], ...]) -> None:
    if len(pairs) < 2:
        raise InvalidInput("relativity table needs at least two anchors")

    prev_year, prev_frac = None, None
    for year, frac in pairs:
        if not math.isfinite(frac) or frac <= 0.0 or frac > 1.0:
            raise InvalidInput(f"relativity at {year} years must be in (0, 1], got {frac}")
        if prev_year is not None:
            if year <= prev_year:
                raise InvalidInput("relativity anchors must be strictly increasing in years")
            if frac < prev_frac:
                raise InvalidInput(
                    f"relativity must not decrease with term ({prev_year}y={prev_frac}, {year}y={frac})"
                )
        prev_year, prev_frac = year, frac


default_table = RelativityTable()


def lookup_relativity(remaining_years: int) -> float:
    return default_table.lookup(remaining_years)
