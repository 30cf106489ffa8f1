"""Data quality inspection for fetched bars.

Provider data is trusted as-is: these checks never reject a series, they
only report what looks wrong so the manager can log it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from stockterm.models.bar import Bar


@dataclass
class InspectionCheck:
    """Single inspection check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class InspectionResult:
    """Aggregate inspection result."""

    checks: list[InspectionCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[InspectionCheck]:
        return [c for c in self.checks if not c.passed]


def inspect_bars(bars: list[Bar]) -> InspectionResult:
    """Run all quality checks on a list of bars.

    Checks:
        1. Not empty
        2. No NaN/Inf OHLCV
        3. Zeroed bars (all of OHLC parsed to 0.0)
        4. Volume sanity (non-negative)
        5. Label ordering (oldest first)
        6. OHLC consistency (high >= low, high >= open/close)
    """
    result = InspectionResult()

    # 1. Not empty
    if not bars:
        result.checks.append(InspectionCheck("not_empty", False, "No bars provided"))
        return result
    result.checks.append(InspectionCheck("not_empty", True, f"{len(bars)} bars"))

    # 2. NaN/Inf
    bad = 0
    for b in bars:
        for val in (b.open, b.high, b.low, b.close, b.volume):
            if math.isnan(val) or math.isinf(val):
                bad += 1
    if bad:
        result.checks.append(InspectionCheck("no_nulls", False, f"{bad} NaN/Inf values"))
    else:
        result.checks.append(InspectionCheck("no_nulls", True))

    # 3. Zeroed bars
    zeroed = sum(1 for b in bars if b.open == b.high == b.low == b.close == 0)
    if zeroed:
        result.checks.append(
            InspectionCheck("zeroed_bars", False, f"{zeroed} bars with all-zero OHLC")
        )
    else:
        result.checks.append(InspectionCheck("zeroed_bars", True))

    # 4. Volume sanity
    neg_vol = sum(1 for b in bars if b.volume < 0)
    if neg_vol:
        result.checks.append(
            InspectionCheck("volume_sanity", False, f"{neg_vol} bars with negative volume")
        )
    else:
        result.checks.append(InspectionCheck("volume_sanity", True))

    # 5. Label ordering; labels are ISO-like so string order is time order
    out_of_order = 0
    for i in range(1, len(bars)):
        if bars[i].label < bars[i - 1].label:
            out_of_order += 1
    if out_of_order:
        result.checks.append(
            InspectionCheck("label_order", False, f"{out_of_order} out of order")
        )
    else:
        result.checks.append(InspectionCheck("label_order", True))

    # 6. OHLC consistency
    inconsistent = 0
    for b in bars:
        if b.high < b.low:
            inconsistent += 1
        elif b.high < b.open or b.high < b.close:
            inconsistent += 1
        elif b.low > b.open or b.low > b.close:
            inconsistent += 1
    if inconsistent:
        result.checks.append(
            InspectionCheck("ohlc_consistency", False, f"{inconsistent} bars with H<L or H<O/C")
        )
    else:
        result.checks.append(InspectionCheck("ohlc_consistency", True))

    return result
