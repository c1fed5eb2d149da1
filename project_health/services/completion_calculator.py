"""
Weighted milestone completion.

Each milestone's completion is weighted by its importance (1-5, default 3)
and the weighted mean is rounded to a whole percentage.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from project_health.models.milestone import Milestone


def round_half_up(value: float) -> int:
    """Round .5 away from zero instead of to the nearest even number."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def weighted_completion(milestones: Sequence[Milestone]) -> int:
    """
    Reduce milestones to one completion percentage.

    Args:
        milestones: Milestones to aggregate (may be empty)

    Returns:
        int: ``round(sum(completion * weight) / sum(weight))`` in [0, 100];
        0 for an empty list
    """
    if not milestones:
        return 0

    weighted_sum = sum(m.completion * m.weight for m in milestones)
    total_weight = sum(m.weight for m in milestones)
    return round_half_up(weighted_sum / total_weight)
