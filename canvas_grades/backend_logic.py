import logging
import math
import re
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Literal, Optional, Sequence, Tuple

import numpy as np

from .model import Assignment, Category

logger = logging.getLogger(__name__)

OutcomeKind = Literal[
    "invalid_points",
    "invalid_target",
    "no_category_selected",
    "zero_weight_category",
    "already_met",
    "unreachable",
    "required",
]


# ------------------------
# Core logic
# ------------------------
def round_half_up(x: float, decimals: int = 2) -> float:
    if not math.isfinite(x):
        return x
    return float(Decimal(str(x)).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP))


def category_totals(category: Category) -> Tuple[float, float]:
    """
    returns: (points earned, points possible) summed over the category
    """
    if not category.assignments:
        return 0.0, 0.0

    points = np.array(
        [[a.points_earned, a.points_possible] for a in category.assignments],
        dtype=float,
    )
    earned, possible = points.sum(axis=0)
    return float(earned), float(possible)


def category_average(category: Category) -> float:
    """
    Earned / possible as a fraction. A category with no possible points
    counts as 0, not as missing.
    """
    earned, possible = category_totals(category)
    if possible <= 0:
        return 0.0
    return earned / possible


def total_weight(categories: Sequence[Category]) -> float:
    return float(sum(c.weight for c in categories))


def overall_grade(categories: Sequence[Category]) -> float:
    """
    Weighted grade in percent: sum of category average * category weight.

    Weights are already percentage points, so a perfect average in a
    30-weight category contributes 30. Weights are not normalised; when they
    do not add up to 100 the grade simply does not top out at 100.
    """
    if total_weight(categories) <= 0:
        return 0.0

    averages = np.array([category_average(c) for c in categories], dtype=float)
    weights = np.array([c.weight for c in categories], dtype=float)
    return float(np.dot(averages, weights))


# ------------------------
# Goal solving
# ------------------------

@dataclass
class GoalOutcome:
    """
    Result of solving for the points needed on one more assignment.

    Only "required" carries points; "unreachable" carries the category name
    and target so the caller can explain which goal cannot be met. Once a
    category is resolved, category_id and max_points record the inputs the
    result was computed from.
    """
    kind: OutcomeKind
    category_id: Optional[int] = None
    max_points: float = math.nan
    category_name: str = ""
    target_percent: float = math.nan
    required_fraction: float = math.nan
    points: float = math.nan
    percentage_of_max: float = math.nan


def _strict_number(value) -> Optional[float]:
    # Unlike coerce_number, blanks and junk are reported rather than zeroed
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


_CATEGORY_ID = re.compile(r"[0-9]+")


def _find_category(categories: Sequence[Category], category_id) -> Optional[Category]:
    # Only whole ids count: 1.9 or True must not select category 1
    if isinstance(category_id, str) and _CATEGORY_ID.fullmatch(category_id):
        category_id = int(category_id)
    elif isinstance(category_id, bool) or not isinstance(category_id, int):
        return None
    for category in categories:
        if category.id == category_id:
            return category
    return None


def other_categories_contribution(categories: Sequence[Category], selected: Category) -> float:
    """Fraction of the overall grade already secured by every other category."""
    return float(sum(
        (c.weight / 100) * category_average(c)
        for c in categories
        if c.id != selected.id
    ))


def solve_required_points(
    categories: List[Category],
    target_percent,
    category_id,
    hypothetical_max_points,
) -> GoalOutcome:
    """
    Points needed on a new assignment worth hypothetical_max_points, added to
    the chosen category, for the overall grade to reach target_percent.

    Checks run in order: points, target, category, category weight.
    """
    max_points = _strict_number(hypothetical_max_points)
    if max_points is None or max_points <= 0:
        return GoalOutcome(kind="invalid_points")

    target = _strict_number(target_percent)
    if target is None:
        return GoalOutcome(kind="invalid_target")

    category = _find_category(categories, category_id)
    if category is None:
        return GoalOutcome(kind="no_category_selected", target_percent=target)

    weight_fraction = category.weight / 100
    if weight_fraction <= 0:
        return GoalOutcome(
            kind="zero_weight_category",
            category_id=category.id,
            max_points=max_points,
            category_name=category.name,
            target_percent=target,
        )

    target_fraction = target / 100
    other = other_categories_contribution(categories, category)
    current_earned, current_possible = category_totals(category)

    required_fraction = (target_fraction - other) / weight_fraction
    new_total_possible = current_possible + max_points
    required_points = required_fraction * new_total_possible - current_earned

    logger.debug(
        "Solving for %r: target=%s other=%s required_fraction=%s required_points=%s",
        category.name, target, other, required_fraction, required_points,
    )

    if required_fraction < 0:
        return GoalOutcome(
            kind="already_met",
            category_id=category.id,
            max_points=max_points,
            category_name=category.name,
            target_percent=target,
            required_fraction=required_fraction,
        )

    if required_points > max_points:
        return GoalOutcome(
            kind="unreachable",
            category_id=category.id,
            max_points=max_points,
            category_name=category.name,
            target_percent=target,
            required_fraction=required_fraction,
        )

    # Can still dip below zero when the category's own average already covers the target
    points = max(0.0, required_points)
    return GoalOutcome(
        kind="required",
        category_id=category.id,
        max_points=max_points,
        category_name=category.name,
        target_percent=target,
        required_fraction=required_fraction,
        points=points,
        percentage_of_max=points / max_points * 100,
    )


def projected_grade(categories: Sequence[Category], category_id: int, points_earned: float,
                    points_possible: float) -> Optional[float]:
    """
    Overall grade if one more assignment scored points_earned / points_possible
    were added to the given category, or None when no such category exists.
    The categories are left untouched.
    """
    target = _find_category(categories, category_id)
    if target is None:
        return None

    projected = []
    for c in categories:
        if c.id == target.id:
            extra = Assignment(id=0, name="Projected", points_earned=points_earned,
                               points_possible=points_possible)
            c = replace(c, assignments=c.assignments + [extra])
        projected.append(c)
    return overall_grade(projected)
