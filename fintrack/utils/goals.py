"""
Goal helpers shared by the metrics engine and the HTTP layer.

Amounts arrive as decimal strings or numbers; anything that does not parse to
a finite number counts as 0.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Optional, Sequence, Tuple

from fintrack.models.finance import Goal

logger = logging.getLogger(__name__)


def to_number(value: Any) -> Optional[float]:
    """Finite float for ``value``, or None when it is missing, boolean or malformed."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_amount(value: Any) -> float:
    number = to_number(value)
    if number is None:
        if value is not None:
            logger.warning(f"Malformed amount {value!r}, using 0")
        return 0.0
    return number


def goal_progress(goal: Goal) -> float:
    """Percentage of the target reached; 0 when the target is not positive."""
    target = parse_amount(goal.target)
    if target <= 0:
        return 0.0
    return parse_amount(goal.current) / target * 100


def top_goal(goals: Sequence[Goal]) -> Optional[Tuple[Goal, float]]:
    """
    Goal with the highest progress. The first one wins a tie so the result
    follows input order.
    """
    best: Optional[Tuple[Goal, float]] = None
    for goal in goals:
        progress = goal_progress(goal)
        if best is None or progress > best[1]:
            best = (goal, progress)
    return best


def apply_contribution(goal: Goal, amount: Any) -> Goal:
    """
    Return a copy of ``goal`` with ``amount`` added to its current balance.
    Unparseable contributions leave the goal untouched.
    """
    contribution = to_number(amount)
    if contribution is None:
        logger.info(f"Skipping contribution {amount!r} to goal {goal.name}")
        return goal

    new_current = parse_amount(goal.current) + contribution
    return goal.model_copy(update={"current": str(new_current)})
