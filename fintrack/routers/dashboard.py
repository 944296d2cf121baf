import logging
from datetime import datetime, timezone
from typing import Dict, List

from fastapi import APIRouter

from fintrack.core.config import settings
from fintrack.models.finance import ContributionRequest, DashboardRequest
from fintrack.utils.goals import apply_contribution, goal_progress
from fintrack.utils.metrics import DashboardView, MetricsEngine
from fintrack.utils.rotation import InsightRotator

router = APIRouter()
logger = logging.getLogger(__name__)

metrics_engine = MetricsEngine(
    total_budget=settings.TOTAL_BUDGET,
    warning_percent=settings.BUDGET_WARNING_PERCENT,
    recent_limit=settings.RECENT_TRANSACTIONS_LIMIT,
)


def resolve_month(request: DashboardRequest) -> str:
    """The engine never reads the clock; the current UTC month is picked here."""
    if request.reference_month:
        return request.reference_month
    return datetime.now(timezone.utc).strftime("%Y-%m")


def build_view(request: DashboardRequest) -> DashboardView:
    month = resolve_month(request)
    logger.info(
        f"Building dashboard for {month}: "
        f"{len(request.transactions)} transactions, {len(request.goals)} goals"
    )
    return metrics_engine.summarize(
        request.transactions,
        request.goals,
        month,
        currency=request.currency or settings.DEFAULT_CURRENCY,
        breakdown_limit=settings.CATEGORY_BREAKDOWN_LIMIT,
    )


@router.post("")
def get_dashboard(request: DashboardRequest) -> Dict:
    """
    Derive the full dashboard (metrics, chart data, recent activity, category
    breakdown and insights) from the supplied transactions and goals.
    """
    view = build_view(request)
    rotator = InsightRotator(len(view.insights), request.insight_index)
    featured = rotator.select(view.insights)

    body = view.to_dict()
    body.update({
        "featured_insight": featured.to_dict() if featured else None,
        "insight_index": rotator.current,
        "next_index": rotator.peek_next(),
        "previous_index": rotator.peek_previous(),
        "rotation_interval_seconds": settings.INSIGHT_ROTATION_SECONDS,
    })
    return body


@router.post("/insights")
def get_insights(request: DashboardRequest) -> List[Dict]:
    month = resolve_month(request)
    metrics = metrics_engine.compute_metrics(request.transactions, month)
    insights = metrics_engine.compute_insights(request.transactions, request.goals, month, metrics)
    return [item.to_dict() for item in insights]


@router.post("/goals/contribution")
def contribute_to_goal(request: ContributionRequest) -> Dict:
    """
    Add a contribution to a goal's current balance. Amounts that do not parse
    leave the goal unchanged.
    """
    goal = apply_contribution(request.goal, request.amount)
    return {
        "goal": goal.model_dump(),
        "progress": goal_progress(goal),
        "applied": goal is not request.goal,
    }
