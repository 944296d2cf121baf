from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from fintrack.models.finance import Goal, Transaction
from fintrack.utils.goals import parse_amount, top_goal

logger = logging.getLogger(__name__)

AmountFormatter = Callable[[float], str]

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def plain_amount(value: float) -> str:
    return f"{value:.2f}"


@dataclass(frozen=True)
class FinancialMetrics:
    """Month totals and the percentages derived from them."""

    income: float
    expenses: float
    total_budget: float
    used_percent: float
    remaining: float
    savings_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PieSlice:
    name: str
    value: float
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    amount: float
    share: float = 0.0  # percent of the month's expenses

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Insight:
    type: str
    title: str
    message: str
    color: str
    icon: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DashboardView:
    reference_month: str
    currency: Optional[str]
    metrics: FinancialMetrics
    pie_chart: List[PieSlice]
    recent_transactions: List[Transaction]
    category_breakdown: List[CategoryTotal]
    insights: List[Insight]
    advisor_tip: str
    transaction_count: int = field(default=0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reference_month": self.reference_month,
            "currency": self.currency,
            "metrics": self.metrics.to_dict(),
            "pie_chart": [item.to_dict() for item in self.pie_chart],
            "recent_transactions": [tx.model_dump() for tx in self.recent_transactions],
            "category_breakdown": [item.to_dict() for item in self.category_breakdown],
            "insights": [item.to_dict() for item in self.insights],
            "advisor_tip": self.advisor_tip,
            "transaction_count": self.transaction_count,
        }


def in_month(transaction: Transaction, reference_month: str) -> bool:
    # Plain prefix match on the ISO string, "2024-01-05" belongs to "2024-01".
    return transaction.date.startswith(reference_month)


def _date_key(transaction: Transaction) -> datetime:
    raw = transaction.date.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class MetricsEngine:
    """
    Turns a user's transactions and goals into the dashboard view model.

    Every method is a pure derivation over its arguments. The instance only
    carries configuration, so one engine can serve any number of callers.
    """

    def __init__(
        self,
        total_budget: float = 2500.0,
        warning_percent: float = 80.0,
        recent_limit: int = 5,
    ) -> None:
        self._total_budget = total_budget
        self._warning_percent = warning_percent
        self._recent_limit = recent_limit

    def compute_metrics(
        self,
        transactions: Sequence[Transaction],
        reference_month: str,
    ) -> FinancialMetrics:
        income = 0.0
        expenses = 0.0
        for tx in transactions:
            if not in_month(tx, reference_month):
                continue
            # Direction comes from the type, never from the amount's sign.
            amount = abs(parse_amount(tx.amount))
            if tx.type == "income":
                income += amount
            elif tx.type == "expense":
                expenses += amount

        total_budget = self._total_budget
        used_percent = expenses / total_budget * 100 if total_budget > 0 else 0.0
        savings_rate = (income - expenses) / income * 100 if income > 0 else 0.0

        return FinancialMetrics(
            income=income,
            expenses=expenses,
            total_budget=total_budget,
            used_percent=used_percent,
            remaining=total_budget - expenses,
            savings_rate=savings_rate,
        )

    @staticmethod
    def build_pie_data(metrics: FinancialMetrics) -> List[PieSlice]:
        candidates = [
            PieSlice("Income", metrics.income, "chart-1"),
            PieSlice("Expenses", metrics.expenses, "chart-2"),
            PieSlice("Savings", metrics.income - metrics.expenses, "primary"),
        ]
        return [item for item in candidates if item.value > 0]

    def select_recent_transactions(
        self,
        transactions: Sequence[Transaction],
        reference_month: str,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        if limit is None:
            limit = self._recent_limit
        month_tx = [tx for tx in transactions if in_month(tx, reference_month)]
        # sorted() is stable with reverse=True, equal dates keep input order
        ordered = sorted(month_tx, key=_date_key, reverse=True)
        return ordered[: max(limit, 0)]

    @staticmethod
    def build_category_breakdown(
        transactions: Sequence[Transaction],
        reference_month: str,
        limit: Optional[int] = None,
    ) -> List[CategoryTotal]:
        totals: Dict[str, float] = {}
        for tx in transactions:
            if tx.type != "expense" or not in_month(tx, reference_month):
                continue
            totals[tx.category] = totals.get(tx.category, 0.0) + abs(parse_amount(tx.amount))

        month_expenses = sum(totals.values())
        ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
        if limit is not None:
            ordered = ordered[: max(limit, 0)]

        return [
            CategoryTotal(
                category=category,
                amount=amount,
                share=amount / month_expenses * 100 if month_expenses > 0 else 0.0,
            )
            for category, amount in ordered
        ]

    def compute_insights(
        self,
        transactions: Sequence[Transaction],
        goals: Sequence[Goal],
        reference_month: str,
        metrics: FinancialMetrics,
        format_amount: Optional[AmountFormatter] = None,
    ) -> List[Insight]:
        """
        Always five insights, in the order savings, spending, goals, habits,
        budget. Missing data yields fallback text instead of a dropped entry.
        """
        fmt = format_amount or plain_amount
        breakdown = self.build_category_breakdown(transactions, reference_month, limit=1)
        best_goal = top_goal(goals)

        if metrics.savings_rate > 0:
            savings_message = (
                f"Excellent! You're saving {metrics.savings_rate:.1f}% of your income this month."
            )
        else:
            savings_message = "Start tracking your income to see your savings rate."

        if breakdown:
            top = breakdown[0]
            spending_message = f"Your top spending is {top.category}: {fmt(top.amount)} this month."
        else:
            spending_message = "No spending data available yet."

        if best_goal is not None:
            goal, progress = best_goal
            goal_message = f"{goal.name} is {progress:.1f}% complete - keep it up!"
        else:
            goal_message = "Set your first goal to start tracking progress!"

        if metrics.used_percent < self._warning_percent:
            habits_message = "Great spending discipline this month!"
        else:
            habits_message = "You're approaching your budget limit - watch your spending!"

        return [
            Insight("savings", "Savings Analysis", savings_message, "green", "TrendingUp"),
            Insight("spending", "Spending Pattern", spending_message, "red", "ShoppingBag"),
            Insight("goals", "Goal Progress", goal_message, "purple", "Target"),
            Insight("habits", "Spending Habits", habits_message, "indigo", "Calendar"),
            Insight(
                "budget",
                "Budget Status",
                f"Budget looking good: {metrics.used_percent:.1f}% used",
                "green",
                "DollarSign",
            ),
        ]

    @staticmethod
    def advisor_tip(metrics: FinancialMetrics) -> str:
        if metrics.savings_rate > 20:
            return (
                "Great financial discipline! You're saving well above average. "
                "Consider increasing your emergency fund goal."
            )
        if metrics.savings_rate > 10:
            return (
                "You're staying within budget. Consider setting up automatic "
                "transfers to boost your savings rate."
            )
        return "Your expenses are high this month. I can help you find areas to optimize - just ask!"

    def summarize(
        self,
        transactions: Sequence[Transaction],
        goals: Sequence[Goal],
        reference_month: str,
        currency: Optional[str] = None,
        format_amount: Optional[AmountFormatter] = None,
        breakdown_limit: Optional[int] = None,
    ) -> DashboardView:
        metrics = self.compute_metrics(transactions, reference_month)
        view = DashboardView(
            reference_month=reference_month,
            currency=currency,
            metrics=metrics,
            pie_chart=self.build_pie_data(metrics),
            recent_transactions=self.select_recent_transactions(transactions, reference_month),
            category_breakdown=self.build_category_breakdown(
                transactions, reference_month, limit=breakdown_limit
            ),
            insights=self.compute_insights(
                transactions, goals, reference_month, metrics, format_amount
            ),
            advisor_tip=self.advisor_tip(metrics),
            transaction_count=len(transactions),
        )
        logger.debug(
            f"Dashboard for {reference_month}: income={metrics.income}, "
            f"expenses={metrics.expenses}, transactions={len(transactions)}"
        )
        return view
