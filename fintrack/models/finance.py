from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field

# Numeric fields stay loosely typed; the metrics engine applies its own
# lenient parse so a bad value degrades to 0 instead of rejecting the request.
Amount = Union[float, int, str, None]

MONTH_PATTERN = r"^\d{4}-\d{2}$"


class Transaction(BaseModel):
    id: Optional[Union[int, str]] = None
    date: str
    amount: Amount = 0
    type: Literal["income", "expense"]
    category: str = ""
    description: Optional[str] = ""


class Goal(BaseModel):
    id: Optional[Union[int, str]] = None
    name: str
    current: Amount = "0"
    target: Amount = "0"


class DashboardRequest(BaseModel):
    transactions: List[Transaction] = Field(default_factory=list)
    goals: List[Goal] = Field(default_factory=list)
    reference_month: Optional[str] = Field(default=None, pattern=MONTH_PATTERN)  # e.g. 2025-11
    currency: Optional[str] = None
    insight_index: int = 0


class ContributionRequest(BaseModel):
    goal: Goal
    amount: Any = None  # checked by the goal helpers, not coerced here
