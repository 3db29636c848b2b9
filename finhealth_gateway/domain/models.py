"""Domain models - pure Python dataclasses representing business entities"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping


def _as_amount(data: Mapping[str, Any], *keys: str) -> float:
    """Read the first present key as a finite float; anything missing or unusable is 0.0"""
    for key in keys:
        if key not in data or data[key] is None:
            continue
        try:
            value = float(data[key])
        except (TypeError, ValueError):
            return 0.0
        return value if math.isfinite(value) else 0.0
    return 0.0


def _as_flag(value: Any) -> bool:
    """Real booleans pass through; only the string "true" (any case) counts as set"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


class MetricStatus(str, Enum):
    """Three-tier classification of a single metric"""

    GOOD = "good"
    WARNING = "warning"
    POOR = "poor"


class HealthCategory(str, Enum):
    """Bucket for the overall health score"""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_IMPROVEMENT = "Needs Improvement"
    POOR = "Poor"


@dataclass(frozen=True)
class FinancialSnapshot:
    """Point-in-time monthly totals for a user"""

    income: float = 0.0
    expenses: float = 0.0
    balance: float = 0.0  # not used by scoring
    savings: float = 0.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "FinancialSnapshot":
        if not data:
            return cls()
        return cls(
            income=_as_amount(data, "income"),
            expenses=_as_amount(data, "expenses"),
            balance=_as_amount(data, "balance"),
            savings=_as_amount(data, "savings"),
        )


@dataclass(frozen=True)
class Goal:
    """User-defined savings target"""

    current_amount: float = 0.0
    target_amount: float = 0.0
    is_completed: bool = False
    goal_id: str = ""
    name: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Goal":
        """Accepts the provider's camelCase keys as well as snake_case"""
        completed = data.get("isCompleted", data.get("is_completed"))
        return cls(
            current_amount=_as_amount(data, "currentAmount", "current_amount"),
            target_amount=_as_amount(data, "targetAmount", "target_amount"),
            is_completed=_as_flag(completed),
            goal_id=str(data.get("id", data.get("goal_id")) or ""),
            name=str(data.get("name") or ""),
        )

    @property
    def progress(self) -> float:
        """Fraction of target reached, 0.0 when the target is not positive"""
        if self.target_amount <= 0:
            return 0.0
        return self.current_amount / self.target_amount


@dataclass(frozen=True)
class Metric:
    """One normalized sub-score of the health report"""

    score: float
    value: str
    label: str
    description: str
    recommendation: str
    status: MetricStatus


@dataclass(frozen=True)
class HealthReport:
    """Output of a scoring run"""

    overall_score: int
    category: HealthCategory
    metrics: Dict[str, Metric] = field(default_factory=dict)
    recommendations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Transaction:
    """A single income or expense entry, optionally tagged with a budget category"""

    tx_type: str
    amount: float
    category: str = ""


@dataclass(frozen=True)
class Budget:
    """Spending limit for one category over a period"""

    category: str
    limit: float
    spent: float = 0.0
    period: str = "monthly"
    budget_id: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Budget":
        return cls(
            category=str(data.get("category") or ""),
            limit=_as_amount(data, "amount", "limit"),
            spent=_as_amount(data, "spent"),
            period=str(data.get("period") or "monthly"),
            budget_id=str(data.get("id", data.get("budget_id")) or ""),
        )


@dataclass(frozen=True)
class BudgetLine:
    category: str
    limit: float
    spent: float
    remaining: float
    percent_used: float
    over_budget: bool


@dataclass(frozen=True)
class BudgetSummary:
    """Per-category utilization plus overall totals"""

    total_budgeted: float
    total_spent: float
    remaining: float
    lines: List[BudgetLine] = field(default_factory=list)


@dataclass(frozen=True)
class Subscription:
    """Recurring charge billed once per cycle"""

    name: str
    amount: float
    billing_cycle: str = "monthly"
    category: str = ""
    subscription_id: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Subscription":
        """Accepts the provider's camelCase keys as well as snake_case"""
        return cls(
            name=str(data.get("name") or ""),
            amount=_as_amount(data, "amount"),
            billing_cycle=str(data.get("billingCycle", data.get("billing_cycle")) or "monthly"),
            category=str(data.get("category") or ""),
            subscription_id=str(data.get("id", data.get("subscription_id")) or ""),
        )


@dataclass(frozen=True)
class SubscriptionTotals:
    monthly_total: float = 0.0
    yearly_total: float = 0.0
