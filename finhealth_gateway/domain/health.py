"""Financial health scoring engine - core business logic for health reports"""

import math
from typing import Dict, Iterable, List, Optional
from finhealth_gateway.domain.models import (
    FinancialSnapshot,
    Goal,
    HealthCategory,
    HealthReport,
    Metric,
    MetricStatus,
)

# No debt data exists for users, so debt payments are approximated as a
# fixed share of monthly expenses. Treat debtToIncome as an estimate.
ASSUMED_DEBT_SHARE_OF_EXPENSES = 0.30

METRIC_ORDER = ("emergencyFund", "savingsRate", "debtToIncome", "spendingRatio", "goalProgress")

METRIC_WEIGHTS: Dict[str, float] = {
    "emergencyFund": 0.25,
    "savingsRate": 0.20,
    "debtToIncome": 0.25,
    "spendingRatio": 0.20,
    "goalProgress": 0.10,
}

MAX_RECOMMENDATIONS = 5
MIN_RECOMMENDATIONS_BEFORE_FILLERS = 3

# (keyword, text): a filler is skipped when a collected recommendation already mentions its keyword
FILLER_RECOMMENDATIONS = (
    ("automate", "Set up automatic transfers to your savings account to make saving easier"),
    ("budget", "Create a detailed budget to track and control your spending"),
    ("review", "Review your subscriptions and recurring expenses to identify potential savings"),
)


def _ratio(numerator: float, denominator: float) -> float:
    """Division that yields 0.0 for a zero (or negative) divisor"""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def _percentage(numerator: float, denominator: float) -> float:
    """Multiplies before dividing so boundaries like 80% come out exact"""
    if denominator <= 0:
        return 0.0
    value = numerator * 100 / denominator
    if math.isinf(value):
        # numerator * 100 overflowed; divide first
        value = numerator / denominator * 100
    return value


def _clamp_score(score: float) -> float:
    """NaN scores as 0; infinities saturate at the bounds"""
    if math.isnan(score):
        return 0.0
    return max(0.0, min(100.0, score))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def emergency_fund_metric(snapshot: FinancialSnapshot) -> Metric:
    """
    Months of expenses covered by savings.

    Ideal is 3-6 months; the score saturates at 6.
    """
    months = _ratio(snapshot.savings, snapshot.expenses)

    if months >= 3:
        status = MetricStatus.GOOD
    elif months >= 1:
        status = MetricStatus.WARNING
    else:
        status = MetricStatus.POOR

    return Metric(
        score=_clamp_score(months / 6 * 100),
        value=f"{months:.1f}",
        label="Emergency Fund",
        description="Months of expenses covered by savings",
        recommendation=(
            "Your emergency fund is in good shape"
            if status is MetricStatus.GOOD
            else "Aim to save at least 3-6 months of expenses for emergencies"
        ),
        status=status,
    )


def savings_rate_metric(snapshot: FinancialSnapshot) -> Metric:
    """Savings as a percentage of income; full marks at 20%"""
    rate = _percentage(snapshot.savings, snapshot.income)

    if rate >= 20:
        status = MetricStatus.GOOD
    elif rate >= 10:
        status = MetricStatus.WARNING
    else:
        status = MetricStatus.POOR

    return Metric(
        score=_clamp_score(rate / 20 * 100),
        value=f"{rate:.1f}%",
        label="Savings Rate",
        description="Percentage of income saved",
        recommendation=(
            "Your savings rate is excellent"
            if status is MetricStatus.GOOD
            else "Try to save at least 20% of your income"
        ),
        status=status,
    )


def debt_to_income_metric(snapshot: FinancialSnapshot) -> Metric:
    """
    Estimated monthly debt payments as a percentage of income.

    Thresholds follow the common lending guideline: 36% healthy, 43% ceiling.
    """
    debt_payments = snapshot.expenses * ASSUMED_DEBT_SHARE_OF_EXPENSES
    ratio = _percentage(debt_payments, snapshot.income)

    if ratio <= 36:
        status = MetricStatus.GOOD
    elif ratio <= 43:
        status = MetricStatus.WARNING
    else:
        status = MetricStatus.POOR

    return Metric(
        score=_clamp_score((1 - ratio / 36) * 100),
        value=f"{ratio:.1f}%",
        label="Debt-to-Income Ratio",
        description="Percentage of income going to debt payments",
        recommendation=(
            "Your debt-to-income ratio is healthy"
            if status is MetricStatus.GOOD
            else "Work on reducing your debt to below 36% of your income"
        ),
        status=status,
    )


def spending_ratio_metric(snapshot: FinancialSnapshot) -> Metric:
    """Expenses as a percentage of income; anything at or above 80% scores zero"""
    ratio = _percentage(snapshot.expenses, snapshot.income)

    if ratio <= 80:
        status = MetricStatus.GOOD
    elif ratio <= 90:
        status = MetricStatus.WARNING
    else:
        status = MetricStatus.POOR

    return Metric(
        score=_clamp_score((1 - ratio / 80) * 100),
        value=f"{ratio:.1f}%",
        label="Spending Ratio",
        description="Percentage of income spent",
        recommendation=(
            "Your spending is well-controlled"
            if status is MetricStatus.GOOD
            else "Try to reduce your spending to below 80% of your income"
        ),
        status=status,
    )


def goal_progress_metric(goals: Iterable[Goal]) -> Metric:
    """Average progress across all goals, completed ones included"""
    goals = list(goals)
    progress = sum(g.progress for g in goals) * 100 / len(goals) if goals else 0.0

    if progress >= 50:
        status = MetricStatus.GOOD
    elif progress >= 25:
        status = MetricStatus.WARNING
    else:
        status = MetricStatus.POOR

    return Metric(
        score=_clamp_score(progress),
        value=f"{progress:.1f}%",
        label="Goal Progress",
        description="Average progress towards financial goals",
        recommendation=(
            "You're making good progress on your goals"
            if status is MetricStatus.GOOD
            else "Consider allocating more resources to your financial goals"
        ),
        status=status,
    )


def calculate_overall_score(metrics: Dict[str, Metric]) -> int:
    """Weighted sum of metric scores, rounded half-up into 0-100"""
    weighted = _clamp_score(
        sum(metrics[name].score * weight for name, weight in METRIC_WEIGHTS.items() if name in metrics)
    )
    return _round_half_up(weighted)


def categorize(score: float) -> HealthCategory:
    """
    Map overall score to a category. Lower bounds are inclusive.

    - 80+:   Excellent
    - 70-79: Good
    - 60-69: Fair
    - 40-59: Needs Improvement
    - <40:   Poor
    """
    if score >= 80:
        return HealthCategory.EXCELLENT
    elif score >= 70:
        return HealthCategory.GOOD
    elif score >= 60:
        return HealthCategory.FAIR
    elif score >= 40:
        return HealthCategory.NEEDS_IMPROVEMENT
    else:
        return HealthCategory.POOR


def build_recommendations(metrics: Dict[str, Metric]) -> List[str]:
    """
    Rank recommendations for the report.

    Non-good metrics contribute their advice in metric order. Short lists are
    padded with generic fillers whose topic is not already covered, then the
    whole list is capped.
    """
    recommendations = [
        metrics[name].recommendation
        for name in METRIC_ORDER
        if name in metrics and metrics[name].status is not MetricStatus.GOOD
    ]

    if len(recommendations) < MIN_RECOMMENDATIONS_BEFORE_FILLERS:
        for keyword, text in FILLER_RECOMMENDATIONS:
            if text in recommendations or any(keyword in rec.lower() for rec in recommendations):
                continue
            recommendations.append(text)

    return recommendations[:MAX_RECOMMENDATIONS]


def compute_health(snapshot: Optional[FinancialSnapshot], goals: Optional[Iterable[Goal]] = None) -> HealthReport:
    """
    Main entry point: score a snapshot and goal list.

    Pure and deterministic. Missing inputs score as zeros instead of raising.
    """
    if snapshot is None:
        snapshot = FinancialSnapshot()

    metrics = {
        "emergencyFund": emergency_fund_metric(snapshot),
        "savingsRate": savings_rate_metric(snapshot),
        "debtToIncome": debt_to_income_metric(snapshot),
        "spendingRatio": spending_ratio_metric(snapshot),
        "goalProgress": goal_progress_metric(goals or []),
    }

    overall_score = calculate_overall_score(metrics)

    return HealthReport(
        overall_score=overall_score,
        category=categorize(overall_score),
        metrics=metrics,
        recommendations=build_recommendations(metrics),
    )
