"""Budget utilization and recurring subscription costs"""

from typing import Dict, Iterable, List, Optional
from finhealth_gateway.domain.models import (
    Budget,
    BudgetLine,
    BudgetSummary,
    Subscription,
    SubscriptionTotals,
    Transaction,
)

# billing cycle -> (multiplier to a monthly amount, multiplier to a yearly amount)
CYCLE_FACTORS: Dict[str, tuple] = {
    "weekly": (4.33, 52),
    "monthly": (1, 12),
    "quarterly": (1 / 3, 4),
    "yearly": (1 / 12, 1),
}


def _percent_used(spent: float, limit: float) -> float:
    """Share of the limit consumed, in [0, 100]; a zero limit reads as unused"""
    if limit <= 0:
        return 0.0
    return max(0.0, min(100.0, spent * 100 / limit))


def spent_by_category(transactions: Iterable[Transaction]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for tx in transactions:
        if tx.tx_type == "expense":
            totals[tx.category] = totals.get(tx.category, 0.0) + tx.amount
    return totals


def summarize_budgets(budgets: List[Budget], transactions: Optional[List[Transaction]] = None) -> BudgetSummary:
    """
    Compare each budget's spending against its limit.

    When transactions are given, each category's spending is recomputed
    from its expense transactions and the stored spent amount is ignored.

    Example:
        Food limit 600, spent 458.12 → 76.35% used, 141.88 remaining
    """
    spent_lookup = spent_by_category(transactions) if transactions is not None else None

    lines = []
    for budget in budgets:
        spent = budget.spent if spent_lookup is None else spent_lookup.get(budget.category, 0.0)
        lines.append(
            BudgetLine(
                category=budget.category,
                limit=budget.limit,
                spent=spent,
                remaining=budget.limit - spent,
                percent_used=_percent_used(spent, budget.limit),
                over_budget=spent > budget.limit,
            )
        )

    total_budgeted = sum(line.limit for line in lines)
    total_spent = sum(line.spent for line in lines)
    return BudgetSummary(
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        remaining=total_budgeted - total_spent,
        lines=lines,
    )


def subscription_totals(subscriptions: Iterable[Subscription]) -> SubscriptionTotals:
    """
    Normalize recurring charges to monthly and yearly totals.

    Subscriptions with an unrecognized billing cycle are left out.
    """
    monthly_total = 0.0
    yearly_total = 0.0
    for sub in subscriptions:
        factors = CYCLE_FACTORS.get(sub.billing_cycle)
        if factors is None:
            continue
        to_month, to_year = factors
        monthly_total += sub.amount * to_month
        yearly_total += sub.amount * to_year

    return SubscriptionTotals(monthly_total=monthly_total, yearly_total=yearly_total)
