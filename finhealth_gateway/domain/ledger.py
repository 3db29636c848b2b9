"""Snapshot and goal updates driven by new transactions and contributions"""

import math
from dataclasses import replace
from finhealth_gateway.domain.models import FinancialSnapshot, Goal
from finhealth_gateway.domain.exceptions import InvalidTransactionError

TRANSACTION_TYPES = ("income", "expense")


def _validate_amount(amount: float) -> float:
    try:
        amount = float(amount)
    except (TypeError, ValueError) as e:
        raise InvalidTransactionError(f"Amount is not a number: {amount!r}") from e
    if not math.isfinite(amount) or amount < 0:
        raise InvalidTransactionError(f"Amount must be a non-negative number, got {amount}")
    return amount


def apply_transaction(snapshot: FinancialSnapshot, tx_type: str, amount: float) -> FinancialSnapshot:
    """
    Fold a single transaction into the monthly totals.

    - income:  adds to income and balance
    - expense: adds to expenses, subtracts from balance

    Savings are left alone; moving money into savings is a goal contribution.

    Raises:
        InvalidTransactionError: Unknown type, negative or non-numeric amount
    """
    amount = _validate_amount(amount)

    if tx_type == "income":
        return replace(
            snapshot,
            income=snapshot.income + amount,
            balance=snapshot.balance + amount,
        )
    elif tx_type == "expense":
        return replace(
            snapshot,
            expenses=snapshot.expenses + amount,
            balance=snapshot.balance - amount,
        )

    raise InvalidTransactionError(f"Unknown transaction type: {tx_type!r} (expected one of {TRANSACTION_TYPES})")


def apply_goal_contribution(goal: Goal, amount: float) -> Goal:
    """
    Add a contribution to a goal and recompute completion.

    Example:
        current 900, target 1000, +100 → current 1000, completed
    """
    amount = _validate_amount(amount)
    new_amount = goal.current_amount + amount

    return replace(
        goal,
        current_amount=new_amount,
        is_completed=new_amount >= goal.target_amount,
    )
