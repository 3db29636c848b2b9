"""Unit tests for building domain models from provider payloads"""

from finhealth_gateway.domain.models import FinancialSnapshot, Goal


def test_snapshot_from_mapping_defaults_missing_fields():
    snapshot = FinancialSnapshot.from_mapping({"income": 4000, "savings": None})

    assert snapshot.income == 4000
    assert snapshot.expenses == 0.0
    assert snapshot.balance == 0.0
    assert snapshot.savings == 0.0


def test_snapshot_from_mapping_keeps_explicit_zero_and_negative_balance():
    snapshot = FinancialSnapshot.from_mapping({"income": 0, "expenses": 10, "balance": -250.5, "savings": 0})

    assert snapshot == FinancialSnapshot(income=0.0, expenses=10.0, balance=-250.5, savings=0.0)


def test_snapshot_from_mapping_invalid_values():
    snapshot = FinancialSnapshot.from_mapping({"income": "abc", "expenses": float("nan"), "savings": "1200.50"})

    assert snapshot.income == 0.0
    assert snapshot.expenses == 0.0
    assert snapshot.savings == 1200.5


def test_snapshot_from_empty_mapping():
    assert FinancialSnapshot.from_mapping(None) == FinancialSnapshot()
    assert FinancialSnapshot.from_mapping({}) == FinancialSnapshot()


def test_goal_from_camel_case_mapping():
    goal = Goal.from_mapping(
        {"id": "goal-7", "name": "House", "currentAmount": 2500, "targetAmount": 10000, "isCompleted": False}
    )

    assert goal.goal_id == "goal-7"
    assert goal.name == "House"
    assert goal.current_amount == 2500
    assert goal.target_amount == 10000
    assert goal.is_completed is False
    assert goal.progress == 0.25


def test_goal_from_snake_case_mapping():
    goal = Goal.from_mapping({"current_amount": 50, "target_amount": 100, "is_completed": True})

    assert goal.current_amount == 50
    assert goal.is_completed is True
    assert goal.goal_id == ""


def test_goal_progress_guards_zero_target():
    assert Goal(current_amount=100, target_amount=0).progress == 0.0


def test_goal_completion_string_flags():
    assert Goal.from_mapping({"isCompleted": "false"}).is_completed is False
    assert Goal.from_mapping({"isCompleted": "False"}).is_completed is False
    assert Goal.from_mapping({"isCompleted": "true"}).is_completed is True
    assert Goal.from_mapping({"isCompleted": " TRUE "}).is_completed is True


def test_goal_completion_non_boolean_values_are_not_set():
    assert Goal.from_mapping({"isCompleted": 1}).is_completed is False
    assert Goal.from_mapping({"isCompleted": "yes"}).is_completed is False
    assert Goal.from_mapping({"isCompleted": None}).is_completed is False
    assert Goal.from_mapping({}).is_completed is False
