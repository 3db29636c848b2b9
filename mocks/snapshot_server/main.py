from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from pathlib import Path
from dataclasses import asdict, replace
import json
import os

from finhealth_gateway.domain.exceptions import InvalidTransactionError
from finhealth_gateway.domain.ledger import apply_goal_contribution, apply_transaction
from finhealth_gateway.domain.models import Budget, FinancialSnapshot, Goal, Subscription
from finhealth_gateway.domain.spending import subscription_totals, summarize_budgets

app = FastAPI(title="Mock Snapshot Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/snapshot_stub") if os.path.exists("/snapshot_stub") else Path(__file__).resolve().parents[2] / "snapshot_stub"

# user_id -> {"snapshot", "goals", "budgets", "subscriptions"}; fixtures are loaded once then mutated in memory
_profiles: dict = {}


class TransactionIn(BaseModel):
    type: str
    amount: float = Field(..., ge=0)
    category: str = ""


class ContributionIn(BaseModel):
    amount: float = Field(..., ge=0)


def _load_profile(user_id: str) -> dict:
    if user_id not in _profiles:
        file = DATA_DIR / f"profile_{user_id}.json"
        if not file.exists():
            raise HTTPException(status_code=404, detail="user not found")
        data = json.loads(file.read_text())
        _profiles[user_id] = {
            "snapshot": FinancialSnapshot.from_mapping(data.get("financialSummary")),
            "goals": [Goal.from_mapping(g) for g in data.get("goals", [])],
            "budgets": [Budget.from_mapping(b) for b in data.get("budgets", [])],
            "subscriptions": [Subscription.from_mapping(s) for s in data.get("subscriptions", [])],
        }
    return _profiles[user_id]


def _goal_json(goal: Goal) -> dict:
    return {
        "id": goal.goal_id,
        "name": goal.name,
        "currentAmount": goal.current_amount,
        "targetAmount": goal.target_amount,
        "isCompleted": goal.is_completed,
    }


@app.get("/health")
def health(): return {"status": "ok"}


@app.get("/users/{user_id}/financial-summary")
def get_financial_summary(user_id: str):
    return asdict(_load_profile(user_id)["snapshot"])


@app.get("/users/{user_id}/goals")
def get_goals(user_id: str):
    return {"goals": [_goal_json(g) for g in _load_profile(user_id)["goals"]]}


@app.post("/users/{user_id}/transactions")
def add_transaction(user_id: str, tx: TransactionIn):
    profile = _load_profile(user_id)
    try:
        profile["snapshot"] = apply_transaction(profile["snapshot"], tx.type, tx.amount)
    except InvalidTransactionError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if tx.type == "expense" and tx.category:
        profile["budgets"] = [
            replace(b, spent=b.spent + tx.amount) if b.category == tx.category else b for b in profile["budgets"]
        ]
    return asdict(profile["snapshot"])


@app.post("/users/{user_id}/goals/{goal_id}/progress")
def add_goal_progress(user_id: str, goal_id: str, contribution: ContributionIn):
    profile = _load_profile(user_id)
    index = next((i for i, g in enumerate(profile["goals"]) if g.goal_id == goal_id), None)
    if index is None:
        raise HTTPException(status_code=404, detail="goal not found")
    profile["goals"][index] = apply_goal_contribution(profile["goals"][index], contribution.amount)
    return _goal_json(profile["goals"][index])


@app.get("/users/{user_id}/budgets")
def get_budgets(user_id: str):
    summary = summarize_budgets(_load_profile(user_id)["budgets"])
    return {
        "totalBudgeted": summary.total_budgeted,
        "totalSpent": summary.total_spent,
        "remaining": summary.remaining,
        "budgets": [
            {
                "category": line.category,
                "amount": line.limit,
                "spent": line.spent,
                "remaining": line.remaining,
                "percentUsed": line.percent_used,
                "overBudget": line.over_budget,
            }
            for line in summary.lines
        ],
    }


@app.get("/users/{user_id}/subscriptions")
def get_subscriptions(user_id: str):
    subscriptions = _load_profile(user_id)["subscriptions"]
    totals = subscription_totals(subscriptions)
    return {
        "monthlyTotal": totals.monthly_total,
        "yearlyTotal": totals.yearly_total,
        "subscriptions": [
            {"id": s.subscription_id, "name": s.name, "amount": s.amount, "billingCycle": s.billing_cycle}
            for s in subscriptions
        ],
    }
