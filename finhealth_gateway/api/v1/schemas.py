"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from finhealth_gateway.domain.models import (
    FinancialSnapshot,
    Goal,
    HealthCategory,
    HealthReport,
    MetricStatus,
)


class SnapshotSchema(BaseModel):
    """Monthly financial totals; omitted or null fields score as 0"""

    income: Optional[float] = Field(None, ge=0)
    expenses: Optional[float] = Field(None, ge=0)
    balance: Optional[float] = None
    savings: Optional[float] = Field(None, ge=0)

    def to_domain(self) -> FinancialSnapshot:
        return FinancialSnapshot.from_mapping(self.model_dump())


class GoalSchema(BaseModel):
    """Savings goal as sent by clients (camelCase, like the snapshot provider)"""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: Optional[str] = None
    current_amount: Optional[float] = Field(None, ge=0, alias="currentAmount")
    target_amount: Optional[float] = Field(None, ge=0, alias="targetAmount")
    is_completed: bool = Field(False, alias="isCompleted")

    def to_domain(self) -> Goal:
        return Goal.from_mapping(self.model_dump())


class HealthRequest(BaseModel):
    """Request body for POST /v1/health"""

    user_id: str = Field(..., min_length=1, description="User identifier")


class ScoreRequest(BaseModel):
    """Request body for POST /v1/health/score"""

    snapshot: SnapshotSchema = Field(default_factory=SnapshotSchema)
    goals: List[GoalSchema] = Field(default_factory=list)


class MetricSchema(BaseModel):
    """Single metric in a health report"""

    score: float
    value: str
    label: str = ""
    description: str = ""
    recommendation: str = ""
    status: MetricStatus


class HealthReportResponse(BaseModel):
    """Response for the health scoring endpoints"""

    report_id: Optional[str] = None
    overall_score: int
    category: HealthCategory
    metrics: Dict[str, MetricSchema]
    recommendations: List[str]
    created_at: Optional[str] = None

    @classmethod
    def from_report(cls, report: HealthReport, report_id: str | None = None) -> "HealthReportResponse":
        return cls(
            report_id=report_id,
            overall_score=report.overall_score,
            category=report.category,
            metrics={
                name: MetricSchema(
                    score=metric.score,
                    value=metric.value,
                    label=metric.label,
                    description=metric.description,
                    recommendation=metric.recommendation,
                    status=metric.status,
                )
                for name, metric in report.metrics.items()
            },
            recommendations=list(report.recommendations),
        )


class HistoryItem(BaseModel):
    """Single report in history"""

    report_id: str
    overall_score: int
    category: HealthCategory
    created_at: str


class HistoryResponse(BaseModel):
    """Response for GET /v1/health/history"""

    user_id: str
    reports: List[HistoryItem]
