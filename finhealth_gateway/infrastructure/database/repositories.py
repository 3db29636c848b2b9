"""Data access layer for health reports"""

import uuid
from dataclasses import asdict
from typing import List, Optional
from sqlalchemy.orm import Session
from finhealth_gateway.infrastructure.database.models import HealthReportRecord, HealthMetricRecord
from finhealth_gateway.domain.models import FinancialSnapshot, HealthReport


class HealthReportRepository:
    """Repository for computed health reports"""

    def __init__(self, db: Session):
        self.db = db

    def create_report(
        self,
        user_id: str,
        report: HealthReport,
        snapshot: FinancialSnapshot | None = None,
    ) -> HealthReportRecord:
        """Persist report with its metrics"""
        db_report = HealthReportRecord(
            user_id=user_id,
            overall_score=report.overall_score,
            category=report.category.value,
            recommendations=list(report.recommendations),
            snapshot=asdict(snapshot) if snapshot is not None else None,
        )
        self.db.add(db_report)
        self.db.flush()  # Get ID without committing

        for position, (name, metric) in enumerate(report.metrics.items()):
            db_report.metrics.append(
                HealthMetricRecord(
                    report_id=db_report.id,
                    name=name,
                    position=position,
                    score=metric.score,
                    value=metric.value,
                    status=metric.status.value,
                    label=metric.label,
                    description=metric.description,
                    recommendation=metric.recommendation,
                )
            )

        return db_report

    def get_report_by_id(self, report_id: uuid.UUID) -> Optional[HealthReportRecord]:
        """Fetch report with metrics"""
        return (
            self.db.query(HealthReportRecord)
            .filter(HealthReportRecord.id == report_id)
            .first()
        )

    def get_reports_by_user(self, user_id: str, limit: int = 10) -> List[HealthReportRecord]:
        """Fetch recent reports for a user"""
        return (
            self.db.query(HealthReportRecord)
            .filter(HealthReportRecord.user_id == user_id)
            .order_by(HealthReportRecord.created_at.desc())
            .limit(limit)
            .all()
        )
