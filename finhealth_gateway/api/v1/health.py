"""Financial health endpoints: score, stored reports and history"""

import asyncio
import time
import uuid
import logging
from typing import List, Tuple
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from finhealth_gateway.api.v1.schemas import (
    HealthRequest,
    HealthReportResponse,
    HistoryItem,
    HistoryResponse,
    MetricSchema,
    ScoreRequest,
)
from finhealth_gateway.api.dependencies import get_request_id, get_snapshot_client
from finhealth_gateway.config import settings
from finhealth_gateway.infrastructure.database.session import get_db
from finhealth_gateway.infrastructure.database.repositories import HealthReportRepository
from finhealth_gateway.infrastructure.clients.snapshot import SnapshotClient
from finhealth_gateway.domain.health import compute_health
from finhealth_gateway.domain.models import FinancialSnapshot, Goal
from finhealth_gateway.domain.exceptions import SnapshotProviderError, UserNotFoundError
from finhealth_gateway.infrastructure.observability.metrics import (
    record_health_report,
    snapshot_fetch_failures_counter,
)
from finhealth_gateway.infrastructure.observability.logging import log_health_report

router = APIRouter()


async def fetch_scoring_inputs(snapshot_client: SnapshotClient, user_id: str) -> Tuple[FinancialSnapshot, List[Goal]]:
    """
    Fetch snapshot and goals concurrently, waiting for both to settle.

    Error precedence does not depend on which call fails first:
    unexpected errors, then provider outages, then unknown user.
    """
    results = await asyncio.gather(
        snapshot_client.get_financial_snapshot(user_id),
        snapshot_client.get_goals(user_id),
        return_exceptions=True,
    )
    errors = [r for r in results if isinstance(r, BaseException)]

    for error in errors:
        if not isinstance(error, SnapshotProviderError):
            raise error
    for error in errors:
        if not isinstance(error, UserNotFoundError):
            raise error
    if errors:
        raise errors[0]

    snapshot, goals = results
    return snapshot, goals


@router.post("/health", response_model=HealthReportResponse)
async def create_health_report(
    request_body: HealthRequest,
    request: Request,
    db: Session = Depends(get_db),
    snapshot_client: SnapshotClient = Depends(get_snapshot_client),
):
    """
    Compute and store a financial health report for a user.

    Flow:
    1. Fetch financial snapshot and goals from the snapshot provider
    2. Score them
    3. Persist the report
    4. Return report with its ID
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        # 1. Fetch snapshot and goals; scoring only runs when both succeed
        snapshot, goals = await fetch_scoring_inputs(snapshot_client, request_body.user_id)

        # 2. Score
        report = compute_health(snapshot, goals)

        # 3. Persist
        report_repo = HealthReportRepository(db)
        db_report = report_repo.create_report(
            user_id=request_body.user_id,
            report=report,
            snapshot=snapshot,
        )
        report_id = str(db_report.id)
        db.commit()

        duration_ms = (time.time() - start_time) * 1000
        record_health_report(report)
        log_health_report(request_id, request_body.user_id, report.overall_score, report.category.value, duration_ms)

        response = HealthReportResponse.from_report(report, report_id=report_id)
        response.created_at = db_report.created_at.isoformat() if db_report.created_at else None
        return response

    except UserNotFoundError as e:
        db.rollback()
        logging.warning(f"Unknown user: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except SnapshotProviderError as e:
        snapshot_fetch_failures_counter.inc()
        db.rollback()
        logging.error(f"Snapshot provider error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Snapshot service unavailable")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/health/score", response_model=HealthReportResponse)
def score_snapshot(request_body: ScoreRequest):
    """
    Score a snapshot supplied by the caller.

    Nothing is fetched or stored.
    """
    report = compute_health(
        request_body.snapshot.to_domain(),
        [goal.to_domain() for goal in request_body.goals],
    )
    record_health_report(report)
    return HealthReportResponse.from_report(report)


@router.get("/health/report/{report_id}", response_model=HealthReportResponse)
def get_health_report(report_id: str, db: Session = Depends(get_db)):
    """Retrieve a stored health report with its metric breakdown"""
    try:
        report_uuid = uuid.UUID(report_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid report ID format")

    report_repo = HealthReportRepository(db)
    db_report = report_repo.get_report_by_id(report_uuid)

    if not db_report:
        raise HTTPException(status_code=404, detail="Report not found")

    return HealthReportResponse(
        report_id=str(db_report.id),
        overall_score=db_report.overall_score,
        category=db_report.category,
        metrics={
            m.name: MetricSchema(
                score=m.score,
                value=m.value,
                label=m.label,
                description=m.description,
                recommendation=m.recommendation,
                status=m.status,
            )
            for m in db_report.metrics
        },
        recommendations=db_report.recommendations,
        created_at=db_report.created_at.isoformat(),
    )


@router.get("/health/history", response_model=HistoryResponse)
def get_health_history(
    user_id: str = Query(..., description="User identifier"),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent health reports for a user.

    Returns:
        Newest first, score and category only
    """
    report_repo = HealthReportRepository(db)
    reports = report_repo.get_reports_by_user(user_id, limit=settings.history_limit)

    history_items = [
        HistoryItem(
            report_id=str(r.id),
            overall_score=r.overall_score,
            category=r.category,
            created_at=r.created_at.isoformat(),
        )
        for r in reports
    ]

    return HistoryResponse(user_id=user_id, reports=history_items)
