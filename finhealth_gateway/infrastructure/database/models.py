"""SQLAlchemy ORM models for computed health reports"""

import uuid
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Text, JSON, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class HealthReportRecord(Base):
    """Health report computed for a user at a point in time"""

    __tablename__ = "health_report"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    overall_score = Column(Integer, nullable=False)
    category = Column(Text, nullable=False)
    recommendations = Column(JSON, nullable=False)
    snapshot = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    metrics = relationship(
        "HealthMetricRecord",
        back_populates="report",
        cascade="all, delete-orphan",
        order_by="HealthMetricRecord.position",
    )


class HealthMetricRecord(Base):
    """Single metric within a stored health report"""

    __tablename__ = "health_metric"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    report_id = Column(Uuid(as_uuid=True), ForeignKey("health_report.id", ondelete="CASCADE"), nullable=False)
    name = Column(Text, nullable=False)
    position = Column(Integer, nullable=False)
    score = Column(Float, nullable=False)
    value = Column(Text, nullable=False)
    status = Column(Text, nullable=False)
    label = Column(Text, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    recommendation = Column(Text, nullable=False, default="")

    report = relationship("HealthReportRecord", back_populates="metrics")
