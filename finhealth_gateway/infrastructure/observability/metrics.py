"""Prometheus metrics for monitoring health score distribution and provider reliability"""

from prometheus_client import Counter, Histogram
from finhealth_gateway.domain.models import HealthReport

# Scoring metrics
health_report_counter = Counter(
    "finhealth_reports_total",
    "Total health reports computed",
    ["category"],  # Excellent | Good | Fair | Needs Improvement | Poor
)

overall_score_histogram = Histogram(
    "finhealth_overall_score",
    "Distribution of overall health scores",
    buckets=[20, 40, 60, 70, 80, 90, 100],
)

metric_status_counter = Counter(
    "finhealth_metric_status_total",
    "Metric statuses across computed reports",
    ["metric", "status"],
)

# Snapshot provider metrics
snapshot_fetch_failures_counter = Counter(
    "snapshot_fetch_failures_total",
    "Failed snapshot provider calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_health_report(report: HealthReport) -> None:
    """Record score distribution and per-metric status counts"""
    health_report_counter.labels(category=report.category.value).inc()
    overall_score_histogram.observe(report.overall_score)

    for name, metric in report.metrics.items():
        metric_status_counter.labels(metric=name, status=metric.status.value).inc()
