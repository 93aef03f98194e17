"""Prometheus metrics for category evaluations, follow-ups and notification delivery"""

from prometheus_client import Counter, Histogram, Gauge

from recovery_gateway.domain.models import CategoryOutcome, Tier

# Evaluation metrics
category_evaluation_counter = Counter(
    "recovery_category_evaluations_total",
    "Category resolutions by outcome",
    ["outcome"],  # Alpha | Beta | Gamma | Delta | Excluded
)

category_change_counter = Counter(
    "recovery_category_changes_total",
    "Category assignments written",
    ["source", "category"],  # source: auto | manual
)

followups_due_gauge = Gauge(
    "recovery_followups_due",
    "Debtors with a follow-up due at the last check",
)

# Notification webhook metrics
notification_latency_histogram = Histogram(
    "notification_webhook_latency_seconds",
    "Notification webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

notification_failure_counter = Counter(
    "notification_webhook_failures_total",
    "Failed notification deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_evaluation(outcome: CategoryOutcome) -> None:
    """Count a resolver outcome"""
    label = outcome.value if isinstance(outcome, Tier) else outcome
    category_evaluation_counter.labels(outcome=label).inc()


def record_category_change(source: str, category: Tier) -> None:
    category_change_counter.labels(source=source, category=category.value).inc()
