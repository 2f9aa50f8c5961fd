"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Event lifecycle metrics
events_created = Counter(
    'ewm_events_created_total',
    'Total events created by initiators'
)

event_state_transitions = Counter(
    'ewm_event_state_transitions_total',
    'Event state transitions',
    ['action', 'result']  # PUBLISH_EVENT/REJECT_EVENT/..., success/refused
)

# Participation metrics
participation_requests = Counter(
    'ewm_participation_requests_total',
    'Participation requests by resulting status',
    ['status']  # PENDING, CONFIRMED, REJECTED, CANCELED
)

# Comment metrics
comment_operations = Counter(
    'ewm_comment_operations_total',
    'Comment operations',
    ['operation']  # create, edit, delete, restore
)

# Stats metrics
hits_saved = Counter(
    'ewm_stats_hits_saved_total',
    'Endpoint hits stored by the stats service'
)

stats_query_latency = Histogram(
    'ewm_stats_query_latency_seconds',
    'Latency of aggregated stats queries',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

stats_client_errors = Counter(
    'ewm_stats_client_errors_total',
    'Failed calls from the main service to the stats service',
    ['operation']  # save_hit, get_stats
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_state_transition(action: str, success: bool):
    """Record an event state action. Result: success, refused"""
    event_state_transitions.labels(action=action, result="success" if success else "refused").inc()


def record_participation_request(status: str):
    participation_requests.labels(status=status).inc()


def record_comment_operation(operation: str):
    comment_operations.labels(operation=operation).inc()


def record_stats_client_error(operation: str):
    stats_client_errors.labels(operation=operation).inc()
