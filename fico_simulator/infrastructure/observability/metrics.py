"""Prometheus metrics for score distribution, simulation activity and analysis latency"""

from prometheus_client import Counter, Histogram, Gauge

from fico_simulator.domain.scoring import score_band

# Scoring metrics
score_counter = Counter(
    "fico_score_computed_total",
    "Total baseline scores computed",
    ["band"],  # poor | fair | good | very_good | exceptional
)

# Simulation metrics
simulation_event_counter = Counter(
    "fico_simulation_events_total",
    "Simulator operations performed",
    ["event"],  # created | advance | revert | adjust | reset | snapshot | closed
)

active_sessions_gauge = Gauge(
    "fico_simulation_sessions_active",
    "Simulation sessions currently held in memory",
)

# Analysis service metrics
analysis_latency_histogram = Histogram(
    "analysis_latency_seconds",
    "Document analysis service response time",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

analysis_failures_counter = Counter(
    "analysis_failures_total",
    "Failed document analysis calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_score(score: int) -> None:
    """Record a computed score under its FICO band"""
    score_counter.labels(band=score_band(score)).inc()


def record_simulation_event(event: str) -> None:
    simulation_event_counter.labels(event=event).inc()
