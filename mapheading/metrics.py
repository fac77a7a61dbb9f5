"""Prometheus metrics for heading samples and view animations."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest

REGISTRY = CollectorRegistry()
SAMPLES = Counter(
    "mapheading_samples_total",
    "Heading samples by source and outcome",
    ["source", "outcome"],
    registry=REGISTRY,
)
SOURCE_TRANSITIONS = Counter(
    "mapheading_source_transitions_total",
    "Arbitration transitions by new source",
    ["source"],
    registry=REGISTRY,
)
VIEW_ANIMATIONS = Counter(
    "mapheading_view_animations_total",
    "Map view rotation animations issued",
    ["kind"],
    registry=REGISTRY,
)
SMOOTHED_HEADING = Gauge(
    "mapheading_smoothed_heading_degrees",
    "Last published smoothed heading",
    registry=REGISTRY,
)

OUTCOME_ACCEPTED = "accepted"
OUTCOME_THROTTLED = "throttled"
OUTCOME_DUPLICATE = "duplicate"
OUTCOME_MISSING = "missing"
OUTCOME_INACTIVE = "inactive"


def record_sample(source: str, outcome: str) -> None:
    SAMPLES.labels(source=source, outcome=outcome).inc()


def sample_count(source: str, outcome: str) -> float:
    value = REGISTRY.get_sample_value(
        "mapheading_samples_total", {"source": source, "outcome": outcome}
    )
    return value or 0.0


def render_latest() -> bytes:
    return generate_latest(REGISTRY)
