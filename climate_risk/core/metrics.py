"""
In-process Prometheus collectors.

The engine has no HTTP surface; a host process that wants to scrape these
can expose the default registry itself.
"""
from prometheus_client import Counter, Histogram

ASSESSMENT_COUNT = Counter(
    "climate_assessments_total",
    "Completed climate risk assessments",
    ["classification", "property_type"],
)
ASSESSMENT_LATENCY = Histogram(
    "climate_assessment_duration_seconds",
    "Wall time of a single climate risk assessment",
)


def record_assessment(classification: str, property_type: str, elapsed_seconds: float) -> None:
    ASSESSMENT_COUNT.labels(classification=classification, property_type=property_type).inc()
    ASSESSMENT_LATENCY.observe(elapsed_seconds)
