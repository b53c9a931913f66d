"""Prometheus metrics for the CV deck API."""

from prometheus_client import Counter, Histogram

CONTACT_SUBMISSIONS = Counter(
    "cvdeck_contact_submissions_total",
    "Contact submissions processed",
    labelnames=["source", "outcome"],
)

NOTIFICATION_EMAILS = Counter(
    "cvdeck_notification_emails_total",
    "Notification emails attempted",
    labelnames=["outcome"],
)

CONTACT_EXTRACTIONS = Counter(
    "cvdeck_contact_extractions_total",
    "Contact extraction requests",
    labelnames=["outcome"],
)

CHAT_COMPLETIONS = Counter(
    "cvdeck_chat_completions_total",
    "Streaming chat completions",
    labelnames=["outcome"],
)

LLM_LATENCY = Histogram(
    "cvdeck_llm_latency_seconds",
    "LLM call latency in seconds",
    labelnames=["step"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)
