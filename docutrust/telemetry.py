"""
Ingestion telemetry.

Only counts, scores and categorical flags are emitted. No invoice text,
vendor names, amounts or PII ever leave the process through this module.
"""
import os
import logging
from azure.monitor.opentelemetry import configure_azure_monitor
from opentelemetry.trace import get_current_span

logger = logging.getLogger("docutrust.telemetry")


def init_telemetry():
    """
    Initialize Azure Application Insights via OpenTelemetry.
    Does nothing unless a connection string is configured.
    """
    connection_string = os.getenv("AZURE_APPINSIGHTS_CONNECTION_STRING")

    if not connection_string:
        return  # Telemetry disabled (local / tests)

    configure_azure_monitor(
        connection_string=connection_string
    )
    logger.info("Azure Monitor telemetry enabled")


def emit_ingestion_telemetry(
    latency_ms: int,
    reputation_score: int,
    pii_detected: bool,
    chain_length: int,
):
    """
    Emit a single telemetry event for a sealed record.

    Attributes are fixed: no kwargs, no payloads.
    """
    assert isinstance(latency_ms, int), "latency_ms must be int"
    assert isinstance(reputation_score, int), "reputation_score must be int"
    assert isinstance(pii_detected, bool), "pii_detected must be bool"
    assert isinstance(chain_length, int), "chain_length must be int"

    span = get_current_span()
    if not span:
        return  # No active span

    span.add_event(
        name="docutrust.ingestion",
        attributes={
            "latency_ms": latency_ms,
            "reputation_score": reputation_score,
            "pii_detected": pii_detected,
            "chain_length": chain_length,
        }
    )


def scrub_exception_for_telemetry(exception: Exception) -> str:
    """
    Never log str(e): messages may carry invoice text.
    Only the exception class name is reported.
    """
    return type(exception).__name__


def emit_exception_telemetry(exception: Exception):
    span = get_current_span()
    if not span:
        return

    span.add_event(
        name="docutrust.exception",
        attributes={
            "exception_type": scrub_exception_for_telemetry(exception)
        }
    )
