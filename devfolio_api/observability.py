"""Observability utilities: trace IDs, LLM metrics, and roadmap fallback metrics.

This module provides:
- Trace ID generation and propagation via context vars
- Prometheus metrics for Gemini calls (latency, errors, tokens)
- Prometheus metrics for roadmap parsing outcomes
- Structured logging helpers for LLM request/response correlation
"""

import secrets
import time
from contextvars import ContextVar
from dataclasses import dataclass

import structlog
from prometheus_client import Counter, Gauge, Histogram

logger = structlog.get_logger()

# =============================================================================
# Trace ID Context
# =============================================================================

# Context variable for trace ID propagation across async calls
trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")


def generate_trace_id() -> str:
    """Generate cryptographically secure trace ID for request tracking."""
    return secrets.token_hex(16)


def get_trace_id() -> str:
    """Get current trace ID from context, or empty string if not set."""
    return trace_id_ctx.get()


def set_trace_id(trace_id: str) -> None:
    """Set trace ID in context."""
    trace_id_ctx.set(trace_id)


# =============================================================================
# Prometheus Metrics
# =============================================================================

llm_requests_total = Counter(
    "llm_requests_total",
    "Total generative-text API requests",
    ["model", "operation", "status"],
)

llm_tokens_total = Counter(
    "llm_tokens_total",
    "Total tokens used in generative-text calls",
    ["model", "operation"],
)

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "Generative-text response latency in seconds",
    ["model", "operation"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
)

llm_active_requests = Gauge(
    "llm_active_requests",
    "Currently active generative-text requests",
    ["model"],
)

roadmap_fallbacks_total = Counter(
    "roadmap_fallbacks_total",
    "Roadmaps answered with the deterministic default",
    ["reason"],  # upstream_error, empty_text, no_items, too_sparse, parse_error
)

roadmap_items_returned = Histogram(
    "roadmap_items_returned",
    "Number of roadmap items returned per request",
    buckets=[0, 4, 8, 12, 16, 20, 24],
)


def record_roadmap_outcome(item_count: int, fallback_reason: str | None = None) -> None:
    """Record the size of a returned roadmap and why it fell back, if it did."""
    roadmap_items_returned.observe(item_count)
    if fallback_reason:
        roadmap_fallbacks_total.labels(reason=fallback_reason).inc()


# =============================================================================
# LLM Payload Logging
# =============================================================================


@dataclass
class LLMRequestLog:
    """Structured log data for LLM requests."""

    trace_id: str
    model: str
    operation: str
    prompt_chars: int
    prompt_preview: str  # First 100 chars
    timestamp: float = 0.0

    def __post_init__(self) -> None:
        if self.timestamp == 0.0:
            self.timestamp = time.time()


def log_llm_request(model: str, operation: str, prompt: str) -> LLMRequestLog:
    """Log an outbound generation request.

    Returns LLMRequestLog for correlation with the response.
    """
    log_data = LLMRequestLog(
        trace_id=get_trace_id(),
        model=model,
        operation=operation,
        prompt_chars=len(prompt),
        prompt_preview=prompt[:100] + ("..." if len(prompt) > 100 else ""),
    )

    logger.info(
        "llm_request",
        trace_id=log_data.trace_id,
        model=log_data.model,
        operation=log_data.operation,
        prompt_chars=log_data.prompt_chars,
        prompt_preview=log_data.prompt_preview,
    )

    llm_active_requests.labels(model=model).inc()
    return log_data


def log_llm_response(
    request_log: LLMRequestLog,
    tokens_total: int = 0,
    finish_reason: str = "unknown",
    error: str | None = None,
) -> None:
    """Log a generation response (or failure) with metrics and correlation."""
    latency_ms = int((time.time() - request_log.timestamp) * 1000)

    if error:
        logger.error(
            "llm_response",
            trace_id=request_log.trace_id,
            model=request_log.model,
            operation=request_log.operation,
            latency_ms=latency_ms,
            error=error,
        )
        status = "error"
    else:
        logger.info(
            "llm_response",
            trace_id=request_log.trace_id,
            model=request_log.model,
            operation=request_log.operation,
            tokens_total=tokens_total,
            latency_ms=latency_ms,
            finish_reason=finish_reason,
        )
        status = "success"

    llm_active_requests.labels(model=request_log.model).dec()
    llm_requests_total.labels(
        model=request_log.model,
        operation=request_log.operation,
        status=status,
    ).inc()

    if tokens_total > 0:
        llm_tokens_total.labels(model=request_log.model, operation=request_log.operation).inc(
            tokens_total
        )

    llm_latency_seconds.labels(
        model=request_log.model,
        operation=request_log.operation,
    ).observe(latency_ms / 1000.0)
