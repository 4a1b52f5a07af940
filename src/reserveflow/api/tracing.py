from __future__ import annotations

from reserveflow.api.middleware.request_id import get_request_id
from reserveflow.application.use_cases.context import TraceContext
from reserveflow.infrastructure.observability.otel import current_trace_id


def current_trace_context() -> TraceContext:
    return TraceContext(trace_id=current_trace_id(), request_id=get_request_id())
