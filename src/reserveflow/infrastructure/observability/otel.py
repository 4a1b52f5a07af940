from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

_PROVIDER: TracerProvider | None = None
logger = logging.getLogger(__name__)

# polled endpoints, kept out of traces
_EXCLUDED_URLS = "/health,/metrics"


def _build_provider() -> TracerProvider:
    service_name = os.getenv("OTEL_SERVICE_NAME", "reserveflow")
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")

    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
    if endpoint:
        try:
            exporter = OTLPSpanExporter(
                endpoint=endpoint,
                insecure=endpoint.startswith("http://"),
            )
            provider.add_span_processor(BatchSpanProcessor(exporter))
        except Exception:
            logger.exception("otel_exporter_setup_failed")
    else:
        logger.info("otel_exporter_disabled")
    return provider


def configure_otel(app: FastAPI) -> None:
    """Instrument ``app``; the tracer provider itself is installed once per process."""
    global _PROVIDER
    if _PROVIDER is None:
        _PROVIDER = _build_provider()
        trace.set_tracer_provider(_PROVIDER)
        set_global_textmap(TraceContextTextMapPropagator())

    FastAPIInstrumentor.instrument_app(
        app,
        tracer_provider=_PROVIDER,
        excluded_urls=_EXCLUDED_URLS,
    )


def current_trace_id() -> str | None:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None
    return format(span_context.trace_id, "032x")
