"""OpenTelemetry tracing for the portal API.

Spans carry the request id and the acting member (from the request context),
so a trace of an approval can be matched to the log lines it produced.
Tracing problems are logged and never stop the service from starting.
"""

import logging
import threading
from dataclasses import dataclass, field

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import Span, SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

from clubops.shared.context import get_current_actor_id, get_request_id

logger = logging.getLogger(__name__)

# Liveness probes would otherwise dominate the trace volume.
UNTRACED_URLS = "api/v1/health"


class RequestContextSpanProcessor(SpanProcessor):
    """Copy request id and actor id from contextvars onto every new span."""

    def on_start(self, span: Span, parent_context: Context | None = None) -> None:
        request_id = get_request_id()
        if request_id:
            span.set_attribute("clubops.request_id", request_id)
        actor_id = get_current_actor_id()
        if actor_id:
            span.set_attribute("clubops.actor_id", actor_id)


def _build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        if otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=otlp_endpoint, insecure=otlp_endpoint.startswith("http://")
            )
        logger.warning("TELEMETRY_EXPORTER=otlp without TELEMETRY_OTLP_ENDPOINT; using console")
    return ConsoleSpanExporter()


@dataclass
class TelemetryConfig:
    """Tracer provider lifecycle plus FastAPI and SQLAlchemy instrumentation."""

    service_name: str
    service_version: str
    enabled: bool = True
    environment: str = "development"
    tracer_provider: TracerProvider | None = field(default=None, init=False)

    def setup_telemetry(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider | None:
        """Install the global tracer provider.

        Args:
            exporter_type: "console", "otlp", or "none" (spans recorded, not exported).
            otlp_endpoint: OTLP gRPC endpoint (e.g. http://localhost:4317).
            sample_rate: Root sampling ratio 0.0-1.0; child spans follow their parent.

        Returns:
            The provider, or None when disabled or setup failed.
        """
        if not self.enabled:
            return None
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: self.service_name,
                        SERVICE_VERSION: self.service_version,
                        "deployment.environment": self.environment,
                    }
                ),
                sampler=ParentBased(TraceIdRatioBased(sample_rate)),
            )
            provider.add_span_processor(RequestContextSpanProcessor())
            exporter = _build_exporter(exporter_type, otlp_endpoint)
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Tracing setup failed; continuing without telemetry")
            return None
        self.tracer_provider = provider
        logger.info(
            "Tracing enabled: service=%s exporter=%s sample_rate=%s",
            self.service_name,
            exporter_type,
            sample_rate,
        )
        return provider

    def instrument_fastapi(self, app: FastAPI) -> None:
        if self.tracer_provider is None:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.tracer_provider, excluded_urls=UNTRACED_URLS
            )
        except Exception:
            logger.exception("FastAPI instrumentation failed")

    def instrument_sqlalchemy(self, engine: AsyncEngine) -> None:
        """Trace queries on the engine's sync core (async engines wrap one)."""
        if self.tracer_provider is None:
            return
        try:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine,
                tracer_provider=self.tracer_provider,
                enable_commenter=True,
            )
        except Exception:
            logger.exception("SQLAlchemy instrumentation failed")

    def shutdown(self) -> None:
        """Flush pending spans."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Tracing shutdown failed")


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process telemetry instance (set by the lifespan)."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
