import logging

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from match_api.core.config import Settings

logger = logging.getLogger(__name__)

TRACER_NAME = "match-api"


def build_tracer_provider(
    settings: Settings, exporter: SpanExporter | None = None
) -> TracerProvider:
    provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: settings.service_name}),
        sampler=ALWAYS_ON,
    )
    provider.add_span_processor(BatchSpanProcessor(exporter or ConsoleSpanExporter()))
    return provider


def setup_tracing(
    app: FastAPI, settings: Settings, exporter: SpanExporter | None = None
) -> TracerProvider:
    """Create the tracer provider and instrument ``app`` with it."""
    provider = build_tracer_provider(settings, exporter)
    FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)

    app.state.tracer_provider = provider
    app.state.tracer = provider.get_tracer(TRACER_NAME)
    logger.info("Tracing enabled", extra={"service_name": settings.service_name})
    return provider


def install_global_tracing(app: FastAPI) -> None:
    """Make the app's provider and W3C propagators the process-wide defaults.

    OpenTelemetry accepts a global tracer provider only once per process.
    """
    set_global_textmap(
        CompositePropagator([TraceContextTextMapPropagator(), W3CBaggagePropagator()])
    )
    provider = getattr(app.state, "tracer_provider", None)
    if provider is not None:
        trace.set_tracer_provider(provider)


def disable_tracing(app: FastAPI) -> None:
    app.state.tracer_provider = None
    app.state.tracer = trace.NoOpTracer()


def shutdown_tracing(app: FastAPI) -> None:
    provider: TracerProvider | None = getattr(app.state, "tracer_provider", None)
    if provider is None:
        return
    try:
        provider.shutdown()
    except Exception as exc:  # pragma: no cover - exporter shutdown failure path
        logger.error("Error shutting down tracer provider", exc_info=exc)
