from typing import Optional

import sentry_sdk
from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from .config import settings

SERVICE_NAME = "timesheet-api"
RESOURCE = Resource.create({"service.name": SERVICE_NAME, "deployment.env": settings.env})

meter = metrics.get_meter(SERVICE_NAME)
tracer = trace.get_tracer(SERVICE_NAME)
entries_created = meter.create_counter(
    "timesheets_created",
    unit="1",
    description="Time entries inserted into the timesheets table",
)


def configure_tracing(otlp_endpoint: Optional[str] = None) -> None:
    endpoint = otlp_endpoint or settings.otlp_endpoint
    if not endpoint:
        return
    tracer_provider = TracerProvider(resource=RESOURCE)
    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(tracer_provider)


def configure_metrics(otlp_endpoint: Optional[str] = None) -> None:
    endpoint = otlp_endpoint or settings.otlp_endpoint
    if not endpoint:
        return
    reader = PeriodicExportingMetricReader(OTLPMetricExporter(endpoint=endpoint))
    metrics.set_meter_provider(MeterProvider(resource=RESOURCE, metric_readers=[reader]))


def configure_error_monitoring(dsn: Optional[str] = None) -> None:
    dsn = dsn or settings.sentry_dsn
    if dsn:
        sentry_sdk.init(dsn=dsn, environment=settings.env, traces_sample_rate=0.2)


def configure_observability() -> None:
    configure_tracing()
    configure_metrics()
    configure_error_monitoring()
