from opentelemetry import metrics
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource


def setup_metrics(
    app_name: str,
    enable_prometheus: bool = False,
    export_interval_millis: float = 60_000,
) -> MeterProvider:
    """Install a meter provider for the certgen instruments.

    Args:
        app_name: Value of the service.name resource attribute.
        enable_prometheus: Also register a Prometheus reader. Only useful when
            the embedding process serves the Prometheus endpoint.
        export_interval_millis: Console export period.
    """
    resource = Resource.create({"service.name": app_name})

    readers: list[MetricReader] = [
        PeriodicExportingMetricReader(
            ConsoleMetricExporter(), export_interval_millis=export_interval_millis
        )
    ]

    if enable_prometheus:
        readers.append(PrometheusMetricReader())

    provider = MeterProvider(resource=resource, metric_readers=readers)
    metrics.set_meter_provider(provider)
    return provider
