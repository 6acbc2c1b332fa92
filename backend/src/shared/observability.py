"""Single entry point for processes embedding the certgen accessor."""

import logging

from .config import settings
from .logging import setup_logging
from .metrics import setup_metrics
from .tracing import setup_tracing

logger = logging.getLogger(__name__)


def setup_observability() -> None:
    """Configure logging, tracing and metrics from settings.

    Call once at process start, before creating a CertGenAccessor, so its
    spans, metrics and log records are exported.
    """
    setup_logging(settings.LOG_LEVEL)
    setup_tracing(settings.APP_NAME)
    setup_metrics(settings.APP_NAME, enable_prometheus=settings.CERTGEN_PROMETHEUS_ENABLED)

    logger.info(
        "observability_configured",
        extra={
            "service": settings.APP_NAME,
            "env": settings.APP_ENV,
            "certgen_agent": settings.CERTGEN_AGENT_NAME,
            "prometheus": settings.CERTGEN_PROMETHEUS_ENABLED,
        },
    )
