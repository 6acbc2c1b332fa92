import logging
import sys

from opentelemetry._logs import set_logger_provider
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor, ConsoleLogRecordExporter

from .config import settings

# Handlers installed by setup_logging, so repeated calls do not stack them
_installed_handlers: list[logging.Handler] = []


def setup_logging(log_level: str | None = None) -> LoggerProvider:
    """Route accessor logs through OpenTelemetry and to stdout.

    Embedding processes that already configure logging can skip this; the
    accessor only ever logs through module loggers.
    """
    level = (log_level or settings.LOG_LEVEL).upper()
    root = logging.getLogger()

    for handler in _installed_handlers:
        root.removeHandler(handler)
    _installed_handlers.clear()

    logger_provider = LoggerProvider()
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(ConsoleLogRecordExporter()))
    set_logger_provider(logger_provider)

    otel_handler = LoggingHandler(level=getattr(logging, level), logger_provider=logger_provider)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    for handler in (otel_handler, stream_handler):
        root.addHandler(handler)
        _installed_handlers.append(handler)
    root.setLevel(level)

    logging.getLogger("certgen").setLevel(level)

    return logger_provider
