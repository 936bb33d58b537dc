import json
import logging
from datetime import UTC, datetime


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings for structured logging systems (ELK, Datadog, etc.)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "process_id": record.process,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Extra fields passed via 'extra'
        for key in ("service", "request_id", "bed_id", "model", "namespace"):
            if hasattr(record, key):
                log_obj[key] = getattr(record, key)

        return json.dumps(log_obj)


class ServiceNameFilter(logging.Filter):
    """Stamp every record with the owning service name."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "service"):
            record.service = self.service_name
        return True


def setup_structured_logging(service_name: str, level: str = "INFO"):
    """
    Configure the root logger to use JSON formatting
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    handler.addFilter(ServiceNameFilter(service_name))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace existing handlers (e.g. uvicorn default config) to avoid duplicates
    if root_logger.handlers:
        root_logger.handlers = []

    root_logger.addHandler(handler)


def setup_plain_logging(level: str = "INFO"):
    """Human-readable logging for local development and the CLI."""
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
