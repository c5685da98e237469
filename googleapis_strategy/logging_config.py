"""
Logging configuration for Cloud Run and local environments.

- Cloud Run (K_SERVICE set): google-cloud-logging with trace correlation
- Local/Test: JSON lines on stdout
"""

import json
import logging
import os
from datetime import UTC, datetime

# Attributes every LogRecord has; anything else came in through ``extra=``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

# Never written to the log, whatever the caller passes in ``extra=``
_REDACTED_FIELDS = frozenset({"access_token", "refresh_token", "id_token", "code"})


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter.

    Emits the same shape Cloud Logging uses for jsonPayload, including any
    fields passed through ``extra=``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_object = {
            "timestamp": datetime.now(UTC).isoformat(),
            "severity": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            log_object[key] = "[REDACTED]" if key in _REDACTED_FIELDS else value

        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_object, default=str)


def setup_global_logging(level: int | str | None = None) -> None:
    """
    Configure global logging based on environment.

    Args:
        level: Root log level; defaults to the LOG_LEVEL env var, then INFO
    """
    level = level or os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    is_cloud_run = os.getenv("K_SERVICE") is not None

    if is_cloud_run:
        try:
            import google.cloud.logging

            client = google.cloud.logging.Client()
            client.setup_logging(log_level=level)
            logging.info("Cloud Logging initialized for Cloud Run.")
            return
        except Exception as e:
            logging.basicConfig(
                level=level,
                format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            )
            logging.warning(f"Cloud Logging setup failed, using basic config: {e}")
            return

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, JsonFormatter):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
