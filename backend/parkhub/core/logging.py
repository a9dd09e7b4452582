# backend/parkhub/core/logging.py
import logging
import sys
from datetime import datetime, timezone
from typing import Dict, Any
from pythonjsonlogger import jsonlogger

from parkhub.core.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        if record.name:
            log_record["logger"] = record.name

        log_record["level"] = record.levelname

        # Add request context if available
        if hasattr(record, "tenant_id"):
            log_record["tenant_id"] = str(record.tenant_id) if record.tenant_id else None

        if hasattr(record, "user_id"):
            log_record["user_id"] = str(record.user_id) if record.user_id else None

        if hasattr(record, "request_id"):
            log_record["request_id"] = record.request_id


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure structured JSON logging"""
    logger = logging.getLogger("parkhub")
    logger.setLevel(level)
    logger.propagate = False

    # Re-imports must not stack handlers
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(logger)s %(message)s"
        )
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger sharing the parkhub handler, e.g. ``parkhub.vehicles``"""
    return logging.getLogger(f"parkhub.{name}")


# Initialize logger
logger = setup_logging(settings.LOG_LEVEL)
