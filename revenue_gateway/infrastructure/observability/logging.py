"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List

from pythonjsonlogger.json import JsonFormatter

from revenue_gateway.config import settings


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_underwriting_completed(
    application_id: str,
    merchant_id: str,
    status: str,
    total_revenue: int,
    data_sources: List[str],
    duration_ms: float,
) -> None:
    """Log structured underwriting outcome for analysis"""
    logging.info(
        "underwriting_completed",
        extra={
            "application_id": application_id,
            "merchant_id": merchant_id,
            "step": "underwriting_complete",
            "status": status,
            "total_revenue": total_revenue,
            "data_sources": data_sources,
            "duration_ms": duration_ms,
        },
    )
