"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from fintrack.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
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


def log_statistics(
    request_id: str,
    user_id: str,
    period: str,
    transaction_count: int,
    over_budget_count: int,
    duration_ms: float,
) -> None:
    """Log structured statistics outcome for analysis"""
    logging.info(
        "Statistics computed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "statistics_complete",
            "period": period,
            "transaction_count": transaction_count,
            "over_budget_count": over_budget_count,
            "duration_ms": duration_ms,
        },
    )
