"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from recovery_gateway.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_recalculation(
    request_id: str,
    tenant_id: str,
    evaluated: int,
    changed: int,
    applied: bool,
    duration_ms: float,
) -> None:
    """Log structured outcome of a category recalculation run"""
    logging.info(
        "Category recalculation completed",
        extra={
            "request_id": request_id,
            "tenant_id": tenant_id,
            "step": "recalculation_complete",
            "debtors_evaluated": evaluated,
            "categories_changed": changed,
            "mode": "applied" if applied else "advisory",
            "duration_ms": duration_ms,
        },
    )


def log_category_change(
    request_id: str,
    tenant_id: str,
    customer_id: str,
    old_category: str,
    new_category: str,
    source: str,
) -> None:
    logging.info(
        "Category changed",
        extra={
            "request_id": request_id,
            "tenant_id": tenant_id,
            "customer_id": customer_id,
            "old_category": old_category,
            "new_category": new_category,
            "source": source,
        },
    )
