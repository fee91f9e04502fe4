"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from fico_simulator.config import settings


# httpx logs every request at INFO; keep analysis calls out of the service log
QUIET_LOGGERS = ("httpx", "httpcore")


class ServiceJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, stamped with UTC time, level and service name"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name
        log_record.setdefault("request_id", None)


def setup_logging(level: str = "INFO") -> None:
    """Route the root logger to stdout as JSON, replacing any earlier handlers"""
    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ServiceJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_analysis(
    request_id: str,
    score: int,
    score_band: str,
    goal_count: int,
    duration_ms: float,
) -> None:
    """Log a scored report; goal_count is how many personalized goals came back"""
    logging.info(
        "Analysis completed",
        extra={
            "request_id": request_id,
            "event": "analysis_complete",
            "score": score,
            "score_band": score_band,
            "goal_count": goal_count,
            "duration_ms": round(duration_ms, 1),
        },
    )


def log_simulation_event(
    request_id: str,
    session_id: str,
    event: str,
    current_step: int,
    projected_score: int,
    applied: Optional[bool] = None,
) -> None:
    """Log a simulator transition; applied=False marks a no-op advance/revert"""
    logging.info(
        "Simulation event",
        extra={
            "request_id": request_id,
            "session_id": session_id,
            "event": event,
            "current_step": current_step,
            "projected_score": projected_score,
            "applied": applied,
        },
    )
