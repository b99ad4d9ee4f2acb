"""Structured Logging — JSON formatter, setup, and per-request access logging.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (paste_id, error_code, path, method, status_code, duration_ms,
      block_count, table, entries) surfaced when present
    - JSON format in production, human-readable in development
    - Every HTTP request produces exactly one access log line, errors included

Design Decisions:
    - stdlib logging + small JSONFormatter: no extra dependency
    - setup_logging called once on startup via lifespan
    - Access logging as a plain ASGI-level http middleware: sees the final
      status code after exception handlers ran
"""

import logging
import json
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request

_EXTRA_KEYS = (
    "paste_id", "error_code", "path", "method", "status_code",
    "duration_ms", "block_count", "table", "entries",
)

access_logger = logging.getLogger("pokebin.access")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure root logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


def add_access_logging(app: FastAPI) -> None:
    """Log method, path, status and latency for every request."""

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        access_logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return response
