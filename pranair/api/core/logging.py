"""Logging helpers for the PranAIR service."""
from __future__ import annotations

import logging
import re
import time
from collections.abc import Mapping
from typing import Any, Callable

from fastapi import FastAPI, Request

_RE_SENSITIVE = re.compile(
    r"([\w.+-]+@[\w-]+\.[\w.-]+|\+?\d{1,3}[\s-]?\(?\d{2,4}\)?[\s-]?\d{3,5}[\s-]?\d{4})"
)


class PHIRedactor(logging.Filter):
    """Filter that redacts phone numbers and e-mail addresses from log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if isinstance(record.msg, str):
            record.msg = _RE_SENSITIVE.sub("[REDACTED]", record.msg)
        if isinstance(record.args, Mapping):
            record.args = {key: _redact(value) for key, value in record.args.items()}
        elif record.args:
            args = record.args if isinstance(record.args, tuple) else (record.args,)
            record.args = tuple(_redact(arg) for arg in args)
        return True


def _redact(value: Any) -> Any:
    return _RE_SENSITIVE.sub("[REDACTED]", value) if isinstance(value, str) else value


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure global logging handlers."""

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    redactor = PHIRedactor()
    logging.getLogger("uvicorn.access").addFilter(redactor)
    # Logger filters are not inherited, so redact at the root handlers too.
    for handler in logging.getLogger().handlers:
        handler.addFilter(redactor)


async def timing_middleware(request: Request, call_next: Callable):
    """Log HTTP request duration."""

    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logging.getLogger("pranair.request").info(
        "%s %s -> %s in %.2f ms", request.method, request.url.path, response.status_code, duration_ms
    )
    return response


def register_middleware(app: FastAPI) -> None:
    app.middleware("http")(timing_middleware)
