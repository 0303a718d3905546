from __future__ import annotations

import logging
from typing import Any, Dict

from opentelemetry import _logs as logs
from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor

from ..config import settings

DEFAULT_POSTHOG_ENDPOINT = "https://us.i.posthog.com/i/v1/logs"

_logger_provider: LoggerProvider | None = None
_logger: logging.Logger | None = None
_local_logger = logging.getLogger("listing_scrape.telemetry")


def _resolve_endpoint() -> str:
    if settings.posthog_logs_endpoint:
        return settings.posthog_logs_endpoint.rstrip("/")

    region = (settings.posthog_region or "").lower()
    if region.startswith("eu"):
        return "https://eu.i.posthog.com/i/v1/logs"

    return DEFAULT_POSTHOG_ENDPOINT


def _build_otlp_exporter(endpoint: str, token: str) -> OTLPLogExporter:
    return OTLPLogExporter(endpoint=endpoint, headers={"Authorization": f"Bearer {token}"})


def posthog_enabled() -> bool:
    return bool(settings.posthog_project_api_key) and not settings.posthog_disabled


def _ensure_logger() -> logging.Logger:
    global _logger, _logger_provider

    if _logger:
        return _logger

    token = settings.posthog_project_api_key
    if not token:
        raise RuntimeError("POSTHOG_PROJECT_API_KEY is not configured")

    endpoint = _resolve_endpoint()

    provider = LoggerProvider()
    logs.set_logger_provider(provider)

    exporter = _build_otlp_exporter(endpoint, token)
    provider.add_log_record_processor(BatchLogRecordProcessor(exporter))

    handler = LoggingHandler(level=logging.INFO, logger_provider=provider)
    logger = logging.getLogger("listing_scrape.posthog")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    # Avoid duplicating OTLP handlers when the function is called multiple times.
    logger.handlers = [h for h in logger.handlers if not isinstance(h, LoggingHandler)]
    logger.addHandler(handler)

    _logger_provider = provider
    _logger = logger
    return logger


def _normalize_log_level(level: Any) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        normalized = level.strip().lower()
        if normalized in {"warn", "warning"}:
            return logging.WARNING
        if normalized == "error":
            return logging.ERROR
        if normalized == "debug":
            return logging.DEBUG
        if normalized == "critical":
            return logging.CRITICAL
    return logging.INFO


def emit_posthog_log(payload: Dict[str, Any]) -> None:
    """Send a structured log entry to PostHog via OTLP."""

    logger = _ensure_logger()

    message = payload.get("message") or payload.get("event") or "listing_scrape"
    attributes = {k: v for k, v in payload.items() if k != "message"}
    level = _normalize_log_level(payload.get("level"))
    logger.log(level, message, extra=attributes, stacklevel=2)


def emit_crawl_event(event: str, *, level: str = "info", **data: Any) -> None:
    """Best-effort crawl event; a telemetry failure never interrupts the crawl."""

    if not posthog_enabled():
        return
    try:
        emit_posthog_log({"event": event, "level": level, "data": data})
    except Exception as exc:  # noqa: BLE001
        _local_logger.debug("PostHog emit failed event=%s error=%s", event, exc)


def force_flush_posthog_logs(timeout_ms: int = 30000) -> bool:
    if _logger_provider:
        return _logger_provider.force_flush(timeout_ms)
    return True
