from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

RUNTIME_CONFIG_ENV = "LISTING_RUNTIME_CONFIG"


@dataclass
class RuntimeConfig:
    scrape_retry_attempts: int
    scrape_retry_base_delay_ms: int
    jitter_min_ms: int
    jitter_max_ms: int
    extraction_timeout_ms: int
    extraction_settle_ms: int
    extraction_retries: int
    pagination_wait_selector: str
    listings_wait_selector: str


def resolve_runtime_config_path() -> Path:
    """``$LISTING_RUNTIME_CONFIG`` when set, otherwise the packaged runtime.yaml."""

    override = (os.getenv(RUNTIME_CONFIG_ENV) or "").strip()
    if override:
        return Path(override).expanduser()
    return Path(__file__).with_name("runtime.yaml")


def _load_runtime_yaml() -> Dict[str, Any]:
    path = resolve_runtime_config_path()
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return data if isinstance(data, dict) else {}


def _coerce_int(config: Dict[str, Any], key: str, default: int) -> int:
    value = config.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(value)
    return default


def _coerce_str(config: Dict[str, Any], key: str, default: str) -> str:
    value = config.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def build_runtime_config(raw: Dict[str, Any]) -> RuntimeConfig:
    return RuntimeConfig(
        scrape_retry_attempts=_coerce_int(raw, "scrape_retry_attempts", 3),
        scrape_retry_base_delay_ms=_coerce_int(raw, "scrape_retry_base_delay_ms", 2000),
        jitter_min_ms=_coerce_int(raw, "jitter_min_ms", 1000),
        jitter_max_ms=_coerce_int(raw, "jitter_max_ms", 3000),
        extraction_timeout_ms=_coerce_int(raw, "extraction_timeout_ms", 120000),
        extraction_settle_ms=_coerce_int(raw, "extraction_settle_ms", 5000),
        extraction_retries=_coerce_int(raw, "extraction_retries", 3),
        pagination_wait_selector=_coerce_str(
            raw, "pagination_wait_selector", ".pagination-root-Ntd_O"
        ),
        listings_wait_selector=_coerce_str(raw, "listings_wait_selector", ".items-items-kAJAg"),
    )


_raw_runtime_config = _load_runtime_yaml()

runtime_config = build_runtime_config(_raw_runtime_config)
