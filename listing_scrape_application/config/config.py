from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    value = os.getenv(name, default)
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


DEFAULT_INDEX_URL = (
    "https://www.avito.ru/moskva_i_mo/kvartiry/prodam/vtorichka/"
    "big-kitchen-ASgBAgECAkSSA8YQ5geMUgFFrCoVeyJmcm9tIjoxMCwidG8iOm51bGx9"
    "?context=&localPriority=0&metro=11"
)
DEFAULT_BASE_ORIGIN = "https://www.avito.ru"


@dataclass
class Settings:
    # API key for Firecrawl SDK (required before any crawl starts)
    firecrawl_api_key: str | None = os.getenv("FIRECRAWL_API_KEY")
    firecrawl_api_url: str = os.getenv("FIRECRAWL_API_URL", "https://api.firecrawl.dev")

    # Listing index page and the origin its relative pagination links resolve against
    index_url: str = os.getenv("LISTING_INDEX_URL", DEFAULT_INDEX_URL)
    base_origin: str = os.getenv("LISTING_BASE_ORIGIN", DEFAULT_BASE_ORIGIN)

    # Checkpoint / final output file
    output_path: str = os.getenv("LISTING_OUTPUT_PATH", "avito_listings.json")
    log_dir: str = os.getenv("LISTING_LOG_DIR", "logs")

    # PostHog logging (OTLP) configuration
    posthog_project_api_key: str | None = os.getenv("POSTHOG_PROJECT_API_KEY")
    posthog_logs_endpoint: str | None = os.getenv("POSTHOG_LOGS_ENDPOINT")
    posthog_region: str | None = os.getenv("POSTHOG_REGION")
    posthog_disabled: bool = _env_flag("POSTHOG_DISABLED", "false") or _env_flag(
        "POSTHOG_DISABLE", "false"
    )


settings = Settings()
