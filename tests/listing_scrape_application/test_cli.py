from __future__ import annotations

import pytest

from listing_scrape_application import cli
from listing_scrape_application.workflows.exceptions import MissingConfigurationError


@pytest.fixture
def quiet_cli(monkeypatch, tmp_path, restore_root_logging):
    monkeypatch.setattr(cli.settings, "log_dir", str(tmp_path / "logs"))
    monkeypatch.setattr(cli.telemetry, "force_flush_posthog_logs", lambda *_a, **_k: True)
    return tmp_path


def test_main_passes_cli_overrides(monkeypatch, quiet_cli):
    captured = {}

    async def fake_load(options, refresh=False):
        captured["options"] = options
        captured["refresh"] = refresh
        return [{"title": "A", "price": 1, "location": "B"}]

    monkeypatch.setattr(cli, "load_or_scrape_listings", fake_load)

    code = cli.main(
        [
            "--index-url",
            "https://site.test/list",
            "--output",
            str(quiet_cli / "out.json"),
            "--max-pages",
            "4",
            "--refresh",
        ]
    )

    assert code == 0
    assert captured["refresh"] is True
    assert captured["options"].index_url == "https://site.test/list"
    assert captured["options"].output_path == str(quiet_cli / "out.json")
    assert captured["options"].max_pages == 4
    assert (quiet_cli / "logs" / "listing_scrape.log").exists()


def test_main_reports_empty_crawl(monkeypatch, quiet_cli):
    async def fake_load(options, refresh=False):
        return []

    monkeypatch.setattr(cli, "load_or_scrape_listings", fake_load)

    assert cli.main([]) == 2


def test_main_exits_on_missing_configuration(monkeypatch, quiet_cli):
    async def fake_load(options, refresh=False):
        raise MissingConfigurationError("FIRECRAWL_API_KEY env var is required for Firecrawl")

    monkeypatch.setattr(cli, "load_or_scrape_listings", fake_load)

    assert cli.main([]) == 1
