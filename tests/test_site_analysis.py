"""Tests for tagaudit.pipeline.site_analysis — the per-site entry point."""

from __future__ import annotations

import pathlib

import pytest

from tagaudit import config
from tagaudit.models import events, evidence
from tagaudit.pipeline import site_analysis
from tagaudit.utils import logger

from conftest import GA_COLLECT_V2, GTAG_LOAD, GTM_LOAD


class TestAnalyzeSite:
    def test_end_to_end(
        self,
        settings: config.EngineSettings,
        gtm_page_html: str,
        cookiebot_snapshot: evidence.RuntimeSnapshot,
        sample_events: list[events.InstrumentationEvent],
    ) -> None:
        observation = evidence.SiteObservation(
            website="https://shop.example",
            requests=[evidence.ObservedRequest(url=u) for u in (GTM_LOAD, GA_COLLECT_V2)],
            contents=[evidence.ObservedContent(text=gtm_page_html)],
            snapshot=cookiebot_snapshot,
            events=sample_events,
        )
        result = site_analysis.analyze_site(observation, settings)
        assert result.website == "https://shop.example"
        assert result.tracking_type == "GTM (client-side)"
        assert result.consent_mode.summary == "Yes v2"
        assert result.event_summary is not None

    def test_from_urls_helper(self, settings: config.EngineSettings) -> None:
        observation = evidence.SiteObservation.from_urls("https://blog.example", [GTAG_LOAD])
        result = site_analysis.analyze_site(observation, settings)
        assert result.tracking_type == "GA4 gtag.js (client-side)"
        assert result.ga4_ids == ["G-GTAG001"]

    def test_empty_observation(self, settings: config.EngineSettings) -> None:
        result = site_analysis.analyze_site(evidence.SiteObservation(website="https://empty.example"), settings)
        assert result.tracking_type == "Unknown"
        assert result.succeeded

    def test_settings_min_length_applies(self) -> None:
        strict = config.EngineSettings(content_id_min_length=10)
        observation = evidence.SiteObservation.from_urls("https://c.example", [], html="G-QWERTY1")
        result = site_analysis.analyze_site(observation, strict)
        assert result.ga4_ids == []

    def test_settings_can_drop_event_summary(self, sample_events: list[events.InstrumentationEvent]) -> None:
        observation = evidence.SiteObservation(website="https://x.example", events=sample_events)
        result = site_analysis.analyze_site(observation, config.EngineSettings(include_event_summary=False))
        assert result.event_summary is None

    def test_logs_progress(self, settings: config.EngineSettings) -> None:
        logger.clear_log_buffer()
        site_analysis.analyze_site(evidence.SiteObservation.from_urls("https://a.example", [GTM_LOAD]), settings)
        lines = logger.get_log_buffer()
        assert any("Analysing https://a.example" in line for line in lines)
        assert any("Site analysed" in line and "GTM (client-side)" in line for line in lines)

    def test_writes_log_file_when_enabled(self, tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        settings = config.EngineSettings(write_to_file=True)
        site_analysis.analyze_site(evidence.SiteObservation.from_urls("https://www.a.example", [GTM_LOAD]), settings)
        files = list((tmp_path / ".logs").glob("a.example_*.log"))
        assert len(files) == 1
        assert "GTM (client-side)" in files[0].read_text(encoding="utf-8")

    def test_no_log_file_by_default(
        self, settings: config.EngineSettings, tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        site_analysis.analyze_site(evidence.SiteObservation.from_urls("https://a.example", [GTM_LOAD]), settings)
        assert not (tmp_path / ".logs").exists()


class TestFailedVerdictReexport:
    def test_same_function(self) -> None:
        verdict = site_analysis.failed_verdict("https://down.example", "timeout")
        assert verdict.error == "timeout"
