"""Tests for tagaudit.utils errors, serialization and logger helpers, and config."""

from __future__ import annotations

import pathlib

import pydantic
import pytest

from tagaudit import config
from tagaudit.utils import logger
from tagaudit.utils.errors import get_error_message
from tagaudit.utils.serialization import snake_to_camel


class TestGetErrorMessage:
    def test_exception_with_message(self) -> None:
        assert get_error_message(ValueError("something broke")) == "something broke"

    def test_exception_without_message(self) -> None:
        assert get_error_message(ValueError()) == "ValueError"

    def test_string(self) -> None:
        assert get_error_message("net::ERR_TIMED_OUT") == "net::ERR_TIMED_OUT"

    def test_empty_string(self) -> None:
        assert get_error_message("") == "Unknown error"

    def test_other_object(self) -> None:
        assert get_error_message(42) == "Unknown error"


class TestSnakeToCamel:
    @pytest.mark.parametrize(
        ("input_str", "expected"),
        [
            ("gtm_ids", "gtmIds"),
            ("ga4_ids", "ga4Ids"),
            ("gtm_loaded_initially", "gtmLoadedInitially"),
            ("consent_tool_states", "consentToolStates"),
            ("website", "website"),
            ("", ""),
        ],
    )
    def test_conversion(self, input_str: str, expected: str) -> None:
        assert snake_to_camel(input_str) == expected


class TestLogger:
    def test_buffer_strips_ansi(self) -> None:
        logger.clear_log_buffer()
        logger.create_logger("Test").info("hello", {"count": 3, "flag": True})
        (line,) = logger.get_log_buffer()
        assert "\033[" not in line
        assert "[Test] hello count=3 flag=True" in line

    def test_timer(self) -> None:
        log = logger.create_logger("Test")
        log.start_timer("step")
        assert log.end_timer("step") >= 0.0

    def test_unstarted_timer(self) -> None:
        logger.clear_log_buffer()
        assert logger.create_logger("Test").end_timer("never") == 0.0
        assert any("was not started" in line for line in logger.get_log_buffer())

    def test_no_file_when_disabled(self, tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert logger.start_log_file("https://example.com", enabled=False) is None
        assert not (tmp_path / ".logs").exists()

    def test_file_mirrors_lines(self, tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        path = logger.start_log_file("https://www.example.com/shop", enabled=True)
        assert path is not None
        logger.create_logger("Test").info("mirrored")
        logger.end_log_file()
        assert "[Test] mirrored" in pathlib.Path(path).read_text(encoding="utf-8")
        assert pathlib.Path(path).name.startswith("example.com_shop_")


class TestEngineSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TAGAUDIT_CONTENT_ID_MIN_LENGTH", raising=False)
        monkeypatch.delenv("TAGAUDIT_WRITE_TO_FILE", raising=False)
        settings = config.EngineSettings()
        assert settings.content_id_min_length == 6
        assert settings.include_event_summary
        assert not settings.write_to_file

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TAGAUDIT_CONTENT_ID_MIN_LENGTH", "8")
        monkeypatch.setenv("TAGAUDIT_INCLUDE_EVENT_SUMMARY", "false")
        monkeypatch.setenv("TAGAUDIT_WRITE_TO_FILE", "true")
        settings = config.EngineSettings()
        assert settings.content_id_min_length == 8
        assert not settings.include_event_summary
        assert settings.write_to_file

    def test_rejects_zero_length(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            config.EngineSettings(content_id_min_length=0)

    def test_get_settings_is_cached(self) -> None:
        config.get_settings.cache_clear()
        assert config.get_settings() is config.get_settings()
        config.get_settings.cache_clear()
