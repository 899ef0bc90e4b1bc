"""
Engine configuration.

Values are read from ``TAGAUDIT_``-prefixed environment variables
(and a local ``.env`` file, if present) through
``pydantic_settings.BaseSettings``, which handles type coercion and
validation.
"""

from __future__ import annotations

import functools

import dotenv
import pydantic
import pydantic_settings

from tagaudit.utils import logger

log = logger.create_logger("Config")


class EngineSettings(pydantic_settings.BaseSettings):
    """Tunables for the classification engine.

    Attributes:
        content_id_min_length: Minimum number of characters after the
            ``GTM-`` / ``G-`` prefix for an id found in page or script
            text to count.  Shorter matches are usually unrelated
            tokens such as CSS class names.
        log_url_preview_length: URLs longer than this are truncated
            in log output.
        include_event_summary: Whether verdicts carry the digest of the
            instrumentation event log.
        write_to_file: Mirror each site analysis log to
            ``.logs/<site>_<timestamp>.log``.
    """

    model_config = pydantic_settings.SettingsConfigDict(env_prefix="TAGAUDIT_", extra="ignore")

    content_id_min_length: int = pydantic.Field(default=6, ge=1)
    log_url_preview_length: int = pydantic.Field(default=200, ge=20)
    include_event_summary: bool = True
    write_to_file: bool = False


@functools.lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Load settings once per process."""
    dotenv.load_dotenv()
    settings = EngineSettings()
    log.debug("Engine settings loaded", settings.model_dump())
    return settings
