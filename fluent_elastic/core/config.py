"""Builder configuration."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class ComposerSettings(BaseSettings):
    """
    Builder settings.

    Set freeze_after_render via the FLUENT_ELASTIC_FREEZE_AFTER_RENDER environment variable.
    If enabled, a composer that has rendered once rejects further registrations with
    ComposerFrozenError. Default is False, so builders may be extended and re-rendered.

    Set pretty_print via FLUENT_ELASTIC_PRETTY_PRINT to indent the output of SearchBody.to_json
    when no explicit choice is passed.
    """

    model_config = SettingsConfigDict(env_prefix="FLUENT_ELASTIC_")

    freeze_after_render: bool = False
    pretty_print: bool = False


@lru_cache()
def get_settings() -> ComposerSettings:
    """Return the process-wide builder settings, read once from the environment."""
    settings = ComposerSettings()
    if settings.freeze_after_render:
        logger.info(
            "FLUENT_ELASTIC_FREEZE_AFTER_RENDER is True: rendered builders reject new parts"
        )
    return settings
