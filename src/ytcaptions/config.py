"""Settings management for ytcaptions.

This module defines the settings model for the command-line tool and the
YAML settings source it reads from an optional configuration file. The
library itself takes its parameters explicitly and never reads settings.
"""

import logging
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
import yaml

from .exceptions import ConfigLoadError
from .formats import Format
from .markers import DEFAULT_HOST

logger = logging.getLogger(__name__)


class YamlFileFromFieldSource(PydanticBaseSettingsSource):
    """Load settings from the YAML file named by the ``config_file`` setting.

    This source must run after the sources that may name the file. Without
    a file it contributes nothing.
    """

    def _config_file(self) -> Path | None:
        value = self.current_state.get("config_file") or self.current_state.get(
            "CONFIG_FILE"
        )
        return Path(value).expanduser() if value else None

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        # the whole mapping is returned from __call__
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Read the YAML file, if one is named."""
        yaml_path = self._config_file()
        if yaml_path is None:
            return {}

        logger.debug("Loading YAML configuration.", extra={"file_path": str(yaml_path)})
        try:
            with yaml_path.open(encoding="utf-8") as f:
                loaded_yaml = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(
                "Failed to load or parse YAML configuration file.",
                config_file=str(yaml_path),
            ) from e

        match loaded_yaml:
            case None:
                return {}
            case dict():
                return cast(dict[str, Any], loaded_yaml)
            case _:
                raise ConfigLoadError(
                    "YAML configuration file must hold a mapping.",
                    config_file=str(yaml_path),
                )


class CaptionsSettings(BaseSettings):
    """Settings for the ytcaptions command-line tool.

    Loaded from initialization arguments, CLI flags, environment variables
    and an optional YAML file, in that order of precedence.

    Attributes:
        log_format: Format for logs (human or json).
        log_level: Logging level for the ytcaptions loggers.
        log_include_stacktrace: Include full stack traces in error logs.
        platform_host: Host the watch pages are fetched from.
        default_lang: Interface language of the watch page.
        cookies_path: Netscape-format cookies file to authenticate with.
        user_agent: User-Agent header sent with every request.
        request_timeout: Timeout in seconds for each request.
        config_file: Path to an optional YAML settings file.
        video_id: Video to fetch captions for.
        caption_lang: Language of the caption track to fetch, if any.
        translate_to: Language to machine-translate the track into.
        caption_format: Wire format to fetch the track in.
    """

    log_format: Literal["human", "json"] = Field(
        default="human",
        validation_alias="LOG_FORMAT",
        description="Format for logs ('human' or 'json').",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (e.g., DEBUG, INFO, WARNING). Case-insensitive.",
    )
    log_include_stacktrace: bool = Field(
        default=False,
        validation_alias="LOG_INCLUDE_STACKTRACE",
        description="Include full stack traces in error logs (true/false).",
    )
    platform_host: str = Field(
        default=DEFAULT_HOST,
        validation_alias="PLATFORM_HOST",
        description="Host the watch pages are fetched from.",
    )
    default_lang: str = Field(
        default="en",
        validation_alias="DEFAULT_LANG",
        description="Interface language of the watch page; also the language of track names.",
    )
    cookies_path: Path | None = Field(
        default=None,
        validation_alias="COOKIES_PATH",
        description="Optional path to a Netscape-format cookies.txt file.",
    )
    user_agent: str | None = Field(
        default=None,
        validation_alias="USER_AGENT",
        description="User-Agent header sent with every request.",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        validation_alias="REQUEST_TIMEOUT",
        description="Timeout in seconds for each request.",
    )
    config_file: Path | None = Field(
        default=None,
        validation_alias="CONFIG_FILE",
        description="Path to an optional YAML settings file.",
    )

    video_id: str | None = Field(
        default=None,
        validation_alias="VIDEO_ID",
        description="Video to fetch captions for.",
    )
    caption_lang: str | None = Field(
        default=None,
        validation_alias="CAPTION_LANG",
        description="Language of the caption track to fetch. Without it, the digest is printed.",
    )
    translate_to: str | None = Field(
        default=None,
        validation_alias="TRANSLATE_TO",
        description="Language to machine-translate the caption track into.",
    )
    caption_format: Format = Field(
        default=Format.SRV1,
        validation_alias="CAPTION_FORMAT",
        description="Wire format to fetch the caption track in.",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        cli_parse_args=True,
        cli_ignore_unknown_args=True,
        cli_kebab_case=True,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("video_id", "caption_lang", "translate_to", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty strings as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Read the YAML file after the sources that may name it."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlFileFromFieldSource(settings_cls=settings_cls),
            file_secret_settings,
        )
