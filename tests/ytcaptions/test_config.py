"""Tests for settings loading from the environment and a YAML file."""

from pathlib import Path

from pydantic import ValidationError
import pytest
from pytest import MonkeyPatch
import yaml

from ytcaptions.config import CaptionsSettings
from ytcaptions.exceptions import ConfigLoadError
from ytcaptions.formats import Format

SETTING_ENV_VARS = (
    "LOG_FORMAT",
    "LOG_LEVEL",
    "PLATFORM_HOST",
    "DEFAULT_LANG",
    "COOKIES_PATH",
    "USER_AGENT",
    "REQUEST_TIMEOUT",
    "CONFIG_FILE",
    "VIDEO_ID",
    "CAPTION_LANG",
    "TRANSLATE_TO",
    "CAPTION_FORMAT",
)

# --- Fixtures ---


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: MonkeyPatch) -> None:
    """Remove settings variables inherited from the environment."""
    for name in SETTING_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Provide a YAML settings file."""
    path = tmp_path / "ytcaptions.yaml"
    with Path.open(path, "w", encoding="utf-8") as f:
        yaml.dump(
            {
                "video_id": "abc123",
                "caption_lang": "en",
                "caption_format": "srv3",
                "request_timeout": 5,
            },
            f,
        )
    return path


def load(**kwargs: object) -> CaptionsSettings:
    """Load settings without parsing the test runner's argv."""
    return CaptionsSettings(_cli_parse_args=False, **kwargs)  # type: ignore


# --- Tests: CaptionsSettings ---


@pytest.mark.unit
def test_defaults() -> None:
    """Settings default to an srv1 digest fetch from the main host."""
    settings = load()

    assert settings.log_format == "human"
    assert settings.platform_host == "youtube.com"
    assert settings.default_lang == "en"
    assert settings.request_timeout == 30.0
    assert settings.caption_format is Format.SRV1
    assert settings.video_id is None
    assert settings.cookies_path is None
    assert settings.config_file is None


@pytest.mark.unit
def test_env_vars(monkeypatch: MonkeyPatch) -> None:
    """Settings are read from environment variables."""
    monkeypatch.setenv("VIDEO_ID", "xyz789")
    monkeypatch.setenv("CAPTION_FORMAT", "srv2")
    monkeypatch.setenv("PLATFORM_HOST", "m.youtube.com")
    monkeypatch.setenv("TRANSLATE_TO", "fr")

    settings = load()

    assert settings.video_id == "xyz789"
    assert settings.caption_format is Format.SRV2
    assert settings.platform_host == "m.youtube.com"
    assert settings.translate_to == "fr"


@pytest.mark.unit
def test_blank_values_are_unset(monkeypatch: MonkeyPatch) -> None:
    """Empty strings leave optional values unset."""
    monkeypatch.setenv("VIDEO_ID", "")
    monkeypatch.setenv("CAPTION_LANG", "  ")

    settings = load()

    assert settings.video_id is None
    assert settings.caption_lang is None


@pytest.mark.unit
def test_yaml_file_from_env(monkeypatch: MonkeyPatch, config_file: Path) -> None:
    """Values are loaded from the YAML file named by CONFIG_FILE."""
    monkeypatch.setenv("CONFIG_FILE", str(config_file))

    settings = load()

    assert settings.video_id == "abc123"
    assert settings.caption_lang == "en"
    assert settings.caption_format is Format.SRV3
    assert settings.request_timeout == 5.0


@pytest.mark.unit
def test_env_overrides_yaml_file(monkeypatch: MonkeyPatch, config_file: Path) -> None:
    """Environment variables take precedence over the YAML file."""
    monkeypatch.setenv("CONFIG_FILE", str(config_file))
    monkeypatch.setenv("VIDEO_ID", "fromenv")

    settings = load()

    assert settings.video_id == "fromenv"
    assert settings.caption_lang == "en"


@pytest.mark.unit
def test_yaml_file_from_init_arg(config_file: Path) -> None:
    """An initialization argument can name the YAML file."""
    settings = load(config_file=config_file)
    assert settings.video_id == "abc123"


@pytest.mark.unit
def test_missing_yaml_file_raises(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """A YAML file that does not exist fails to load."""
    missing = tmp_path / "missing.yaml"
    monkeypatch.setenv("CONFIG_FILE", str(missing))

    with pytest.raises(
        ConfigLoadError, match="Failed to load or parse YAML configuration file"
    ) as exc_info:
        load()
    assert exc_info.value.config_file == str(missing)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


@pytest.mark.unit
def test_invalid_yaml_raises(tmp_path: Path) -> None:
    """A file holding invalid YAML fails to load."""
    path = tmp_path / "invalid.yaml"
    path.write_text("this: is: not: valid: yaml:")

    with pytest.raises(ConfigLoadError) as exc_info:
        load(config_file=path)
    assert isinstance(exc_info.value.__cause__, yaml.YAMLError)


@pytest.mark.unit
def test_non_mapping_yaml_raises(tmp_path: Path) -> None:
    """A YAML file whose top level is not a mapping fails to load."""
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")

    with pytest.raises(ConfigLoadError, match="must hold a mapping") as exc_info:
        load(config_file=path)
    assert exc_info.value.config_file == str(path)


@pytest.mark.unit
def test_empty_yaml_file_loads_defaults(tmp_path: Path) -> None:
    """An empty YAML file leaves every setting at its default."""
    path = tmp_path / "empty.yaml"
    path.write_text("")

    settings = load(config_file=path)
    assert settings.video_id is None
    assert settings.caption_format is Format.SRV1


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "value"),
    [("CAPTION_FORMAT", "srv9"), ("REQUEST_TIMEOUT", "0"), ("LOG_FORMAT", "xml")],
)
def test_invalid_values_raise(monkeypatch: MonkeyPatch, name: str, value: str) -> None:
    """Values outside their allowed range are rejected."""
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        load()
