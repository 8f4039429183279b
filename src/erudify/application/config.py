from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from erudify.consts import STATE_FILE_NAME


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/erudify/config.toml",
        Path.home() / ".erudify.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for erudify.
    Supports loading from:
    1. Config file (~/.config/erudify/config.toml or ~/.erudify.toml)
    2. Environment variables (ERUDIFY_*)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="ERUDIFY_",
        extra="ignore",
    )

    # Dictionary
    dictionary_path: Path | None = None
    frequency_path: Path | None = None

    # Storage
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".config/erudify")
    state_file: Path | None = None

    # Conversion
    strict_segmentation: bool = True
    loose_tones: bool = True

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Only the first existing file is used; sources listed first win.
        for toml_file in config_files():
            if toml_file.exists():
                return (
                    init_settings,
                    env_settings,
                    TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
                )

        return (init_settings, env_settings)

    @field_validator("dictionary_path", "frequency_path", "state_file", mode="before")
    @classmethod
    def resolve_optional_path(cls, v: Any) -> Path | None:
        if not v:
            return None
        return Path(v).expanduser().resolve()

    @field_validator("data_dir", mode="before")
    @classmethod
    def resolve_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/erudify/config.toml (if exists)
    3. Environment variables (ERUDIFY_*)
    4. cli_overrides (non-None values passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    config = AppConfig(**overrides)

    if config.state_file is None:
        config.state_file = config.data_dir / STATE_FILE_NAME

    return config
