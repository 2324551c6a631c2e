"""Configuration management using pydantic-settings."""

import tomllib
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.formatting import LOCALES
from .domain.models import DEFAULT_COUNTRY
from .domain.services import DEFAULT_RECEIPT_NAME, DEFAULT_REPORT_NAME

DEFAULT_OUTPUT = "~/Documents/exchange-docs"
DEFAULT_LOGO_TIMEOUT = 5.0
CONFIG_PATH = Path("~/.config/exchange-docs/config.toml").expanduser()


class PathsConfig(BaseSettings):
    output: Path = Path(DEFAULT_OUTPUT).expanduser()

    @field_validator("output", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()


class LocaleConfig(BaseSettings):
    """Number formatting and currencies shown on documents."""

    locale: str = "es-ES"
    received_currency: str = "EUR"
    delivered_currency: str = "VES"
    default_country: str = DEFAULT_COUNTRY

    @field_validator("locale")
    @classmethod
    def known_locale(cls, v: str) -> str:
        if v not in LOCALES:
            raise ValueError(f"locale must be one of {', '.join(LOCALES)}")
        return v

    @field_validator("received_currency", "delivered_currency")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.upper()


class DocumentsConfig(BaseSettings):
    report_name: str = DEFAULT_REPORT_NAME
    receipt_name: str = DEFAULT_RECEIPT_NAME
    modern_design: bool = False
    enable_validation: bool = True


class RenderingConfig(BaseSettings):
    """Capabilities of the rendering environment."""

    rich: bool = True
    basic: bool = False
    tables: bool = True


class LogoConfig(BaseSettings):
    timeout: float = DEFAULT_LOGO_TIMEOUT  # seconds


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EXCHANGE_DOCS_", env_nested_delimiter="__")

    paths: PathsConfig = PathsConfig()
    locale: LocaleConfig = LocaleConfig()
    documents: DocumentsConfig = DocumentsConfig()
    rendering: RenderingConfig = RenderingConfig()
    logo: LogoConfig = LogoConfig()


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        return Settings(
            paths=PathsConfig(**data.get("paths", {})),
            locale=LocaleConfig(**data.get("locale", {})),
            documents=DocumentsConfig(**data.get("documents", {})),
            rendering=RenderingConfig(**data.get("rendering", {})),
            logo=LogoConfig(**data.get("logo", {})),
        )

    return Settings()
