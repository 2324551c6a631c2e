"""Unit tests for configuration loading."""

from pathlib import Path

import pydantic
import pytest

from exchange_docs.config import Settings, load_settings


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_when_file_missing(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "missing.toml")

        assert isinstance(settings, Settings)
        assert settings.locale.locale == "es-ES"
        assert settings.locale.received_currency == "EUR"
        assert settings.locale.delivered_currency == "VES"
        assert settings.documents.report_name == "reporte-financiero"
        assert settings.documents.receipt_name == "recibo"
        assert settings.rendering.rich is True
        assert settings.rendering.basic is False
        assert settings.logo.timeout == 5.0

    def test_reads_toml(self, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text(
            """
[paths]
output = "~/recibos"

[locale]
locale = "en-US"
delivered_currency = "usd"

[documents]
modern_design = true

[rendering]
rich = false
tables = false

[logo]
timeout = 1.5
"""
        )
        settings = load_settings(config)

        assert settings.paths.output == Path("~/recibos").expanduser()
        assert settings.locale.locale == "en-US"
        assert settings.locale.delivered_currency == "USD"
        assert settings.documents.modern_design is True
        assert settings.rendering.rich is False
        assert settings.rendering.tables is False
        assert settings.logo.timeout == 1.5

    def test_rejects_unknown_locale(self, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text('[locale]\nlocale = "fr-FR"\n')
        with pytest.raises(pydantic.ValidationError):
            load_settings(config)
