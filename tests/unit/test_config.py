"""Unit tests for layered configuration."""

import json

import pytest

from full_height_pdf.config import Config, ExportSettings, RenderRequest, StyleOverrides, parse_bool
from full_height_pdf.exceptions import ConfigurationInvalidError


@pytest.mark.unit
def test_defaults():
    settings = Config().settings()

    assert settings == ExportSettings()
    assert settings.paper_size == "a4"
    assert settings.title == "PDF"
    assert settings.use_natural_width is False
    assert settings.style == StyleOverrides()


@pytest.mark.unit
def test_config_file_values(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "full-height-pdf": {
            "widthFormat": "Letter",
            "lineHeight": "1.6",
            "PDFTitle": "Notes",
            "useNaturalWidth": "true",
        }
    }), encoding="utf-8")

    settings = Config(config_file=str(config_file)).settings()

    assert settings.paper_size == "Letter"
    assert settings.style.line_height == "1.6"
    assert settings.title == "Notes"
    assert settings.use_natural_width is True


@pytest.mark.unit
def test_precedence_cli_over_env_over_file(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"paperSize": "a5", "monoFontFamily": "Menlo"}), encoding="utf-8")
    monkeypatch.setenv("FULL_HEIGHT_PDF_PAPER_SIZE", "a3")
    monkeypatch.setenv("FULL_HEIGHT_PDF_MONO_FONT_FAMILY", "Consolas")

    config = Config({"paperSize": "a1", "monoFontFamily": None}, config_file=str(config_file))

    assert config.get_paper_size() == "a1"
    assert config.get_style_overrides().mono_font_family == "Consolas"


@pytest.mark.unit
def test_config_file_from_environment(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"executablePath": "/opt/chrome/chrome"}), encoding="utf-8")
    monkeypatch.setenv("FULL_HEIGHT_PDF_CONFIG", str(config_file))

    assert Config().get_executable_path() == "/opt/chrome/chrome"


@pytest.mark.unit
def test_empty_title_falls_back_to_pdf():
    assert Config({"PDFTitle": ""}).get_title() == "PDF"


@pytest.mark.unit
def test_unknown_key_rejected():
    with pytest.raises(ConfigurationInvalidError):
        Config({"pageHeight": "100px"})


@pytest.mark.unit
def test_missing_config_file_rejected(tmp_path):
    with pytest.raises(ConfigurationInvalidError):
        Config(config_file=str(tmp_path / "missing.json"))


@pytest.mark.unit
def test_malformed_config_file_rejected(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationInvalidError):
        Config(config_file=str(config_file))


@pytest.mark.unit
@pytest.mark.parametrize("value,expected", [(True, True), ("yes", True), ("1", True), ("off", False), ("", False)])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


@pytest.mark.unit
def test_parse_bool_rejects_garbage():
    with pytest.raises(ConfigurationInvalidError):
        parse_bool("maybe")


@pytest.mark.unit
def test_render_request_from_settings():
    settings = ExportSettings(paper_size="a6", style=StyleOverrides(line_height="2"), title="Doc")

    request = RenderRequest.from_settings("# Hi", settings)

    assert request == RenderRequest("# Hi", paper_size="a6", style=StyleOverrides(line_height="2"), title="Doc")
