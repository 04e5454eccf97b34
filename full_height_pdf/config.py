"""
Configuration for full-height PDF export.

Values are resolved in this order (first match wins):
1) Values passed on the command line
2) Environment variables prefixed with FULL_HEIGHT_PDF_
3) A JSON config file (--config, FULL_HEIGHT_PDF_CONFIG or the user config dir)
4) Built-in defaults

The keys mirror the settings of the editor extension this tool grew out of,
so an existing settings block can be pasted into the JSON file unchanged.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigurationInvalidError

ENV_PREFIX = "FULL_HEIGHT_PDF_"
CONFIG_FILE_ENV = "FULL_HEIGHT_PDF_CONFIG"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "full-height-pdf" / "config.json"

DEFAULT_TITLE = "PDF"

DEFAULTS: Dict[str, Any] = {
    "paperSize": "a4",
    "styleSheet": "",
    "lineHeight": "",
    "generalFontFamily": "",
    "monoFontFamily": "",
    "PDFTitle": "",
    "executablePath": "",
    "exportPath": "",
    "useNaturalWidth": False,
    "debug": False,
}

# Older extension releases called the paper size setting "widthFormat"
KEY_ALIASES = {"widthFormat": "paperSize"}

ENV_NAMES = {
    "paperSize": "PAPER_SIZE",
    "styleSheet": "STYLESHEET",
    "lineHeight": "LINE_HEIGHT",
    "generalFontFamily": "FONT_FAMILY",
    "monoFontFamily": "MONO_FONT_FAMILY",
    "PDFTitle": "TITLE",
    "executablePath": "EXECUTABLE_PATH",
    "exportPath": "EXPORT_PATH",
    "useNaturalWidth": "NATURAL_WIDTH",
    "debug": "DEBUG",
}

BOOLEAN_KEYS = {"useNaturalWidth", "debug"}


def parse_bool(value: Any) -> bool:
    """Parse a boolean from a config or environment value.

    Accepts real booleans and the usual string spellings
    ("1", "true", "yes", "on" / "0", "false", "no", "off", "").
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ConfigurationInvalidError("Expected a boolean value", value=str(value))


@dataclass(frozen=True)
class StyleOverrides:
    """User CSS tweaks applied on top of the rendered document. Empty means unset."""

    line_height: str = ""
    general_font_family: str = ""
    mono_font_family: str = ""
    stylesheet: str = ""


@dataclass(frozen=True)
class ExportSettings:
    """Configuration for a single export, assembled once and passed explicitly."""

    paper_size: str = "a4"
    style: StyleOverrides = field(default_factory=StyleOverrides)
    title: str = DEFAULT_TITLE
    executable_path: str = ""
    export_path: str = ""
    use_natural_width: bool = False
    debug: bool = False


@dataclass(frozen=True)
class RenderRequest:
    """Everything needed to lay out one Markdown document."""

    markdown_text: str
    paper_size: str = "a4"
    style: StyleOverrides = field(default_factory=StyleOverrides)
    title: str = DEFAULT_TITLE

    @classmethod
    def from_settings(cls, markdown_text: str, settings: ExportSettings) -> "RenderRequest":
        return cls(
            markdown_text=markdown_text,
            paper_size=settings.paper_size,
            style=settings.style,
            title=settings.title,
        )


class Config:
    """Layered configuration source for the exporter."""

    def __init__(self, cli_config: Optional[Dict[str, Any]] = None, config_file: Optional[str] = None):
        self.cli_config = self._normalize_keys(cli_config or {})
        self.config_file = self._locate_config_file(config_file)
        self.file_config = self._load_config_file(self.config_file)

    @staticmethod
    def _normalize_keys(values: Dict[str, Any]) -> Dict[str, Any]:
        normalized = {}
        for key, value in values.items():
            key = KEY_ALIASES.get(key, key)
            if key not in DEFAULTS:
                raise ConfigurationInvalidError("Unknown configuration key", key=key)
            normalized[key] = value
        return normalized

    @staticmethod
    def _locate_config_file(config_file: Optional[str]) -> Optional[Path]:
        if config_file:
            path = Path(config_file).expanduser()
            if not path.is_file():
                raise ConfigurationInvalidError("Config file does not exist", key="--config", value=str(path))
            return path
        env_path = os.environ.get(CONFIG_FILE_ENV)
        if env_path:
            path = Path(env_path).expanduser()
            if not path.is_file():
                raise ConfigurationInvalidError("Config file does not exist", key=CONFIG_FILE_ENV, value=str(path))
            return path
        if DEFAULT_CONFIG_FILE.is_file():
            return DEFAULT_CONFIG_FILE
        return None

    def _load_config_file(self, path: Optional[Path]) -> Dict[str, Any]:
        if path is None:
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationInvalidError(f"Could not read config file: {e}", value=str(path)) from e

        if not isinstance(data, dict):
            raise ConfigurationInvalidError("Config file must contain a JSON object", value=str(path))

        # Accept both a flat object and one nested under the extension namespace
        section = data.get("full-height-pdf", data)
        if not isinstance(section, dict):
            raise ConfigurationInvalidError("'full-height-pdf' must be a JSON object", value=str(path))
        return self._normalize_keys(section)

    def get(self, key: str) -> Any:
        """Return the resolved value for a configuration key."""
        key = KEY_ALIASES.get(key, key)
        if key not in DEFAULTS:
            raise ConfigurationInvalidError("Unknown configuration key", key=key)

        if key in self.cli_config and self.cli_config[key] is not None:
            value = self.cli_config[key]
        elif ENV_PREFIX + ENV_NAMES[key] in os.environ:
            value = os.environ[ENV_PREFIX + ENV_NAMES[key]]
        elif key in self.file_config and self.file_config[key] is not None:
            value = self.file_config[key]
        else:
            value = DEFAULTS[key]

        if key in BOOLEAN_KEYS:
            return parse_bool(value)
        return str(value).strip()

    def get_paper_size(self) -> str:
        return self.get("paperSize")

    def get_title(self) -> str:
        title = self.get("PDFTitle")
        return title if title else DEFAULT_TITLE

    def get_executable_path(self) -> str:
        return self.get("executablePath")

    def get_export_path(self) -> str:
        return self.get("exportPath")

    def get_style_overrides(self) -> StyleOverrides:
        return StyleOverrides(
            line_height=self.get("lineHeight"),
            general_font_family=self.get("generalFontFamily"),
            mono_font_family=self.get("monoFontFamily"),
            stylesheet=self.get("styleSheet"),
        )

    def use_natural_width(self) -> bool:
        return self.get("useNaturalWidth")

    def settings(self) -> ExportSettings:
        """Freeze the current values into an ExportSettings snapshot."""
        return ExportSettings(
            paper_size=self.get_paper_size(),
            style=self.get_style_overrides(),
            title=self.get_title(),
            executable_path=self.get_executable_path(),
            export_path=self.get_export_path(),
            use_natural_width=self.use_natural_width(),
            debug=self.get("debug"),
        )
