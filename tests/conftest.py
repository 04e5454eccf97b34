"""Shared fixtures: a fake rendering engine and a recording environment."""

from contextlib import asynccontextmanager, contextmanager
from pathlib import Path
from typing import List, Optional

import pytest

import full_height_pdf.config as config_module


class FakeSession:
    """RenderingSession that returns fixed metrics and records every call."""

    def __init__(self, engine: "FakeEngine"):
        self.engine = engine
        self.documents: List[str] = []
        self.styles: List[tuple] = []
        self.scripts: List[str] = []
        self.printed: List[dict] = []

    def _maybe_fail(self, stage: str) -> None:
        if self.engine.fail_on == stage:
            raise RuntimeError(f"renderer exploded during {stage}")

    async def load_document(self, html: str) -> None:
        self._maybe_fail("load")
        self.documents.append(html)

    async def add_style(self, content: Optional[str] = None, path: Optional[Path] = None) -> None:
        if path is not None:
            self.styles.append(("path", path))
        if content is not None:
            self.styles.append(("content", content))

    async def evaluate(self, script: str):
        self._maybe_fail("evaluate")
        self.scripts.append(script)
        if "getElementById" in script:
            return self.engine.container_height
        if "Width" in script:
            return self.engine.document_width
        return self.engine.document_height

    async def print_to_pdf(self, path: Path, width: str, height: str, margin_bottom: str = "1px",
                           print_background: bool = True) -> None:
        self._maybe_fail("print")
        self.printed.append({
            "path": Path(path),
            "width": width,
            "height": height,
            "margin_bottom": margin_bottom,
            "print_background": print_background,
        })
        Path(path).write_bytes(b"%PDF-1.4 fake")


class FakeEngine:
    """RenderingEngine that tracks how many sessions were opened and closed."""

    def __init__(self, container_height: int = 300, document_height: int = 900,
                 document_width: int = 1024, fail_on: Optional[str] = None):
        self.container_height = container_height
        self.document_height = document_height
        self.document_width = document_width
        self.fail_on = fail_on
        self.sessions: List[FakeSession] = []
        self.launch_options = []
        self.active = 0
        self.max_active = 0
        self.closed = 0

    @property
    def launches(self) -> int:
        return len(self.sessions)

    @asynccontextmanager
    async def session(self, options):
        session = FakeSession(self)
        self.sessions.append(session)
        self.launch_options.append(options)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            yield session
        finally:
            self.active -= 1
            self.closed += 1


class RecordingEnvironment:
    """ExportEnvironment that answers from fixed values and records notices."""

    def __init__(self, text: Optional[str] = None, save_path: Optional[Path] = None,
                 read_error: Optional[Exception] = None):
        self.text = text
        self.read_error = read_error
        self.encodings: List[Optional[str]] = []
        self.save_path = save_path
        self.save_prompts = 0
        self.infos: List[str] = []
        self.warnings: List[tuple] = []
        self.errors: List[tuple] = []
        self.steps: List[str] = []

    def active_text(self, force_encoding: Optional[str] = None) -> Optional[str]:
        self.encodings.append(force_encoding)
        if self.read_error is not None:
            raise self.read_error
        return self.text

    def ask_save_path(self) -> Optional[Path]:
        self.save_prompts += 1
        return self.save_path

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    def show_warning(self, message: str, modal: bool = False) -> None:
        self.warnings.append((message, modal))

    def show_error(self, message: str, detail: str = "") -> None:
        self.errors.append((message, detail))

    @contextmanager
    def progress(self, title: str):
        self.steps.append(title)
        yield self.steps.append


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep the user's config file and FULL_HEIGHT_PDF_* variables out of tests."""
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_FILE", tmp_path / "no-such-config.json")
    monkeypatch.delenv(config_module.CONFIG_FILE_ENV, raising=False)
    for name in config_module.ENV_NAMES.values():
        monkeypatch.delenv(config_module.ENV_PREFIX + name, raising=False)


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def output_pdf(tmp_path):
    return tmp_path / "out.pdf"
