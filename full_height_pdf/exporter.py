#!/usr/bin/env python3
"""
Export Markdown to a single PDF page sized to its content.

Chromium's PDF printer paginates, so the page box is measured first and the
document is then printed onto exactly one page of that size. Every export
launches its own browser and closes it again before returning, whatever
happens in between.
"""

import asyncio
import enum
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config import Config, ExportSettings, RenderRequest
from .console import ConsoleLogMixin
from .dependencies import check_dependencies, install_browser
from .dimensions import BOTTOM_MARGIN_PX, PageBox, apply_base_layout, fixed_page_box, natural_page_box, px
from .encoding import read_with_encoding_detect
from .environment import ConsoleEnvironment, ExportEnvironment
from .exceptions import ConfigurationInvalidError, ContentReadError, RenderFailureError
from .markdown import build_document, convert_markdown_to_html
from .renderer import LaunchOptions, PlaywrightEngine, RenderingEngine
from .styles import apply_style_overrides

PROGRESS_TITLE = "Exporting PDF..."


@dataclass(frozen=True)
class Success:
    path: Path


@dataclass(frozen=True)
class Cancelled:
    reason: str


@dataclass(frozen=True)
class Failed:
    reason: str


@dataclass(frozen=True)
class Warned:
    """Export refused before any rendering started."""

    reason: str


ExportOutcome = Union[Success, Cancelled, Failed, Warned]


class ExportState(enum.Enum):
    IDLE = "idle"
    CONTENT_ACQUIRED = "content_acquired"
    HTML_RENDERED = "html_rendered"
    MEASURED = "measured"
    PDF_WRITTEN = "pdf_written"
    CANCELLED = "cancelled"
    FAILED = "failed"


class PdfExporter(ConsoleLogMixin):
    """Runs one export: read, convert, measure, print, clean up."""

    def __init__(self, settings: ExportSettings, environment: ExportEnvironment,
                 engine: Optional[RenderingEngine] = None):
        self.settings = settings
        self.environment = environment
        self.engine = engine if engine is not None else PlaywrightEngine()
        self.debug = settings.debug
        self.state = ExportState.IDLE

    def _enter(self, state: ExportState) -> None:
        self._log_debug(f"{self.state.value} -> {state.value}")
        self.state = state

    def _finish(self, outcome: ExportOutcome) -> ExportOutcome:
        if isinstance(outcome, Cancelled):
            self._enter(ExportState.CANCELLED)
        elif isinstance(outcome, (Failed, Warned)):
            self._enter(ExportState.FAILED)
        self._enter(ExportState.IDLE)
        return outcome

    def _launch_options(self) -> LaunchOptions:
        return LaunchOptions(executable_path=self.settings.executable_path)

    def _acquire_text(self, source: Optional[Path], force_encoding: Optional[str]) -> Union[str, ExportOutcome]:
        try:
            if source is None:
                text = self.environment.active_text(force_encoding)
            else:
                text = read_with_encoding_detect(source, force_encoding)
        except ContentReadError as e:
            self.environment.show_error("Error", detail=str(e))
            return Failed(str(e))
        if text is None:
            self.environment.show_warning("No active editor")
            return Cancelled("no active document")
        if source is not None and not text:
            self._log_debug(f"{source} is empty, nothing to export")
            return Cancelled("empty document")
        return text

    def _check_executable(self) -> Optional[ExportOutcome]:
        executable = self.settings.executable_path
        if executable and not Path(executable).exists():
            self.environment.show_warning("Chrome executable does not exists", modal=True)
            return Warned(f"executable not found: {executable}")
        return None

    def _resolve_output_path(self, source: Optional[Path]) -> Optional[Path]:
        """Configured export directory or existing .pdf file, otherwise ask."""
        configured = self.settings.export_path
        if configured:
            path = Path(configured).expanduser()
            if path.is_dir():
                stem = source.stem if source is not None else "output"
                return path / f"{stem}.pdf"
            if path.is_file() and path.suffix.lower() == ".pdf":
                return path
            self._log_debug(f"Configured export path {path} is not a directory or an existing .pdf file, asking instead")
        return self.environment.ask_save_path()

    async def _render(self, request: RenderRequest, document: str, output_pdf: Path) -> PageBox:
        launch_options = self._launch_options()
        with self.environment.progress(PROGRESS_TITLE) as step:
            box = None
            if not self.settings.use_natural_width:
                step("Measuring")
                box = await fixed_page_box(self.engine, request, launch_options)
                self._enter(ExportState.MEASURED)

            async with self.engine.session(launch_options) as session:
                step("Loading")
                await session.load_document(document)
                await apply_base_layout(session)
                await apply_style_overrides(session, request.style)

                if box is None:
                    step("Measuring")
                    box = await natural_page_box(session)
                    self._enter(ExportState.MEASURED)

                step("Printing")
                self._log_debug(f"Page box: {box.width} x {box.height}")
                await session.print_to_pdf(
                    output_pdf,
                    width=box.width,
                    height=box.height,
                    margin_bottom=px(BOTTOM_MARGIN_PX),
                    print_background=True,
                )
        return box

    async def export_async(self, source: Optional[Union[str, Path]] = None,
                           force_encoding: Optional[str] = None) -> ExportOutcome:
        """Export the active document, or ``source`` when given."""
        source_path = Path(source) if source is not None else None

        text = self._acquire_text(source_path, force_encoding)
        if not isinstance(text, str):
            return self._finish(text)
        self._enter(ExportState.CONTENT_ACQUIRED)

        request = RenderRequest.from_settings(text, self.settings)
        document = build_document(convert_markdown_to_html(request.markdown_text), request.title)
        self._enter(ExportState.HTML_RENDERED)

        refused = self._check_executable()
        if refused is not None:
            return self._finish(refused)

        output_pdf = self._resolve_output_path(source_path)
        if output_pdf is None:
            self.environment.show_info("output path is not specified")
            return self._finish(Cancelled("output path is not specified"))
        self._log_debug(f"Writing PDF to {output_pdf}")

        try:
            await self._render(request, document, output_pdf)
        except Exception as e:
            failure = RenderFailureError(str(e), stage=self.state.value, original_error=e)
            self._log_debug(f"Rendering failed after state '{failure.stage}'")
            self.environment.show_error("Error", detail=failure.message)
            return self._finish(Failed(failure.message))

        self._enter(ExportState.PDF_WRITTEN)
        self._log_success(f"Exported {output_pdf}")
        return self._finish(Success(output_pdf))

    def export(self, source: Optional[Union[str, Path]] = None, force_encoding: Optional[str] = None) -> ExportOutcome:
        """Synchronous wrapper around export_async."""
        return asyncio.run(self.export_async(source, force_encoding))


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Convert a markdown file to a single-page PDF sized to its content")
    parser.add_argument("file", nargs="?", default=None, help="Markdown file (default: read from stdin)")
    parser.add_argument("-o", "--output", default=None, help="Output PDF path (default: ask)")
    parser.add_argument("--paper-size", default=None, help="Paper width: letter, legal, tabloid, ledger, a0-a6 (default: a4)")
    parser.add_argument("--natural-width", action="store_true", default=None, help="Use the content's own width instead of a paper size")
    parser.add_argument("--stylesheet", default=None, help="Extra CSS file to add to the page (~/ is expanded)")
    parser.add_argument("--line-height", default=None, help="CSS line-height for paragraphs")
    parser.add_argument("--font-family", default=None, help="CSS font-family for headings, paragraphs and table cells")
    parser.add_argument("--mono-font-family", default=None, help="CSS font-family for code")
    parser.add_argument("--title", default=None, help="PDF document title (default: PDF)")
    parser.add_argument("--executable-path", default=None, help="Chrome/Chromium executable to use instead of Playwright's")
    parser.add_argument("--encoding", default=None, help="Decode the input with this encoding instead of detecting it")
    parser.add_argument("--config", default=None, help="JSON config file")
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging for detailed output")
    parser.add_argument("--install-browser", action="store_true", help="Install Playwright's Chromium and exit")

    args = parser.parse_args()

    if args.install_browser:
        sys.exit(0 if install_browser() else 1)

    # Build config from CLI args
    cli_config = {
        "paperSize": args.paper_size,
        "useNaturalWidth": args.natural_width,
        "styleSheet": args.stylesheet,
        "lineHeight": args.line_height,
        "generalFontFamily": args.font_family,
        "monoFontFamily": args.mono_font_family,
        "PDFTitle": args.title,
        "executablePath": args.executable_path,
        "debug": args.debug,
    }

    try:
        settings = Config(cli_config, config_file=args.config).settings()
    except ConfigurationInvalidError as e:
        ConsoleEnvironment().show_error("Invalid configuration", detail=str(e))
        sys.exit(1)

    # Check dependencies
    if not check_dependencies(verbose=settings.debug):
        sys.exit(1)

    environment = ConsoleEnvironment(save_path=args.output, debug=settings.debug)
    exporter = PdfExporter(settings, environment)
    outcome = exporter.export(args.file, force_encoding=args.encoding)
    sys.exit(1 if isinstance(outcome, (Failed, Warned)) else 0)


if __name__ == "__main__":
    main()
