"""
Rendering engine used to lay out HTML and print it to PDF.

The exporter only talks to the small RenderingSession surface below, so the
layout maths can run against any engine. PlaywrightEngine is the real one: each
session launches its own headless Chromium and opens a single page in it.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, AsyncContextManager, AsyncIterator, Dict, List, Optional, Protocol

from playwright.async_api import Page, async_playwright

DEFAULT_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


@dataclass(frozen=True)
class LaunchOptions:
    """How to start the browser for a rendering session."""

    executable_path: str = ""
    headless: bool = True
    args: List[str] = field(default_factory=lambda: list(DEFAULT_LAUNCH_ARGS))

    def to_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"headless": self.headless, "args": list(self.args)}
        if self.executable_path:
            kwargs["executable_path"] = self.executable_path
        return kwargs


class RenderingSession(Protocol):
    """A loaded page that can be styled, queried and printed."""

    async def load_document(self, html: str) -> None: ...

    async def add_style(self, content: Optional[str] = None, path: Optional[Path] = None) -> None: ...

    async def evaluate(self, script: str) -> Any: ...

    async def print_to_pdf(self, path: Path, width: str, height: str, margin_bottom: str = "1px",
                           print_background: bool = True) -> None: ...


class RenderingEngine(Protocol):
    """Factory for rendering sessions. Every session owns a fresh browser."""

    def session(self, options: LaunchOptions) -> AsyncContextManager[RenderingSession]: ...


class PlaywrightSession:
    """RenderingSession backed by a Playwright page."""

    def __init__(self, page: Page):
        self.page = page

    async def load_document(self, html: str) -> None:
        await self.page.set_content(html, wait_until="load")

    async def add_style(self, content: Optional[str] = None, path: Optional[Path] = None) -> None:
        if path is not None:
            await self.page.add_style_tag(path=str(path))
        if content is not None:
            await self.page.add_style_tag(content=content)

    async def evaluate(self, script: str) -> Any:
        return await self.page.evaluate(script)

    async def print_to_pdf(self, path: Path, width: str, height: str, margin_bottom: str = "1px",
                           print_background: bool = True) -> None:
        await self.page.pdf(
            path=str(path),
            width=width,
            height=height,
            margin={"bottom": margin_bottom},
            print_background=print_background,
        )


class PlaywrightEngine:
    """Launches headless Chromium through Playwright."""

    @asynccontextmanager
    async def session(self, options: LaunchOptions) -> AsyncIterator[PlaywrightSession]:
        async with async_playwright() as p:
            browser = await p.chromium.launch(**options.to_kwargs())
            try:
                page = await browser.new_page()
                try:
                    # Long documents must not hit Playwright's 30s default
                    page.set_default_timeout(0)
                    yield PlaywrightSession(page)
                finally:
                    await page.close()
            finally:
                await browser.close()
