"""
Page box resolution for single-page PDFs.

Chromium paginates whatever does not fit into the requested page, so the page
has to be made exactly as tall as the laid-out content. Height depends on width
(text reflows), so the width is always fixed first and the height measured
against it.

There are two strategies and they are never mixed:

* Fixed paper width: in a separate measurement session ``div#container`` is
  constrained to the paper width and its height becomes the page height.
* Natural width: no width constraint exists, so both width and height are
  taken from the whole document (``documentElement`` and ``body``) in the
  session that prints.
"""

from dataclasses import dataclass

from .config import RenderRequest
from .markdown import build_measurement_document, convert_markdown_to_html
from .renderer import LaunchOptions, RenderingEngine, RenderingSession
from .styles import apply_style_overrides

DEFAULT_PAPER_WIDTH = "21.0cm"

# Chromium needs a hair of bottom margin or it emits a blank trailing page
BOTTOM_MARGIN_PX = 1

PAPER_WIDTHS = {
    "legal": "215.9mm",
    "letter": "215.9mm",
    "tabloid": "279.4mm",
    "ledger": "279.4mm",
    "a0": "84.1cm",
    "a1": "59.4cm",
    "a2": "42.0cm",
    "a3": "29.7cm",
    "a4": "21.0cm",
    "a5": "14.8cm",
    "a6": "10.5cm",
}

# Shared by the measurement and the print document so both lay out alike.
# flow-root keeps the children's margins inside the container's box.
BASE_LAYOUT_CSS = """html, body {
    margin: 0;
    padding: 0;
}
div#container {
    display: flow-root;
    box-sizing: border-box;
    padding: 8px;
}"""

CONTAINER_HEIGHT_SCRIPT = """() => {
    const container = document.getElementById("container");
    return Math.max(
        container.clientHeight,
        container.scrollHeight,
        Math.ceil(container.getBoundingClientRect().height)
    );
}"""

DOCUMENT_HEIGHT_SCRIPT = """() => Math.max(
    document.documentElement.clientHeight, document.documentElement.scrollHeight,
    document.body.clientHeight, document.body.scrollHeight
)"""

DOCUMENT_WIDTH_SCRIPT = """() => Math.max(
    document.documentElement.clientWidth, document.documentElement.scrollWidth,
    document.body.clientWidth, document.body.scrollWidth
)"""


@dataclass(frozen=True)
class PageBox:
    """Width and height of the single PDF page, as CSS lengths."""

    width: str
    height: str


def px(value) -> str:
    return f"{int(value)}px"


def paper_width(size_name: str) -> str:
    """Physical width for a named paper size.

    Names are case-insensitive. Unknown or empty names get the A4 width.
    """
    return PAPER_WIDTHS.get((size_name or "").strip().lower(), DEFAULT_PAPER_WIDTH)


async def apply_base_layout(session: RenderingSession) -> None:
    await session.add_style(content=BASE_LAYOUT_CSS)


async def resolve_natural_width(session: RenderingSession) -> str:
    """Widest of the root and body client/scroll widths, in pixels."""
    width = await session.evaluate(DOCUMENT_WIDTH_SCRIPT)
    return px(width)


async def measure_document_height(session: RenderingSession) -> int:
    """Tallest of the root and body client/scroll heights, in pixels."""
    return int(await session.evaluate(DOCUMENT_HEIGHT_SCRIPT))


async def constrain_container(session: RenderingSession, width: str) -> None:
    await session.add_style(content=f"div#container {{\n    width: {width};\n}}")


async def measure_container_height(session: RenderingSession) -> int:
    """Tallest extent of ``div#container`` (client or scroll height)."""
    return int(await session.evaluate(CONTAINER_HEIGHT_SCRIPT))


async def calculate_page_height(engine: RenderingEngine, request: RenderRequest, launch_options: LaunchOptions) -> int:
    """Measure the content height at the request's paper width.

    Runs in its own rendering session, independent of the one used to print.
    """
    width = paper_width(request.paper_size)
    document = build_measurement_document(convert_markdown_to_html(request.markdown_text))

    async with engine.session(launch_options) as session:
        await session.load_document(document)
        await apply_base_layout(session)
        await constrain_container(session, width)
        await apply_style_overrides(session, request.style)
        return await measure_container_height(session)


def page_height(content_height: int) -> str:
    """Page height that leaves ``content_height`` free above the bottom margin."""
    return px(content_height + BOTTOM_MARGIN_PX)


async def fixed_page_box(engine: RenderingEngine, request: RenderRequest, launch_options: LaunchOptions) -> PageBox:
    """Page box at the named paper width, measured in a session of its own."""
    height = await calculate_page_height(engine, request, launch_options)
    return PageBox(width=paper_width(request.paper_size), height=page_height(height))


async def natural_page_box(session: RenderingSession) -> PageBox:
    """Page box taken from the whole document in ``session``.

    ``session`` must already hold the printable document with overrides applied.
    """
    height = await measure_document_height(session)
    width = await resolve_natural_width(session)
    return PageBox(width=width, height=page_height(height))
