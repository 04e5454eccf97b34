"""Markdown to HTML conversion and page template assembly."""

import html

from latex2mathml.converter import convert as latex_to_mathml
from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin

MEASUREMENT_TITLE = "Calculate Width"


def render_math(tex: str, options: dict) -> str:
    """Typeset TeX as MathML, which Chromium lays out without any script.

    TeX that cannot be converted is shown as its escaped source.
    """
    display = "block" if options.get("display_mode") else "inline"
    try:
        return latex_to_mathml(tex, display=display)
    except Exception:
        return html.escape(tex)


def _build_markdown_parser() -> MarkdownIt:
    # Raw HTML is escaped so no script can change the layout between measuring and printing
    md = MarkdownIt("commonmark", {"html": False}).enable("table").enable("strikethrough")
    # Parse $...$ / $$...$$ as math tokens before emphasis rules can mangle the TeX
    md.use(dollarmath_plugin, double_inline=True, renderer=render_math)
    return md


def convert_markdown_to_html(text: str) -> str:
    """Render Markdown (with $...$ math) to an HTML fragment."""
    return _build_markdown_parser().render(text)


def build_document(body_html: str, title: str) -> str:
    """Wrap an HTML fragment in the document that gets printed."""
    return f"""<!DOCTYPE html>
<html>
    <head>
        <meta charset="utf-8">
        <title>{html.escape(title)}</title>
    </head>
    <body><div id="container">{body_html}</div></body>
</html>"""


def build_measurement_document(body_html: str) -> str:
    """Wrap an HTML fragment in a container whose width can be constrained."""
    return (
        '<!DOCTYPE html><html><head><meta charset="utf-8">'
        f"<title>{MEASUREMENT_TITLE}</title></head>"
        f'<body><div id="container">{body_html}</div></body></html>'
    )
