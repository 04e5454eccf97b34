"""User style overrides injected into the rendered document."""

import os
from pathlib import Path
from typing import List, Optional

from .config import StyleOverrides
from .renderer import RenderingSession


def expanduser(text: str) -> str:
    """Expand a leading "~/" to the home directory. Other forms are left alone."""
    if text.startswith("~/"):
        return os.path.join(str(Path.home()), text[2:])
    return text


def resolve_stylesheet(stylesheet: str) -> Optional[Path]:
    """Return the stylesheet path if it points at an existing regular file."""
    if not stylesheet:
        return None
    path = Path(expanduser(stylesheet))
    if path.is_file() and not path.is_symlink():
        return path
    return None


def build_override_css(overrides: StyleOverrides) -> str:
    """Generate CSS rules for the configured overrides.

    A property that is not configured gets no rule at all, so the document's
    own styling stays in effect for it.
    """
    rules: List[str] = []
    if overrides.line_height:
        rules.append(f"p {{\n    line-height: {overrides.line_height};\n}}")
    if overrides.general_font_family:
        rules.append(f"h1,h2,h3,h4,h5,h6,p,td {{\n    font-family: {overrides.general_font_family};\n}}")
    if overrides.mono_font_family:
        rules.append(f"pre,code {{\n    font-family: {overrides.mono_font_family};\n}}")
    return "\n".join(rules)


async def apply_style_overrides(session: RenderingSession, overrides: StyleOverrides) -> None:
    """Add the external stylesheet and the generated override rules to the page."""
    stylesheet = resolve_stylesheet(overrides.stylesheet)
    if stylesheet is not None:
        await session.add_style(path=stylesheet)

    css = build_override_css(overrides)
    if css:
        await session.add_style(content=css)
