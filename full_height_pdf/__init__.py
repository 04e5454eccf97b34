"""Export Markdown to a single PDF page sized to fit its content."""

from .config import Config, ExportSettings, RenderRequest, StyleOverrides
from .dimensions import PageBox, paper_width
from .exporter import Cancelled, ExportOutcome, Failed, PdfExporter, Success, Warned

__version__ = "0.1.0"

__all__ = [
    "Cancelled",
    "Config",
    "ExportOutcome",
    "ExportSettings",
    "Failed",
    "PageBox",
    "PdfExporter",
    "RenderRequest",
    "StyleOverrides",
    "Success",
    "Warned",
    "paper_width",
]
