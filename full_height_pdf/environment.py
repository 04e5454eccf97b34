"""
Host environment the exporter runs in.

The environment supplies the Markdown of the "active document", answers the
save prompt and displays notices. ConsoleEnvironment is the terminal version:
stdin is the active document, ``--output`` (or an interactive prompt) answers
the save prompt, and notices are printed with colour.
"""

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, ContextManager, Iterator, Optional, Protocol, TextIO

from tqdm import tqdm

from .console import ConsoleLogMixin
from .encoding import decode_bytes

ProgressStep = Callable[[str], None]


class ExportEnvironment(Protocol):
    def active_text(self, force_encoding: Optional[str] = None) -> Optional[str]: ...

    def ask_save_path(self) -> Optional[Path]: ...

    def show_info(self, message: str) -> None: ...

    def show_warning(self, message: str, modal: bool = False) -> None: ...

    def show_error(self, message: str, detail: str = "") -> None: ...

    def progress(self, title: str) -> ContextManager[ProgressStep]: ...


class ConsoleEnvironment(ConsoleLogMixin):
    """Terminal implementation of ExportEnvironment."""

    def __init__(self, save_path: Optional[str] = None, stdin: Optional[TextIO] = None,
                 prompt: Callable[[str], str] = input, debug: bool = False):
        self.save_path = save_path
        self.stdin = stdin if stdin is not None else sys.stdin
        self.prompt = prompt
        self.debug = debug
        self._stdin_consumed = False

    def _stdin_is_interactive(self) -> bool:
        isatty = getattr(self.stdin, "isatty", None)
        return bool(isatty and isatty())

    def active_text(self, force_encoding: Optional[str] = None) -> Optional[str]:
        """Markdown piped on stdin, or None when stdin is a terminal.

        Piped bytes are decoded like a file: detected unless forced, invalid
        sequences replaced.
        """
        if self.stdin is None or self._stdin_is_interactive():
            return None
        self._stdin_consumed = True
        buffer = getattr(self.stdin, "buffer", None)
        if buffer is None:
            return self.stdin.read()
        return decode_bytes(buffer.read(), force_encoding)

    def ask_save_path(self) -> Optional[Path]:
        """Answer from --output, else prompt. None means the user declined."""
        if self.save_path:
            return self._with_pdf_suffix(Path(self.save_path).expanduser())
        if self._stdin_consumed or not self._stdin_is_interactive():
            self._log_debug("No terminal to prompt for an output path")
            return None
        try:
            answer = self.prompt("Save PDF as: ").strip()
        except EOFError:
            return None
        if not answer:
            return None
        return self._with_pdf_suffix(Path(answer).expanduser())

    @staticmethod
    def _with_pdf_suffix(path: Path) -> Path:
        if path.suffix.lower() != ".pdf":
            return path.with_name(path.name + ".pdf")
        return path

    def show_info(self, message: str) -> None:
        self._log_info(message)

    def show_warning(self, message: str, modal: bool = False) -> None:
        self._log_warning(message)

    def show_error(self, message: str, detail: str = "") -> None:
        self._log_error(f"{message}: {detail}" if detail else message)

    @contextmanager
    def progress(self, title: str) -> Iterator[ProgressStep]:
        with tqdm(total=None, desc=title, unit="step", leave=False) as pbar:
            def step(description: str) -> None:
                pbar.set_description(f"{title} - {description}")
                pbar.update(1)

            yield step
