"""Reading Markdown files whose encoding is not known up front."""

import codecs
from pathlib import Path
from typing import Optional, Union

import chardet

from .exceptions import ContentReadError

DEFAULT_ENCODING = "utf-8"

# chardet reports Shift_JIS text without multibyte runs as windows-1252.
# Those files are decoded as Shift_JIS instead.
ENCODING_REMAP = {"windows-1252": "shift_jis"}


def detect_encoding(data: bytes) -> str:
    """Guess the encoding of ``data``, applying the remap table."""
    guess = chardet.detect(data).get("encoding") or DEFAULT_ENCODING
    return ENCODING_REMAP.get(guess.lower(), guess)


def decode_bytes(data: bytes, force_encoding: Optional[str] = None) -> str:
    """Decode ``data`` with the forced encoding or the detected one.

    Invalid byte sequences are replaced, never raised.
    """
    encoding = force_encoding or detect_encoding(data)
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ContentReadError(f"Unknown encoding '{encoding}'", original_error=e) from e
    return data.decode(encoding, errors="replace")


def read_with_encoding_detect(path: Union[str, Path], force_encoding: Optional[str] = None) -> str:
    """Read a text file, detecting its encoding unless one is forced."""
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ContentReadError("Could not read file", path=path, original_error=e) from e

    try:
        return decode_bytes(data, force_encoding)
    except ContentReadError as e:
        raise ContentReadError(e.message, path=path, original_error=e.original_error) from e
