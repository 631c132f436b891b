from __future__ import annotations

import sys
from typing import Optional, TextIO


class TextConsoleStream:
    """Writes console lines to a text stream (stdout unless given)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def write_line(self, line: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"{line}\n")
        stream.flush()
