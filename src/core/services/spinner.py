"""
Progress spinner — a ticker thread that animates one task line.

Renders ``[TASK] <label>... <glyph>`` at a fixed interval until stopped,
then clears the line.  The ticker waits on a ``threading.Event``, so
stopping it takes effect immediately instead of after the next sleep.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Sequence
from typing import Any, TextIO

from src.core.data.constants import SPINNER_GLYPHS, SPINNER_INTERVAL_S

_MAGENTA = "\033[0;35m"
_CYAN = "\033[0;36m"
_RESET = "\033[0m"
_CLEAR_LINE = "\r\033[K"


def _is_terminal(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


class Spinner:
    """Animated task line for a long-running external command.

    Args:
        label: Human-readable task description.
        interval: Seconds between frames.
        glyphs: Frame cycle.
        stream: Where to render (default: stderr).
        interactive: Force animation on/off.  Defaults to whether
            ``stream`` is a terminal; a non-terminal stream gets the
            task line once, without frames.
    """

    def __init__(
        self,
        label: str,
        *,
        interval: float = SPINNER_INTERVAL_S,
        glyphs: Sequence[str] = SPINNER_GLYPHS,
        stream: TextIO | None = None,
        interactive: bool | None = None,
    ) -> None:
        self.label = label
        self.interval = interval
        self.glyphs = tuple(glyphs) or SPINNER_GLYPHS
        self.frames = 0
        self._stream = stream if stream is not None else sys.stderr
        self._interactive = (
            _is_terminal(self._stream) if interactive is None else interactive
        )
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> Spinner:
        if not self._interactive:
            self._write(f"[TASK] {self.label}...\n")
            return self

        self._write(f"{self._prefix()}  ")
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._tick,
            daemon=True,
            name="spinner",
        )
        self._thread.start()
        return self

    def stop(self) -> None:
        self._stop.set()
        if self._thread is None:
            return
        self._thread.join()
        self._thread = None
        self._write(_CLEAR_LINE)

    def _tick(self) -> None:
        idx = 0
        while not self._stop.wait(self.interval):
            idx = (idx + 1) % len(self.glyphs)
            self.frames += 1
            self._write(f"\r{self._prefix()} {_CYAN}{self.glyphs[idx]}{_RESET}")

    def _prefix(self) -> str:
        return f"{_MAGENTA}[TASK]{_RESET} {self.label}..."

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()

    def __enter__(self) -> Spinner:
        return self.start()

    def __exit__(self, *exc: Any) -> None:
        self.stop()
