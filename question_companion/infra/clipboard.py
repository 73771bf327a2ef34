"""
Clipboard capability for Question Companion.

The core only needs ``await clipboard.write(text)``; any failure surfaces as
``ClipboardUnavailable`` and the caller decides what to do with it.
"""
import asyncio
from typing import List, Optional, Protocol

import pyperclip

from question_companion.config.logger import get_logger

logger = get_logger(__name__)


class ClipboardUnavailable(Exception):
    """The clipboard could not be written (missing backend, denied, OS error)."""


class UnknownClipboardBackend(ValueError):
    pass


class ClipboardWriter(Protocol):
    async def write(self, text: str) -> None:
        ...


class SystemClipboard:
    """OS clipboard via pyperclip (pbcopy, xclip/xsel, wl-copy, win32)."""

    async def write(self, text: str) -> None:
        # pyperclip shells out on most platforms; keep it off the event loop
        try:
            await asyncio.to_thread(pyperclip.copy, text)
        except (pyperclip.PyperclipException, OSError) as e:
            raise ClipboardUnavailable(str(e)) from e
        logger.debug(f"Copied {len(text)} chars to system clipboard")


class MemoryClipboard:
    """In-process clipboard that remembers everything written to it.

    Used on headless hosts (the web API) where there is no system clipboard
    to speak of, and by tests to simulate an unavailable clipboard.
    """

    def __init__(self, available: bool = True):
        self.available = available
        self.history: List[str] = []

    @property
    def last(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    async def write(self, text: str) -> None:
        if not self.available:
            raise ClipboardUnavailable("Clipboard is not available")
        self.history.append(text)


_BACKENDS = {
    "system": SystemClipboard,
    "memory": MemoryClipboard,
}


def get_clipboard(backend: str = "system") -> ClipboardWriter:
    """Build a clipboard writer by backend name.

    Raises:
        UnknownClipboardBackend: if *backend* is not a known name.
    """
    factory = _BACKENDS.get(backend.lower())
    if factory is None:
        raise UnknownClipboardBackend(
            f"Unknown clipboard backend '{backend}'. Expected one of: {', '.join(_BACKENDS)}"
        )
    return factory()
