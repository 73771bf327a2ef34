"""Infrastructure adapters (external capabilities)."""
from .clipboard import (  # noqa: F401
    ClipboardUnavailable,
    ClipboardWriter,
    MemoryClipboard,
    SystemClipboard,
    UnknownClipboardBackend,
    get_clipboard,
)
