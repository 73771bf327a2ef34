"""CopyAction — copy the current summary and flash the "copied" flag."""
import asyncio
from typing import Optional

from question_companion.config.settings import get_config
from question_companion.config.logger import get_logger
from question_companion.infra.clipboard import ClipboardUnavailable, ClipboardWriter
from question_companion.pipeline.store import FormStateStore

logger = get_logger(__name__)


class CopyAction:
    """Writes the store's summary to a clipboard and manages the reset timer.

    At most one reset is pending at a time: a second successful copy before
    the first reset fires cancels it and starts the delay over.  After
    ``close()`` the pending reset is cancelled and further copies do nothing.
    """

    def __init__(
        self,
        store: FormStateStore,
        clipboard: ClipboardWriter,
        reset_delay_ms: Optional[int] = None,
    ):
        self.store = store
        self.clipboard = clipboard
        if reset_delay_ms is None:
            reset_delay_ms = get_config().copy_action.reset_delay_ms
        self.reset_delay_ms = reset_delay_ms
        self._reset_handle: Optional[asyncio.TimerHandle] = None
        self._closed = False

    @property
    def reset_pending(self) -> bool:
        return self._reset_handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    async def copy(self) -> bool:
        """Copy the current summary. Returns True on success.

        Never raises on clipboard failure: the error is logged and the
        copied flag is left as it was.
        """
        if self._closed:
            return False

        summary = self.store.view().summary
        try:
            await self.clipboard.write(summary)
        except ClipboardUnavailable as e:
            logger.error(f"Failed to copy summary: {e}")
            return False
        except Exception as e:
            logger.exception(f"Clipboard writer failed unexpectedly: {e}")
            return False

        # The session may have been torn down while the write was in flight
        if self._closed:
            return False

        self.store.set_copied(True)
        self._schedule_reset()
        logger.debug(f"Summary copied ({len(summary)} chars)")
        return True

    def close(self) -> None:
        """Cancel any pending reset; safe to call more than once."""
        self._closed = True
        self._cancel_reset()

    def _schedule_reset(self) -> None:
        self._cancel_reset()
        loop = asyncio.get_running_loop()
        self._reset_handle = loop.call_later(self.reset_delay_ms / 1000, self._reset)

    def _cancel_reset(self) -> None:
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None

    def _reset(self) -> None:
        self._reset_handle = None
        if not self._closed:
            self.store.set_copied(False)
