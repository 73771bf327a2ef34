"""
CompanionSession — facade for one form session.

Single API for the CLI and web adapters: bundles the state store with its
copy action so callers never wire the two together themselves, and owns
teardown so no reset timer outlives the session.
"""
from typing import Optional

from question_companion.config.settings import get_config
from question_companion.config.types import FormState, FormView
from question_companion.config.logger import get_logger
from question_companion.infra.clipboard import ClipboardWriter, get_clipboard
from question_companion.pipeline.copy_action import CopyAction
from question_companion.pipeline.store import FormStateStore

logger = get_logger(__name__)


class CompanionSession:
    """One page session: state store + copy action."""

    def __init__(
        self,
        clipboard: Optional[ClipboardWriter] = None,
        state: Optional[FormState] = None,
        reset_delay_ms: Optional[int] = None,
    ):
        if clipboard is None:
            clipboard = get_clipboard(get_config().copy_action.clipboard_backend)
        self.store = FormStateStore(state)
        self.copy_action = CopyAction(self.store, clipboard, reset_delay_ms=reset_delay_ms)

    @property
    def closed(self) -> bool:
        return self.copy_action.closed

    def view(self) -> FormView:
        return self.store.view()

    async def copy_summary(self) -> bool:
        return await self.copy_action.copy()

    def close(self) -> None:
        if not self.copy_action.closed:
            logger.debug("Closing companion session")
        self.copy_action.close()

    def __enter__(self) -> "CompanionSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
