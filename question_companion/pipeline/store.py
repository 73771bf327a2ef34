"""
FormStateStore — sole owner of a session's FormState.

Every mutation replaces the state snapshot and then pushes a freshly derived
FormView to subscribers before returning, so observers never see a field
update without its recomputed score, insights, prompts and summary.
"""
from typing import Callable, List, Optional, Union

from question_companion.config.logger import get_logger
from question_companion.config.types import FormState, FormView, StepKey, STEP_ORDER
from question_companion.pipeline.derive import derive

logger = get_logger(__name__)


Listener = Callable[[FormView], None]


class FormStateStore:
    """Holds the four text fields, stage cursor, keyword tags and copied flag."""

    def __init__(self, state: Optional[FormState] = None):
        self._state = state.model_copy(deep=True) if state else FormState()
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def state(self) -> FormState:
        """A snapshot copy; mutating it does not affect the store."""
        return self._state.model_copy(deep=True)

    def view(self) -> FormView:
        return derive(self._state)

    # ------------------------------------------------------------------
    # Field setters
    # ------------------------------------------------------------------

    def set_field(self, key: Union[StepKey, str], value: str) -> None:
        """Replace one text field unconditionally.

        Raises:
            ValueError: if *key* is not one of the four step keys.
            TypeError: if *value* is not a string.
        """
        key = StepKey(key)
        if not isinstance(value, str):
            raise TypeError(f"{key.value} must be a string, got {type(value).__name__}")
        self._commit(**{key.value: value})

    def set_question(self, value: str) -> None:
        self.set_field(StepKey.QUESTION, value)

    def set_background(self, value: str) -> None:
        self.set_field(StepKey.BACKGROUND, value)

    def set_goal(self, value: str) -> None:
        self.set_field(StepKey.GOAL, value)

    def set_constraints(self, value: str) -> None:
        self.set_field(StepKey.CONSTRAINTS, value)

    # ------------------------------------------------------------------
    # Stage navigation
    # ------------------------------------------------------------------

    def set_stage(self, stage: Union[StepKey, str]) -> None:
        """Move the display cursor.

        Raises:
            ValueError: if *stage* is not one of the four step keys.
        """
        self._commit(stage=StepKey(stage))

    def next_stage(self) -> None:
        index = STEP_ORDER.index(StepKey(self._state.stage))
        self.set_stage(STEP_ORDER[min(index + 1, len(STEP_ORDER) - 1)])

    def previous_stage(self) -> None:
        index = STEP_ORDER.index(StepKey(self._state.stage))
        self.set_stage(STEP_ORDER[max(index - 1, 0)])

    # ------------------------------------------------------------------
    # Keywords + copied flag
    # ------------------------------------------------------------------

    def toggle_keyword(self, keyword: str) -> None:
        """Remove *keyword* if tagged, otherwise append it to the end."""
        keywords = list(self._state.keywords)
        if keyword in keywords:
            keywords.remove(keyword)
        else:
            keywords.append(keyword)
        self._commit(keywords=keywords)

    def set_copied(self, copied: bool) -> None:
        if self._state.copied == copied:
            return
        self._commit(copied=copied)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with the new view after every mutation.

        Returns a function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        if not self._listeners:
            return
        view = derive(self._state)
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception as e:
                logger.exception(f"Subscriber {listener!r} failed: {e}")
