"""
Tests for question_companion.pipeline.copy_action.CopyAction — clipboard
success/failure handling, the copied-flag reset timer, and teardown.

Async code is driven with asyncio.run inside plain tests.
"""
import asyncio
from unittest.mock import patch

import pytest

from question_companion.infra.clipboard import ClipboardUnavailable, MemoryClipboard
from question_companion.pipeline.copy_action import CopyAction


class _BrokenClipboard:
    async def write(self, text):
        raise RuntimeError("backend exploded")


class _SlowClipboard:
    def __init__(self):
        self.release = None
        self.history = []

    async def write(self, text):
        self.release = asyncio.Event()
        await self.release.wait()
        self.history.append(text)


class TestCopySuccess:
    def test_writes_current_summary(self, store, clipboard):
        store.set_question("X")
        action = CopyAction(store, clipboard)

        assert asyncio.run(action.copy()) is True
        assert clipboard.last == (
            "🧠 Question: X\n"
            "📚 Background: —\n"
            "🎯 Desired outcome: —\n"
            "⏱️ Constraints: —"
        )
        assert store.state.copied is True

    def test_default_delay_comes_from_config(self, store, clipboard, test_config):
        test_config.copy_action.reset_delay_ms = 1234
        assert CopyAction(store, clipboard).reset_delay_ms == 1234

    def test_flag_resets_after_delay(self, store, clipboard):
        async def scenario():
            action = CopyAction(store, clipboard, reset_delay_ms=30)
            await action.copy()
            during = store.state.copied
            await asyncio.sleep(0.1)
            return during, store.state.copied, action.reset_pending

        during, after, pending = asyncio.run(scenario())
        assert during is True
        assert after is False
        assert pending is False

    def test_second_copy_restarts_delay(self, store, clipboard):
        async def scenario():
            action = CopyAction(store, clipboard, reset_delay_ms=100)
            await action.copy()
            await asyncio.sleep(0.06)
            await action.copy()
            await asyncio.sleep(0.06)
            # 120ms after the first copy, 60ms after the second
            still_copied = store.state.copied
            await asyncio.sleep(0.1)
            return still_copied, store.state.copied

        still_copied, after = asyncio.run(scenario())
        assert still_copied is True
        assert after is False
        assert len(clipboard.history) == 2


class TestCopyFailure:
    def test_unavailable_clipboard_does_not_raise(self, store):
        action = CopyAction(store, MemoryClipboard(available=False))
        assert asyncio.run(action.copy()) is False
        assert store.state.copied is False
        assert action.reset_pending is False

    def test_unexpected_writer_error_is_contained(self, store):
        action = CopyAction(store, _BrokenClipboard())
        assert asyncio.run(action.copy()) is False
        assert store.state.copied is False

    def test_failing_subscriber_does_not_escape_copy(self, store, clipboard):
        def broken(view):
            raise RuntimeError("listener boom")

        store.subscribe(broken)

        async def scenario():
            action = CopyAction(store, clipboard, reset_delay_ms=30)
            ok = await action.copy()
            during = (store.state.copied, action.reset_pending)
            await asyncio.sleep(0.1)
            return ok, during, store.state.copied

        ok, during, after = asyncio.run(scenario())
        assert ok is True
        assert during == (True, True)
        assert after is False

    def test_failure_is_logged(self, store):
        with patch("question_companion.pipeline.copy_action.logger") as mock_logger:
            asyncio.run(CopyAction(store, MemoryClipboard(available=False)).copy())
        mock_logger.error.assert_called_once()
        assert "Failed to copy summary" in mock_logger.error.call_args[0][0]

    def test_memory_clipboard_raises_when_unavailable(self):
        with pytest.raises(ClipboardUnavailable):
            asyncio.run(MemoryClipboard(available=False).write("x"))


class TestTeardown:
    def test_close_cancels_pending_reset(self, store, clipboard):
        async def scenario():
            action = CopyAction(store, clipboard, reset_delay_ms=30)
            await action.copy()
            action.close()
            pending = action.reset_pending
            await asyncio.sleep(0.08)
            return pending

        pending = asyncio.run(scenario())
        assert pending is False
        # Timer never fired onto the state
        assert store.state.copied is True

    def test_copy_after_close_is_noop(self, store, clipboard):
        action = CopyAction(store, clipboard)
        action.close()
        action.close()
        assert asyncio.run(action.copy()) is False
        assert clipboard.history == []
        assert store.state.copied is False

    def test_close_during_write_skips_flag(self, store):
        slow = _SlowClipboard()

        async def scenario():
            action = CopyAction(store, slow, reset_delay_ms=30)
            task = asyncio.create_task(action.copy())
            await asyncio.sleep(0)
            action.close()
            slow.release.set()
            return await task, action.reset_pending

        result, pending = asyncio.run(scenario())
        assert result is False
        assert pending is False
        assert store.state.copied is False
