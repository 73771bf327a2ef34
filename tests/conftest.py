"""
Shared fixtures for the Question Companion test suite.

Provides isolated test environments with:
- Config singleton management (memory clipboard, no log file)
- Web session store cleanup
- A fresh store / memory clipboard per test
"""
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `question_companion` is importable
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# ---------------------------------------------------------------------------
# Core fixtures: config + session isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def isolated_environment():
    """Auto-use fixture that gives every test its own config.

    Resets the global config singleton and the web session store so tests
    never leak state into each other.
    """
    from question_companion.config.logger import configure_logging
    from question_companion.config.settings import Config, set_config
    from question_companion.adapters.web import routes as routes_mod

    config = Config()
    config.copy_action.clipboard_backend = "memory"
    config.copy_action.reset_delay_ms = 100
    config.logging.file = None

    set_config(config)
    configure_logging(config)
    routes_mod.close_all_sessions()

    yield config

    # Teardown: close sessions (cancels pending reset timers) and reset config
    routes_mod.close_all_sessions()
    quiet = Config()
    quiet.logging.file = None
    configure_logging(quiet)
    set_config(Config())


@pytest.fixture
def test_config(isolated_environment):
    """Explicit access to the test Config object."""
    return isolated_environment


@pytest.fixture
def store():
    from question_companion.pipeline.store import FormStateStore
    return FormStateStore()


@pytest.fixture
def clipboard():
    from question_companion.infra.clipboard import MemoryClipboard
    return MemoryClipboard()
