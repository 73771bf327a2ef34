"""
Question Companion - shape a question into a well-formed, shareable brief
"""

__version__ = "1.0.0"

from .config import get_config, get_env_settings, load_config, FormState, FormView, Insight, StepKey, Tone
from .pipeline import (
    CompanionSession,
    CopyAction,
    FormStateStore,
    build_insights,
    compute_progress,
    derive,
    format_summary,
    recommend_prompts,
)
from .infra import ClipboardUnavailable, MemoryClipboard, SystemClipboard, get_clipboard
from .config.logger import get_logger

__all__ = [
    # Config
    "get_config",
    "get_env_settings",
    "load_config",

    # Types
    "FormState",
    "FormView",
    "Insight",
    "StepKey",
    "Tone",

    # Pipeline
    "CompanionSession",
    "CopyAction",
    "FormStateStore",
    "build_insights",
    "compute_progress",
    "derive",
    "format_summary",
    "recommend_prompts",

    # Clipboard
    "ClipboardUnavailable",
    "MemoryClipboard",
    "SystemClipboard",
    "get_clipboard",

    # Logger
    "get_logger",
]
