"""Pipeline package for Question Companion."""
from .derive import (  # noqa: F401
    build_insights,
    compute_progress,
    derive,
    format_summary,
    recommend_prompts,
)
from .store import FormStateStore  # noqa: F401
from .copy_action import CopyAction  # noqa: F401
from .service import CompanionSession  # noqa: F401
