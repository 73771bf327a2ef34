"""Configuration helpers."""
from .settings import (
    Config,
    Settings,
    apply_overrides,
    get_config,
    get_env_settings,
    load_config,
    set_config,
)
from .types import (
    FormState,
    FormView,
    Insight,
    Step,
    StepKey,
    STEP_ORDER,
    Tone,
)

__all__ = [
    "Config",
    "Settings",
    "apply_overrides",
    "get_config",
    "get_env_settings",
    "load_config",
    "set_config",
    "FormState",
    "FormView",
    "Insight",
    "Step",
    "StepKey",
    "STEP_ORDER",
    "Tone",
]
