"""
Domain models (enums + Pydantic data models) for Question Companion.
"""
from typing import List
from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================

class StepKey(str, Enum):
    QUESTION = "question"
    BACKGROUND = "background"
    GOAL = "goal"
    CONSTRAINTS = "constraints"


class Tone(str, Enum):
    POSITIVE = "positive"
    WARNING = "warning"


# Field order is fixed everywhere: wizard steps, insights, summary lines.
STEP_ORDER: List[StepKey] = [
    StepKey.QUESTION,
    StepKey.BACKGROUND,
    StepKey.GOAL,
    StepKey.CONSTRAINTS,
]


# =============================================================================
# FORM MODELS
# =============================================================================

class FormState(BaseModel):
    """Raw input state of one form session"""
    question: str = ""
    background: str = ""
    goal: str = ""
    constraints: str = ""
    stage: StepKey = StepKey.QUESTION
    keywords: List[str] = Field(default_factory=list)  # insertion order, no duplicates
    copied: bool = False

    class Config:
        use_enum_values = True

    def field_value(self, key: StepKey) -> str:
        return getattr(self, StepKey(key).value)


class Insight(BaseModel):
    """Rule-based feedback about one field"""
    title: str
    description: str
    tone: Tone

    class Config:
        use_enum_values = True
        frozen = True


class Step(BaseModel):
    """Catalog entry describing one wizard step"""
    key: StepKey
    title: str
    description: str
    label: str
    placeholder: str

    class Config:
        use_enum_values = True


class FormView(BaseModel):
    """Everything the presentation layer needs, derived from a FormState"""
    progress: int
    insights: List[Insight]
    recommended_prompts: List[str]
    summary: str
    copied: bool
    stage: StepKey
    keywords: List[str]
    active_step_index: int
    all_set: bool

    class Config:
        use_enum_values = True
