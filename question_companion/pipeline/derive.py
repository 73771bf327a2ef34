"""
Derivation engine — pure functions from a FormState to everything the
presentation layer shows.

Nothing here mutates its input or keeps state between calls, so deriving
twice from the same FormState always yields the same values.

Two notions of "filled" are in play and must not be unified:
  * progress and insights look at the *trimmed* value
  * prompt rules and the summary look at the *raw* value
A whitespace-only field therefore counts as empty for the score but as
filled for prompts and the summary.
"""
from typing import List

from question_companion.config.types import (
    FormState, FormView, Insight, StepKey, STEP_ORDER, Tone,
)
from question_companion.pipeline._catalog import get_section


def compute_progress(state: FormState) -> int:
    """Percentage of fields with non-blank content: 0, 25, 50, 75 or 100."""
    filled = sum(1 for key in STEP_ORDER if state.field_value(key).strip())
    return round(filled / len(STEP_ORDER) * 100)


def build_insights(state: FormState) -> List[Insight]:
    """One insight per field, always in step order regardless of stage."""
    rules = get_section("insights")
    insights = []

    for key in STEP_ORDER:
        rule = rules[key.value]
        if len(state.field_value(key).strip()) > rule["threshold"]:
            tone, phrasing = Tone.POSITIVE, rule["positive"]
        else:
            tone, phrasing = Tone.WARNING, rule["warning"]
        insights.append(Insight(
            title=phrasing["title"],
            description=phrasing["description"],
            tone=tone,
        ))

    return insights


def recommend_prompts(state: FormState) -> List[str]:
    """Follow-up prompts, first come first kept, capped at ``max_prompts``.

    Returns an empty list (never None) once nothing is left to ask.
    """
    section = get_section("prompt_rules")
    prompts: List[str] = []

    for rule in section["rules"]:
        filled = len(state.field_value(StepKey(rule["field"]))) > 0
        if (rule["when"] == "filled") == filled:
            prompts.extend(rule["prompts"])

    return prompts[:section["max_prompts"]]


def format_summary(state: FormState) -> str:
    """Plain-text summary for sharing; the keyword line only appears when tagged."""
    section = get_section("summary")
    empty = section["empty_marker"]

    lines = [
        f"{line['label']}: {state.field_value(StepKey(line['field'])) or empty}"
        for line in section["lines"]
    ]
    if state.keywords:
        joined = section["keyword_separator"].join(state.keywords)
        lines.append(f"{section['keywords_label']}: {joined}")

    return "\n".join(lines)


def derive(state: FormState) -> FormView:
    """Recompute every derived value for *state*."""
    prompts = recommend_prompts(state)
    stage = StepKey(state.stage)
    return FormView(
        progress=compute_progress(state),
        insights=build_insights(state),
        recommended_prompts=prompts,
        summary=format_summary(state),
        copied=state.copied,
        stage=stage,
        keywords=list(state.keywords),
        active_step_index=STEP_ORDER.index(stage),
        all_set=not prompts,
    )
