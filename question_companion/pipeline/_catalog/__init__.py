"""Load the static text catalog (steps, insights, prompts, summary labels).

All user-facing copy lives in ``catalog.yaml`` next to this module so the
derivation code stays free of string literals.  The file is loaded and
validated once at import time; a malformed catalog is fatal.

Public API:
    get_catalog()         -> the whole catalog dict
    get_section(name)     -> one top-level section
    get_steps()           -> list[Step] in wizard order
    get_message(name)     -> a UI message string
"""
from pathlib import Path
from typing import List

import yaml

from question_companion.config.types import Step, STEP_ORDER

_CATALOG_FILE = Path(__file__).parent / "catalog.yaml"

# Top-level sections and the keys each entry must carry.
_EXPECTED_SCHEMA: dict[str, list[str]] = {
    "steps": ["key", "title", "description", "label", "placeholder"],
    "insights": ["threshold", "positive", "warning"],
    "prompt_rules": ["max_prompts", "rules"],
    "summary": ["empty_marker", "lines", "keywords_label", "keyword_separator"],
    "messages": ["all_set", "empty_summary", "copy_idle", "copy_done"],
}

_FIELD_KEYS = [key.value for key in STEP_ORDER]

_CATALOG: dict = {}


def _load() -> None:
    with open(_CATALOG_FILE, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not data:
        raise RuntimeError(f"Catalog file {_CATALOG_FILE.name} is empty or failed to parse")
    if not isinstance(data, dict):
        raise RuntimeError(
            f"Catalog file {_CATALOG_FILE.name} must be a YAML mapping, "
            f"got {type(data).__name__}"
        )
    _CATALOG.update(data)


def _validate_schema() -> None:
    """Validate every expected section is present with its required keys."""
    for section, required in _EXPECTED_SCHEMA.items():
        if section not in _CATALOG:
            raise RuntimeError(f"Catalog is missing section '{section}'")

    steps = _CATALOG["steps"]
    if [s.get("key") for s in steps] != _FIELD_KEYS:
        raise RuntimeError(f"Catalog steps must be exactly {_FIELD_KEYS} in order")
    for step in steps:
        _require(step, _EXPECTED_SCHEMA["steps"], f"steps.{step['key']}")

    insights = _CATALOG["insights"]
    for field in _FIELD_KEYS:
        if field not in insights:
            raise RuntimeError(f"Catalog insights missing field '{field}'")
        _require(insights[field], _EXPECTED_SCHEMA["insights"], f"insights.{field}")
        for tone in ("positive", "warning"):
            _require(insights[field][tone], ["title", "description"], f"insights.{field}.{tone}")

    rules = _CATALOG["prompt_rules"]
    _require(rules, _EXPECTED_SCHEMA["prompt_rules"], "prompt_rules")
    for i, rule in enumerate(rules["rules"]):
        _require(rule, ["field", "when", "prompts"], f"prompt_rules.rules[{i}]")
        if rule["field"] not in _FIELD_KEYS:
            raise RuntimeError(f"prompt_rules.rules[{i}] has unknown field '{rule['field']}'")
        if rule["when"] not in ("filled", "missing"):
            raise RuntimeError(f"prompt_rules.rules[{i}].when must be 'filled' or 'missing'")

    _require(_CATALOG["summary"], _EXPECTED_SCHEMA["summary"], "summary")
    if [line.get("field") for line in _CATALOG["summary"]["lines"]] != _FIELD_KEYS:
        raise RuntimeError(f"Catalog summary lines must be exactly {_FIELD_KEYS} in order")

    _require(_CATALOG["messages"], _EXPECTED_SCHEMA["messages"], "messages")


def _require(entry: dict, keys: List[str], where: str) -> None:
    missing = [k for k in keys if k not in entry]
    if missing:
        raise RuntimeError(f"Catalog entry '{where}' missing keys: {missing}")


def get_catalog() -> dict:
    return _CATALOG


def get_section(name: str):
    """Return one top-level catalog section.

    Raises:
        KeyError: if the section does not exist.
    """
    if name not in _CATALOG:
        raise KeyError(f"Unknown catalog section: {name}")
    return _CATALOG[name]


def get_steps() -> List[Step]:
    return [Step(**entry) for entry in _CATALOG["steps"]]


def get_message(name: str) -> str:
    messages = _CATALOG["messages"]
    if name not in messages:
        raise KeyError(f"Unknown catalog message: {name}")
    return messages[name]


# Load and validate at import time
_load()
_validate_schema()
