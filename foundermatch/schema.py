from typing import Any, Dict, Iterable, List

from .catalog import (
    COMMITMENT_LEVELS,
    FINANCIAL_CONTRIBUTIONS,
    FOUNDER_STATUSES,
    INDUSTRIES,
    LOCATIONS,
    PERSONALITY_TRAITS,
    SKILL_CATEGORIES,
)

ENUM_FIELDS = {
    "founder_status": FOUNDER_STATUSES,
    "industry": INDUSTRIES,
    "commitment_level": COMMITMENT_LEVELS,
    "financial_contribution": FINANCIAL_CONTRIBUTIONS,
    "location": LOCATIONS,
    "preferred_founder_type": FOUNDER_STATUSES,
    "preferred_industry": INDUSTRIES,
    "preferred_commitment_level": COMMITMENT_LEVELS,
    "preferred_financial": FINANCIAL_CONTRIBUTIONS,
    "preferred_location": LOCATIONS,
}

LIST_FIELDS = {
    "skills": SKILL_CATEGORIES,
    "personality_traits": PERSONALITY_TRAITS,
    "preferred_skills": SKILL_CATEGORIES,
    "preferred_personality_traits": PERSONALITY_TRAITS,
}

STR_FIELDS = ["current_occupation"]
INT_FIELDS = {"years_experience": (0, 100)}

PROFILE_FIELDS = list(ENUM_FIELDS) + list(LIST_FIELDS) + STR_FIELDS + list(INT_FIELDS)


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _label(field: str) -> str:
    return field.replace("_", " ")


def validate_profile(data: Dict[str, Any], partial: bool = False) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.

    With partial=True only the fields present in `data` are checked, which is
    what a profile update needs.
    """
    errors: List[str] = []

    for f in data:
        if f not in PROFILE_FIELDS:
            errors.append(f"Unknown field: {f}")

    if not partial:
        for f in PROFILE_FIELDS:
            if f not in data:
                errors.append(f"Missing required field: {f}")

    for f, vocabulary in ENUM_FIELDS.items():
        if f in data and data[f] not in vocabulary:
            errors.append(f"Invalid {_label(f)}: {data[f]!r}")

    for f, vocabulary in LIST_FIELDS.items():
        if f not in data:
            continue
        value = data[f]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            errors.append(f"Field '{f}' must be a list of strings")
            continue
        invalid = [v for v in value if v not in vocabulary]
        if invalid:
            errors.append(f"Invalid {_label(f)}: {', '.join(invalid)}")

    for f in STR_FIELDS:
        if f in data and not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f, (low, high) in INT_FIELDS.items():
        if f not in data:
            continue
        value = data[f]
        # bool is an int subclass but never a valid count of years
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"Field '{f}' must be an integer")
        elif not low <= value <= high:
            errors.append(f"Field '{f}' must be between {low} and {high}")

    return errors


def dedupe(values: Iterable[str]) -> List[str]:
    """Drop repeated values while preserving order."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def clean_profile(data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep known profile fields and de-duplicate list fields."""
    cleaned = {}
    for f in PROFILE_FIELDS:
        if f not in data:
            continue
        value = data[f]
        if f in LIST_FIELDS:
            value = dedupe(value)
        elif f in STR_FIELDS:
            value = value.strip()
        cleaned[f] = value
    return cleaned
