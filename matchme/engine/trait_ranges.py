"""Achievable min/max raw score per trait for a quiz.

All functions are *pure* — no side-effects, no I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from matchme.engine.errors import invalid_input_from
from matchme.quiz_models import QuizDefinition, TraitRange


def as_quiz(quiz: QuizDefinition | Mapping[str, Any]) -> QuizDefinition:
    """Accept a ``QuizDefinition`` or its plain-dict form."""
    if isinstance(quiz, QuizDefinition):
        return quiz
    try:
        return QuizDefinition.model_validate(quiz)
    except ValidationError as exc:
        raise invalid_input_from(exc, "quiz definition") from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def calculate_trait_ranges(quiz: QuizDefinition | Mapping[str, Any]) -> dict[str, TraitRange]:
    """Return the summed per-question contribution window for every trait.

    For each question the window of a trait is taken over that question's
    options only, with ``0.0`` always folded into the minimum (the user may
    pick an option that does not touch the trait).  Windows are then summed
    across questions.  Questions without a trait map contribute nothing.
    """
    quiz = as_quiz(quiz)
    ranges: dict[str, TraitRange] = {}

    for question in quiz.questions:
        if not question.trait_map:
            continue

        q_min: dict[str, float] = {}
        q_max: dict[str, float] = {}
        for contributions in question.trait_map.values():
            for trait, value in contributions.items():
                weighted = question.weight * value
                q_min[trait] = min(q_min.get(trait, 0.0), weighted, 0.0)
                q_max[trait] = max(q_max[trait], weighted) if trait in q_max else weighted

        for trait in q_max:
            total = ranges.setdefault(trait, TraitRange(min=0.0, max=0.0))
            total.min += q_min[trait]
            total.max += q_max[trait]

    return ranges
