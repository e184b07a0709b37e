"""Answers → normalized trait vector.

Raw scores are accumulated from the quiz's trait map, then min-max
normalized into ``[0, 1]`` against the ranges from
:mod:`matchme.engine.trait_ranges`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from typing import Any

from pydantic import ValidationError

from matchme.engine.errors import InvalidInputError, invalid_input_from
from matchme.engine.trait_ranges import as_quiz, calculate_trait_ranges
from matchme.quiz_models import (
    DEFAULT_TRAIT_RANGE,
    Answer,
    QuizDefinition,
    TraitRange,
    TraitVector,
)


logger = logging.getLogger(__name__)


def _as_answers(answers: Iterable[Answer | Mapping[str, Any]]) -> list[Answer]:
    result: list[Answer] = []
    for i, answer in enumerate(answers):
        if isinstance(answer, Answer):
            result.append(answer)
            continue
        try:
            result.append(Answer.model_validate(answer))
        except ValidationError as exc:
            raise invalid_input_from(exc, f"answer #{i}") from exc
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def accumulate_raw_scores(
    answers: Iterable[Answer | Mapping[str, Any]],
    quiz: QuizDefinition | Mapping[str, Any],
    strict: bool = False,
) -> TraitVector:
    """Sum ``question.weight * contribution`` per trait over *answers*.

    Every answer contributes independently; repeated question ids are not
    de-duplicated.  Unknown question or option ids are skipped unless
    *strict* is set, in which case they raise ``InvalidInputError``.
    """
    quiz = as_quiz(quiz)
    raw: TraitVector = {}

    for answer in _as_answers(answers):
        if not answer.question_id or not answer.option_id:
            continue

        question = quiz.find_question(answer.question_id)
        if question is None:
            if strict:
                raise InvalidInputError(f"Unknown question '{answer.question_id}'")
            logger.debug("Skipping answer for unknown question %s", answer.question_id)
            continue

        contributions = question.trait_map.get(answer.option_id)
        if contributions is None:
            if strict:
                raise InvalidInputError(
                    f"Unknown option '{answer.option_id}' for question '{answer.question_id}'"
                )
            logger.debug(
                "Skipping unknown option %s for question %s", answer.option_id, answer.question_id
            )
            continue

        for trait, value in contributions.items():
            raw[trait] = raw.get(trait, 0.0) + question.weight * value

    return raw


def normalize_vector(raw: Mapping[str, float], ranges: Mapping[str, TraitRange]) -> TraitVector:
    """Min-max normalize *raw* into ``[0, 1]``.

    Covers every trait in *ranges* or *raw*.  A trait without a range uses
    ``{0, 1}``; a flat range (``max <= min``) yields exactly ``0.5``.
    """
    normalized: TraitVector = {}
    for trait in dict.fromkeys([*ranges, *raw]):
        value = raw.get(trait, 0.0)
        rng = ranges.get(trait, DEFAULT_TRAIT_RANGE)
        if rng.is_flat:
            normalized[trait] = 0.5
            continue
        normalized[trait] = max(0.0, min(1.0, (value - rng.min) / (rng.max - rng.min)))
    return normalized


def calculate_trait_vector(
    answers: Iterable[Answer | Mapping[str, Any]],
    quiz: QuizDefinition | Mapping[str, Any],
    strict: bool = False,
) -> TraitVector:
    """Return the normalized trait vector for *answers* against *quiz*.

    Unknown question or option ids are skipped unless *strict* is set.
    Callers that honour ``MATCHME_STRICT_ANSWERS`` read it once through
    :func:`matchme.engine_config.load_engine_settings` and pass it in.
    """
    quiz = as_quiz(quiz)
    raw = accumulate_raw_scores(answers, quiz, strict=strict)
    ranges = calculate_trait_ranges(quiz)
    return normalize_vector(raw, ranges)
