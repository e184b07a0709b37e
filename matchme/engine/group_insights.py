"""Group comparison of 3+ people: pairwise matches, trait spread and insights.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
import logging

import numpy as np
from pydantic import BaseModel, Field

from matchme.engine.errors import InvalidInputError
from matchme.engine.similarity import compute_match_cosine, validate_vector
from matchme.quiz_models import TraitVector


logger = logging.getLogger(__name__)

MIN_PARTICIPANTS = 3
ALIGNED_VARIANCE_THRESHOLD = 0.1
DIVERSE_VARIANCE_THRESHOLD = 0.1
HIGH_ALIGNMENT = 0.75
MODERATE_ALIGNMENT = 0.60

ParticipantId = str | int


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class PairwiseMatch(BaseModel):
    """Cosine match of one unordered participant pair."""

    result_a: ParticipantId
    result_b: ParticipantId
    match_score: float = Field(ge=0.0, le=1.0)
    match_score_percent: float = Field(ge=0.0, le=100.0)


class TraitDistribution(BaseModel):
    """Spread of one trait across the group."""

    mean: float
    min: float
    max: float
    variance: float = Field(ge=0.0)
    label: str = ""


class GroupInsightResult(BaseModel):
    average_match_score: float = Field(ge=0.0, le=1.0)
    pairwise_matches: list[PairwiseMatch]
    trait_distributions: dict[str, TraitDistribution]
    insights: list[str]
    participant_count: int = Field(ge=MIN_PARTICIPANTS)
    quiz_context: str = ""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _round_half_up(value: float, ndigits: int = 0) -> float:
    exp = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(value)).quantize(exp, rounding=ROUND_HALF_UP))


def _format_number(value: float) -> str:
    """Render whole numbers without a trailing ``.0``."""
    return str(int(value)) if value.is_integer() else str(value)


def calculate_trait_distributions(
    vectors: Mapping[ParticipantId, TraitVector],
    trait_labels: Mapping[str, str],
) -> dict[str, TraitDistribution]:
    """Mean/min/max/population variance of every labeled trait (missing → 0.0)."""
    distributions: dict[str, TraitDistribution] = {}
    for trait, label in trait_labels.items():
        values = np.array([v.get(trait, 0.0) for v in vectors.values()], dtype=float)
        if values.size == 0:
            continue
        distributions[trait] = TraitDistribution(
            mean=float(np.mean(values)),
            min=float(np.min(values)),
            max=float(np.max(values)),
            variance=float(np.var(values)) if values.size >= 2 else 0.0,
            label=str(label),
        )
    return distributions


def generate_group_insights(
    distributions: Mapping[str, TraitDistribution],
    average_match: float,
) -> list[str]:
    """Deterministic insight lines; variance ties go to the first trait seen."""
    insights: list[str] = []

    most_aligned, lowest = None, 1.0
    for trait, dist in distributions.items():
        if dist.variance < lowest:
            most_aligned, lowest = trait, dist.variance
    if most_aligned is not None and lowest < ALIGNED_VARIANCE_THRESHOLD:
        insights.append(
            f"Your group is most aligned in {most_aligned} (variance: {_format_number(_round_half_up(lowest, 2))})"
        )

    most_diverse, highest = None, 0.0
    for trait, dist in distributions.items():
        if dist.variance > highest:
            most_diverse, highest = trait, dist.variance
    if most_diverse is not None and highest > DIVERSE_VARIANCE_THRESHOLD:
        insights.append(f"Your group shows the most diversity in {most_diverse}")

    pct = int(_round_half_up(average_match * 100))
    if average_match >= HIGH_ALIGNMENT:
        insights.append(f"Your group has high alignment ({pct}% average match)")
    elif average_match >= MODERATE_ALIGNMENT:
        insights.append(f"Your group has moderate alignment ({pct}% average match)")
    else:
        insights.append(f"Your group has diverse styles ({pct}% average match)")

    return insights


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def calculate_group_insights(
    vectors: Mapping[ParticipantId, TraitVector],
    trait_labels: Mapping[str, str],
    quiz_context: str = "",
) -> GroupInsightResult:
    """Compare every participant pair and summarize the group.

    *quiz_context* is carried through to the result only.

    Raises:
        InvalidInputError: fewer than three participants or a malformed vector.
    """
    if not isinstance(vectors, Mapping):
        raise InvalidInputError("vectors must be a mapping of participant_id → trait vector")
    count = len(vectors)
    if count < MIN_PARTICIPANTS:
        raise InvalidInputError(
            f"Group comparison requires at least {MIN_PARTICIPANTS} participants, got {count}"
        )
    for pid, vector in vectors.items():
        validate_vector(vector, f"vectors[{pid!r}]")

    ids = list(vectors)
    pairs: list[PairwiseMatch] = []
    for i, id_a in enumerate(ids):
        for id_b in ids[i + 1:]:
            percent = compute_match_cosine(vectors[id_a], vectors[id_b])
            pairs.append(PairwiseMatch(
                result_a=id_a,
                result_b=id_b,
                match_score=percent / 100.0,
                match_score_percent=percent,
            ))

    average = sum(p.match_score for p in pairs) / len(pairs) if pairs else 0.0
    distributions = calculate_trait_distributions(vectors, trait_labels)
    logger.debug("Group insights: %d participants, %d pairs, quiz=%s", count, len(pairs), quiz_context)

    return GroupInsightResult(
        average_match_score=min(1.0, average),
        pairwise_matches=pairs,
        trait_distributions=distributions,
        insights=generate_group_insights(distributions, average),
        participant_count=count,
        quiz_context=quiz_context,
    )
