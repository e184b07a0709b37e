"""Quiz content models consumed by the scoring engine.

A quiz is a list of weighted questions; each question maps option ids to
per-trait raw contributions.  Trait vectors themselves stay plain
``dict[str, float]`` maps since trait names are data, not schema.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
TraitVector = dict[str, float]
TraitContributions = dict[str, float]  # trait → raw contribution
TraitMap = dict[str, TraitContributions]  # option_id → contributions


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class Question(BaseModel):
    """A single weighted multiple-choice question."""

    id: str = ""
    weight: float = 1.0
    trait_map: TraitMap = Field(default_factory=dict)


class TraitDefinition(BaseModel):
    """Display metadata for one trait; ``label`` is ``None`` when unset."""

    label: str | None = None
    description: str = ""


class QuizMeta(BaseModel):
    """Title block of a quiz content file."""

    title: str = Field(..., min_length=1)
    description: str
    slug: str = ""


class QuizDefinition(BaseModel):
    """Full quiz: questions plus optional trait metadata."""

    questions: list[Question] = Field(default_factory=list)
    traits: dict[str, TraitDefinition] = Field(default_factory=dict)
    meta: QuizMeta | None = None
    results: dict[str, Any] | list[Any] = Field(default_factory=dict)

    def find_question(self, question_id: str) -> Question | None:
        """Return the first question with *question_id*."""
        return next((q for q in self.questions if q.id == question_id), None)


class Answer(BaseModel):
    """One answered question.

    ``value`` is accepted for callers that send it but scoring always takes
    the contribution from the quiz's trait map.
    """

    question_id: str = ""
    option_id: str = ""
    value: float | None = None


class TraitRange(BaseModel):
    """Achievable raw score window for one trait."""

    min: float = 0.0
    max: float = 1.0

    @property
    def is_flat(self) -> bool:
        return self.max <= self.min


DEFAULT_TRAIT_RANGE = TraitRange(min=0.0, max=1.0)
