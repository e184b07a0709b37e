"""Personality quiz scoring and compatibility matching."""

from .engine.aspects import AspectMatchResult, match_partial_aspects
from .engine.errors import InvalidInputError
from .engine.group_insights import GroupInsightResult, calculate_group_insights
from .engine.profile_summary import ComparisonSummary, summarize_comparison
from .engine.similarity import (
    MatchAlgorithm,
    SimilarityResult,
    compute_match,
    compute_match_with_breakdown,
)
from .engine.trait_vector import calculate_trait_vector
from .quiz_models import Answer, Question, QuizDefinition

__all__ = [
    "Answer",
    "AspectMatchResult",
    "ComparisonSummary",
    "GroupInsightResult",
    "InvalidInputError",
    "MatchAlgorithm",
    "Question",
    "QuizDefinition",
    "SimilarityResult",
    "calculate_group_insights",
    "calculate_trait_vector",
    "compute_match",
    "compute_match_with_breakdown",
    "match_partial_aspects",
    "summarize_comparison",
]
