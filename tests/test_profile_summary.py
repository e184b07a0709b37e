"""Tests for matchme/engine/profile_summary.py."""

import pytest

from matchme.engine.errors import InvalidInputError
from matchme.engine.similarity import compute_match_with_breakdown
from matchme.engine.profile_summary import (
    calculate_dominance,
    display_label,
    extract_trait_labels,
    match_band,
    summarize_comparison,
    summarize_profile,
    trait_level,
)


class TestTraitLevel:
    @pytest.mark.parametrize(
        ("score", "level"),
        [(1.0, "high"), (0.70, "high"), (0.69, "mid"), (0.45, "mid"), (0.44, "low"), (0.0, "low")],
    )
    def test_levels(self, score, level):
        assert trait_level(score) == level


class TestDominance:
    def test_top_minus_third(self):
        assert calculate_dominance({"a": 0.9, "b": 0.6, "c": 0.3, "d": 0.1}) == pytest.approx(0.6)

    def test_two_traits_uses_second(self):
        assert calculate_dominance({"a": 0.2, "b": 0.9}) == pytest.approx(0.7)

    def test_single_trait(self):
        assert calculate_dominance({"a": 0.4}) == 0.4

    def test_empty(self):
        assert calculate_dominance({}) == 0.0


class TestExtractTraitLabels:
    def test_labels(self):
        quiz = {"traits": {
            "directness": {"label": "Directness", "description": "Says it plainly"},
            "empathy": {"label": "Empathy"},
            "hidden": {"description": "no label"},
            "nulled": {"label": None},
        }}
        assert extract_trait_labels(quiz) == {"directness": "Directness", "empathy": "Empathy"}

    def test_empty_label_is_kept(self):
        quiz = {"traits": {"quiet": {"label": ""}, "loud": {"label": "Loud"}}}
        assert extract_trait_labels(quiz) == {"quiet": "", "loud": "Loud"}

    def test_no_traits(self):
        assert extract_trait_labels({"questions": []}) == {}


class TestSummarizeProfile:
    def test_ranking_and_labels(self):
        summary = summarize_profile(
            {"clarity": 0.5, "directness": 0.9, "empathy": 0.1},
            {"directness": "Directness"},
        )
        assert [t.trait for t in summary.traits] == ["directness", "clarity", "empathy"]
        assert summary.traits[0].label == "Directness"
        assert summary.traits[1].label == "clarity"
        assert [t.level for t in summary.traits] == ["high", "mid", "low"]
        assert summary.top_trait == "directness"
        assert summary.bottom_trait == "empathy"
        assert summary.dominance == pytest.approx(0.8)

    def test_ties_keep_input_order(self):
        summary = summarize_profile({"b": 0.5, "a": 0.5})
        assert [t.trait for t in summary.traits] == ["b", "a"]

    def test_empty(self):
        summary = summarize_profile({})
        assert summary.traits == []
        assert summary.top_trait is None

    def test_invalid_vector_raises(self):
        with pytest.raises(InvalidInputError):
            summarize_profile({"a": "high"})


class TestDisplayLabel:
    def test_known_label_wins(self):
        assert display_label("social_energy", {"social_energy": "Energy"}) == "Energy"

    def test_empty_label_is_used(self):
        assert display_label("quiet", {"quiet": ""}) == ""

    def test_fallback_from_id(self):
        assert display_label("social_energy") == "Social energy"
        assert display_label("x") == "X"


class TestMatchBand:
    @pytest.mark.parametrize(
        ("score", "band"),
        [(100.0, "high"), (80.0, "high"), (79.9, "medium"), (55.0, "medium"), (54.9, "low"), (0.0, "low")],
    )
    def test_bands(self, score, band):
        assert match_band(score) == band


class TestSummarizeComparison:
    def test_aligned_and_gaps(self):
        you = {"directness": 0.9, "empathy": 0.5, "clarity": 0.2, "social_energy": 0.8}
        them = {"directness": 0.9, "empathy": 0.1, "clarity": 0.3, "social_energy": 0.3}
        result = compute_match_with_breakdown(you, them, "absolute")
        summary = summarize_comparison(result, {"directness": "Directness"})

        assert summary.match_score == pytest.approx(result.match_score)
        assert summary.match_band == "medium"
        assert [t.trait for t in summary.aligned_traits] == ["directness", "clarity"]
        assert summary.aligned_traits[0].label == "Directness"
        assert summary.aligned_traits[1].label == "Clarity"
        assert [t.trait for t in summary.gap_traits] == ["social_energy", "empathy"]
        assert summary.gap_traits[0].label == "Social energy"
        assert summary.gap_traits[0].gap == pytest.approx(0.5)

    def test_aligned_falls_back_to_most_similar(self):
        you = {"a": 0.0, "b": 0.0, "c": 0.0, "d": 0.0, "e": 0.0}
        them = {"a": 0.35, "b": 0.5, "c": 0.6, "d": 0.9, "e": 1.0}
        summary = summarize_comparison(compute_match_with_breakdown(you, them, "absolute"))
        assert [t.trait for t in summary.aligned_traits] == ["a", "b", "c", "d"]
        assert [t.trait for t in summary.gap_traits] == ["e", "d", "c", "b"]

    def test_gaps_fall_back_to_widest(self):
        you = {"a": 0.5, "b": 0.5, "c": 0.5, "d": 0.5, "e": 0.5}
        them = {"a": 0.6, "b": 0.55, "c": 0.7, "d": 0.42, "e": 0.5}
        summary = summarize_comparison(compute_match_with_breakdown(you, them, "absolute"))
        assert [t.trait for t in summary.gap_traits] == ["c", "a", "d", "b"]
        assert len(summary.aligned_traits) == 4
        assert summary.aligned_traits[0].trait == "e"

    def test_caps_at_four(self):
        you = {f"t{i}": 1.0 for i in range(6)}
        them = {f"t{i}": 0.0 for i in range(6)}
        summary = summarize_comparison(compute_match_with_breakdown(you, them))
        assert summary.match_band == "low"
        assert [t.trait for t in summary.gap_traits] == ["t0", "t1", "t2", "t3"]
        assert [t.trait for t in summary.aligned_traits] == ["t0", "t1", "t2", "t3"]

    def test_high_band_for_identical_profiles(self):
        v = {"directness": 0.7, "empathy": 0.4}
        summary = summarize_comparison(compute_match_with_breakdown(v, v))
        assert summary.match_band == "high"
        assert [t.trait for t in summary.aligned_traits] == ["directness", "empathy"]
        assert [t.gap for t in summary.gap_traits] == [0.0, 0.0]

    def test_empty_breakdown(self):
        summary = summarize_comparison(compute_match_with_breakdown({}, {}))
        assert summary.match_band == "low"
        assert summary.aligned_traits == []
        assert summary.gap_traits == []
