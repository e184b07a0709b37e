"""Quiz scoring & matching engine.

Sub-modules:
- trait_ranges    – achievable min/max raw score per trait
- trait_vector    – answers → normalized trait vector
- similarity      – cosine / euclidean / absolute match + per-trait breakdown
- aspects         – partial matching over shared quiz aspects
- group_insights  – pairwise matches, trait spread and insights for 3+ people
- profile_summary – trait levels, ranking and dominance for one profile,
                    plus match band and highlights for a comparison
"""
