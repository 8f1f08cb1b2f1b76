"""
Scoring and ranking primitives.

Responsibilities:
- Min-max normalise county metrics over the whole county population.
- Aggregate per-breed trait fractions over the dog population.
- Blend county features and breed traits into a suitability score.
- Score individual dogs against sparse user preference filters.
- Rank scored rows with SQL-style RANK semantics, optionally per partition.
"""
