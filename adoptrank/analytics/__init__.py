"""
Descriptive analytics built on the scoring primitives.

Responsibilities:
- Rank breeds per state and per city by adoption count.
- Measure breed over-representation by state share.
- Select gold shelters and attach state-level economics.
- Relate dog supply and breed choice to state income.
- Look up individual dogs by state/breed and by city.
"""
