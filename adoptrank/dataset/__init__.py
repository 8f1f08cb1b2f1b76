"""
Dataset snapshot layer.

Responsibilities:
- Load the joined shelter, dog and census tables from a snapshot directory.
- Coerce raw CSV values into the canonical column types.
- Expose a read-only, point-in-time view that every analytic operation consumes.
"""
