"""
Derived read models.

Responsibilities:
- Define the read-only interface the engine uses for aggregate tables.
- Compute aggregates directly from the snapshot on every call.
- Hold an explicitly refreshed, materialised copy of the same aggregates.
"""
