"""API Schemas — Pydantic models validating every request before any state mutation.

Invariants:
    - Request models use extra="forbid": malformed or unknown fields are rejected, not coerced
    - Response models are built from ORM rows (from_attributes) or core value objects
"""
