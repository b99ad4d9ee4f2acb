"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (submitted pastes, API responses)
    - Core dataclasses converted explicitly via from_domain()
"""
