"""Pydantic Schemas: request/response contracts for API endpoints.

Invariants:
    - Schemas decode shape at the system boundary (types, required fields)
    - Business rules are reported by violations(), which accumulates every
      failure instead of stopping at the first
    - Wire names are camelCase; Python attributes are snake_case

Design Decisions:
    - Separate from core entities: schemas are API contracts, entities are state
"""
