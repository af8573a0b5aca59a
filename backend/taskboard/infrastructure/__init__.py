"""Infrastructure Layer: in-memory storage and logging setup.

Invariants:
    - Infrastructure never encodes HTTP responses
    - Store failures surface as StoreError (core/errors.py)
"""
