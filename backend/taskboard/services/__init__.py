"""Services Layer: business rules between routes and the store.

Invariants:
    - Every fallible operation returns Ok/Err (core/result.py); never raises
      for validation, not-found or conflict
    - Services receive their stores by injection; no module-level state
"""
