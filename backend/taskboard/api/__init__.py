"""API Layer: FastAPI routes, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All error bodies share one shape: {error, message, timestamp}

Design Decisions:
    - Thin routes delegate to services; an Err result is raised to the
      global handler, which owns encoding
"""
