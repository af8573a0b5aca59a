"""Core Layer: pure domain logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or schemas/
    - All functions are pure and deterministic (clocks are injected)

Design Decisions:
    - Functional core separated from imperative shell: services own the IO
"""
