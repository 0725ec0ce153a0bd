"""Core Layer: pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, models/ or db/
      (schemas/ is allowed: UserInput declares the field rules)
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: validation and
      outcome mapping are the only decision logic, and both live here
"""
