"""Pydantic Schemas: request and response contracts for API endpoints.

Invariants:
    - UserInput owns the field rules; core/validate_user.py owns message wording

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
