"""User Schemas: request body model, response models and error envelopes.

Invariants:
    - UserInput is the single source of field rules: stripped non-empty name,
      RFC-checked email (email-validator), strict integer age in [AGE_MIN, AGE_MAX]
    - UserResponse mirrors UserRecord field-for-field (id, name, email, age)
    - Error envelopes match core/map_outcomes.py body shapes exactly

Design Decisions:
    - UserInput is validated by core/validate_user.py, not bound as a route body:
      the core turns Pydantic errors into the fixed rule messages
    - StrictInt for age: JSON true, "30" and 30.0 are not ages
    - Error models exist for OpenAPI `responses=` only; handlers build the
      bodies from FailureResponse directly
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictInt, field_validator

from user_api.core.domain_types import AGE_MAX, AGE_MIN, UserRecord


class UserInput(BaseModel):
    """Create/update payload. Unknown keys (including a client-sent id) are ignored."""
    model_config = ConfigDict(extra="ignore")

    name: str
    email: EmailStr
    age: StrictInt = Field(ge=AGE_MIN, le=AGE_MAX)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class UserResponse(BaseModel):
    """Public-facing User."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    age: int

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserResponse":
        return cls.model_validate(record)


class MessageResponse(BaseModel):
    """Informational body: delete confirmation or read-path not-found."""
    message: str


class ErrorResponse(BaseModel):
    """Generic failure body."""
    error: str


class ValidationErrorResponse(BaseModel):
    """Field-rule violations, one message per failed rule."""
    errors: list[str]
