from pydantic import BaseModel, Field, field_validator
from typing import Optional


class LoginIn(BaseModel):
    email: str = Field(..., min_length=3, max_length=150)
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        return str(v).strip().lower()


class UserOut(BaseModel):
    email: str
    full_name: Optional[str] = None
    user_id: Optional[int] = None


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
