from pydantic import BaseModel, Field
from typing import Optional

class IdentityPayload(BaseModel):
    """Body of POST /jwt. Extra claims (name, photo...) are signed as given."""
    email: str = Field(..., min_length=3)

    class Config:
        extra = "allow"

class UserCreate(BaseModel):
    email: str = Field(..., min_length=3)
    name: Optional[str] = None
    photo: Optional[str] = None

class AdminCheck(BaseModel):
    admin: bool
