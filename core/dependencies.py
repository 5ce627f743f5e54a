from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
from pydantic import BaseModel, Field
from core.context import AppContext, get_context
from utils.logger import get_logger

logger = get_logger("Dependencies")

# tells fastapi to expect "Authorization: Bearer <token>"; missing header is handled below
bearer_scheme = HTTPBearer(auto_error=False)

class CurrentUser(BaseModel):
    email: str
    claims: dict = Field(default_factory=dict)

async def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ctx: AppContext = Depends(get_context)
) -> CurrentUser:
    """
    Verify the bearer token and return the caller identity carried in its claims.
    Raises 401 when the token is missing, expired or tampered with.
    """
    token = creds.credentials if creds else None
    payload = ctx.tokens.verify(token)
    logger.debug(f"Token verified for {payload['email']}")
    return CurrentUser(email=payload["email"], claims=payload)
