from fastapi import APIRouter, Depends
from core.context import AppContext, get_context
from models.user import IdentityPayload
from utils.logger import get_logger

logger = get_logger("AUTH_ROUTE")

router = APIRouter(tags=["Authentication"])

@router.post("/jwt")
async def issue_token(identity: IdentityPayload, ctx: AppContext = Depends(get_context)):
    """Sign the submitted identity. The web client calls this right after sign-in."""
    claims = identity.model_dump(exclude={"exp", "iat"})
    token = ctx.tokens.issue(claims)
    logger.info(f"Token issued for: {identity.email}")
    return {"token": token}
