from fastapi import APIRouter, Depends
from pymongo.errors import PyMongoError
from core.context import AppContext, get_context
from core.exceptions import UpstreamFailure
from models.review import ReviewCreate
from services.review_service import list_reviews, create_review
from utils.logger import get_logger

logger = get_logger("Review_Route")
router = APIRouter(prefix="/reviews", tags=["Reviews"])

@router.get("")
async def api_list_reviews(ctx: AppContext = Depends(get_context)):
    return await list_reviews(ctx.mongo)

@router.post("")
async def api_create_review(review: ReviewCreate, ctx: AppContext = Depends(get_context)):
    try:
        return await create_review(ctx.mongo, review)
    except PyMongoError:
        logger.exception("Error creating review")
        raise UpstreamFailure()
