import math
from db.db_operation import MongoConnection, serialize_doc, insert_ack, utcnow
from core.exceptions import ValidationError
from models.review import ReviewCreate
from utils.logger import get_logger

logger = get_logger("Review_Service")

async def list_reviews(mongo: MongoConnection):
    docs = await mongo.reviews.find({}).to_list(length=None)
    return [serialize_doc(d) for d in docs]

def _parse_rating(value):
    """None when missing or blank, raises 400 when present but not a number."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError("Rating must be numeric")
    try:
        rating = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Rating must be numeric")
    if not math.isfinite(rating):
        raise ValidationError("Rating must be numeric")
    return rating

async def create_review(mongo: MongoConnection, review: ReviewCreate):
    missing = [
        field for field in ("name", "details")
        if not (getattr(review, field) or "").strip()
    ]
    rating = _parse_rating(review.rating)
    if rating is None:
        missing.append("rating")
    if missing:
        logger.warning(f"Review rejected, missing fields: {missing}")
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    doc = {**review.model_dump(), "rating": rating, "created_at": utcnow()}
    result = await mongo.reviews.insert_one(doc)
    logger.info(f"Review created with id {result.inserted_id}")
    return insert_ack(result)
