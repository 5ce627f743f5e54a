from pydantic import BaseModel
from typing import Any, Optional

# fields are loose here so that missing or malformed ones surface as a 400 from the service
class ReviewCreate(BaseModel):
    name: Optional[str] = None
    details: Optional[str] = None
    rating: Any = None
