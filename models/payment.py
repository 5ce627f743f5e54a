from pydantic import BaseModel, Field
from typing import Any, List, Optional

# price is checked by the service so that bad values surface as a 400
class PaymentIntentRequest(BaseModel):
    price: Any = None

class PaymentIntentOut(BaseModel):
    clientSecret: str

class PaymentCreate(BaseModel):
    email: str = Field(..., min_length=3)
    price: float
    transactionId: Optional[str] = None
    menuItemIds: List[str] = Field(default_factory=list)
    cartIds: List[str] = Field(default_factory=list)

    class Config:
        extra = "allow"
