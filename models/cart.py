from pydantic import BaseModel
from typing import Optional

CART_STATUS_PENDING = "Pending"

class CartItemCreate(BaseModel):
    menuId: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = None

    class Config:
        extra = "allow"
