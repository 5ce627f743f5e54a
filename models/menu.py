from pydantic import BaseModel, Field
from typing import Optional

class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    image: Optional[str] = None
    recipe: Optional[str] = None

class MenuItemUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = None
    recipe: Optional[str] = None
