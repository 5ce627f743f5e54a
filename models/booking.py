from pydantic import BaseModel, Field

class BookingCreate(BaseModel):
    email: str = Field(..., min_length=3)

    class Config:
        extra = "allow"
