# models/admin.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class AdminStats(BaseModel):
    userCount: int
    menuItemCount: int
    orderCount: int
    totalRevenue: float

class CategoryStat(BaseModel):
    category: Optional[str] = None
    quantity: int
    revenue: float

# Response for audit log item
class AuditItem(BaseModel):
    id: str
    actor_email: Optional[str] = None
    action: str
    resource_type: str
    resource_id: str
    before: Optional[dict] = None
    after: Optional[dict] = None
    reason: Optional[str] = None
    timestamp: Optional[datetime] = None
