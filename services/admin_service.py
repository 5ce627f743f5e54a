# services/admin_service.py
from db.db_operation import MongoConnection, utcnow
from utils.logger import get_logger

logger = get_logger("Admin_Service")

async def record_audit(mongo: MongoConnection, actor_email: str, action: str, resource_type: str, resource_id: str,
                       before: dict | None = None, after: dict | None = None, reason: str | None = None):
    audit_doc = {
        "actor_email": actor_email,
        "action": action,
        "resource_type": resource_type,
        "resource_id": resource_id,
        "before": before,
        "after": after,
        "reason": reason,
        "timestamp": utcnow()
    }
    await mongo.audit_logs.insert_one(audit_doc)

async def list_audit_logs(mongo: MongoConnection, skip: int = 0, limit: int = 50):
    """
    Simple pagination for audit logs, newest first.
    """
    cursor = mongo.audit_logs.find({}).sort("timestamp", -1).skip(skip).limit(limit)
    items = await cursor.to_list(length=limit)
    return [
        {
            "id": str(a["_id"]),
            "actor_email": a.get("actor_email"),
            "action": a["action"],
            "resource_type": a["resource_type"],
            "resource_id": a["resource_id"],
            "before": a.get("before"),
            "after": a.get("after"),
            "reason": a.get("reason"),
            "timestamp": a.get("timestamp")
        } for a in items
    ]

async def admin_stats(mongo: MongoConnection) -> dict:
    """
    Counts are estimates (collection metadata), revenue is the sum of every payment price.
    """
    user_count = await mongo.users_collection.estimated_document_count()
    menu_item_count = await mongo.menu_items.estimated_document_count()
    order_count = await mongo.payments.estimated_document_count()

    cursor = mongo.payments.aggregate([
        {"$group": {"_id": None, "totalRevenue": {"$sum": "$price"}}}
    ])
    rows = await cursor.to_list(length=None)
    revenue = rows[0]["totalRevenue"] if rows else 0

    logger.info(f"Admin stats computed: users={user_count} menu={menu_item_count} orders={order_count}")
    return {
        "userCount": user_count,
        "menuItemCount": menu_item_count,
        "orderCount": order_count,
        "totalRevenue": revenue
    }

async def order_stats(mongo: MongoConnection) -> list:
    """
    Per-category quantity and revenue over all payments.

    Every id in a payment's menuItemIds counts as one unit and contributes the
    menu item's current price. Ids whose menu item no longer exists are dropped
    by the inner join.
    """
    pipeline = [
        {"$unwind": "$menuItemIds"},
        {"$lookup": {
            "from": mongo.menu_collection_name,
            "localField": "menuItemIds",
            "foreignField": "_id",
            "as": "menuItems"
        }},
        {"$unwind": "$menuItems"},
        {"$group": {
            "_id": "$menuItems.category",
            "quantity": {"$sum": 1},
            "revenue": {"$sum": "$menuItems.price"}
        }}
    ]
    cursor = mongo.payments.aggregate(pipeline)
    rows = await cursor.to_list(length=None)
    stats = [
        {"category": r["_id"], "quantity": r["quantity"], "revenue": r["revenue"]}
        for r in rows
    ]
    stats.sort(key=lambda s: s["category"] or "")
    return stats
