from db.db_operation import MongoConnection, to_object_id, serialize_doc, insert_ack, update_ack, delete_ack, utcnow
from core.exceptions import NotFoundError, ValidationError
from models.menu import MenuItemCreate, MenuItemUpdate
from services.admin_service import record_audit
from utils.logger import get_logger

logger = get_logger("Menu_Service")

async def list_menu_items(mongo: MongoConnection):
    cursor = mongo.menu_items.find({})
    docs = await cursor.to_list(length=None)
    return [serialize_doc(d) for d in docs]

async def get_menu_item(mongo: MongoConnection, item_id: str):
    d = await mongo.menu_items.find_one({"_id": to_object_id(item_id, "menu item")})
    if not d:
        raise NotFoundError("Menu item not found")
    return serialize_doc(d)

async def create_menu_item(mongo: MongoConnection, payload: MenuItemCreate, actor_email: str = None):
    now = utcnow()
    doc = {
        **payload.model_dump(),
        "price": float(payload.price),
        "created_at": now,
        "updated_at": now
    }
    result = await mongo.menu_items.insert_one(doc)
    await record_audit(mongo, actor_email, "create_menu_item", "menu_item", str(result.inserted_id),
                       after={"name": doc["name"], "category": doc["category"], "price": doc["price"]})
    logger.info("Menu item created", extra={"actor": actor_email, "item_id": str(result.inserted_id)})
    return insert_ack(result)

async def update_menu_item(mongo: MongoConnection, item_id: str, payload: MenuItemUpdate, actor_email: str = None):
    oid = to_object_id(item_id, "menu item")
    update_doc = {k: v for k, v in payload.model_dump().items() if v is not None}
    if not update_doc:
        raise ValidationError("No fields to update")
    if "price" in update_doc:
        update_doc["price"] = float(update_doc["price"])
    update_doc["updated_at"] = utcnow()
    result = await mongo.menu_items.update_one({"_id": oid}, {"$set": update_doc})
    if result.matched_count == 0:
        raise NotFoundError("Menu item not found")
    await record_audit(mongo, actor_email, "update_menu_item", "menu_item", item_id, after=update_doc)
    return update_ack(result)

async def delete_menu_item(mongo: MongoConnection, item_id: str, actor_email: str = None):
    oid = to_object_id(item_id, "menu item")
    result = await mongo.menu_items.delete_one({"_id": oid})
    if result.deleted_count == 0:
        raise NotFoundError("Menu item not found")
    await record_audit(mongo, actor_email, "delete_menu_item", "menu_item", item_id)
    logger.info("Menu item deleted", extra={"actor": actor_email, "item_id": item_id})
    return delete_ack(result)
