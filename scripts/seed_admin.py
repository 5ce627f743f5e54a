# scripts/seed_admin.py
import asyncio
import sys
from db.db_operation import MongoConnection, utcnow
from settings.config import settings

async def seed(admin_email: str):
    """Create or promote the first admin. The API can only promote once an admin exists."""
    mongo = MongoConnection.from_uri(settings.MONGO_URI, settings.DB_NAME)
    users = mongo.users_collection
    existing = await users.find_one({"email": admin_email})
    if existing:
        await users.update_one({"email": admin_email}, {"$set": {"role": "admin", "updated_at": utcnow()}})
        print("Promoted existing user to admin:", admin_email)
    else:
        result = await users.insert_one({
            "email": admin_email,
            "name": "Bistro Admin",
            "role": "admin",
            "created_at": utcnow()
        })
        print("Created admin:", admin_email, result.inserted_id)
    mongo.client.close()

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: python -m scripts.seed_admin <email>")
        sys.exit(1)
    asyncio.run(seed(sys.argv[1]))
