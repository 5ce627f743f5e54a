async def test_register_new_user(client, mongo):
    resp = await client.post("/users", json={"email": "new@bistro.com", "name": "New"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["acknowledged"] is True
    assert body["insertedId"]
    stored = await mongo.users_collection.find_one({"email": "new@bistro.com"})
    assert stored["role"] == "user"

async def test_register_existing_email_returns_null_id(client, mongo):
    await client.post("/users", json={"email": "new@bistro.com", "name": "New"})
    resp = await client.post("/users", json={"email": "new@bistro.com", "name": "Again"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "user already exists", "insertedId": None}
    assert await mongo.users_collection.count_documents({"email": "new@bistro.com"}) == 1

async def test_register_cannot_claim_admin_role(client, mongo):
    await client.post("/users", json={"email": "sneaky@bistro.com", "role": "admin"})
    stored = await mongo.users_collection.find_one({"email": "sneaky@bistro.com"})
    assert stored["role"] == "user"

async def test_admin_lists_users(client, users, auth_headers):
    resp = await client.get("/users", headers=auth_headers(users["admin"]))
    emails = {u["email"] for u in resp.json()}
    assert emails == {users["admin"], users["user"], users["other"]}
    assert all(isinstance(u["_id"], str) for u in resp.json())

async def test_admin_promotes_user(client, mongo, users, auth_headers):
    target = await mongo.users_collection.find_one({"email": users["user"]})
    resp = await client.patch(f"/users/admin/{target['_id']}", headers=auth_headers(users["admin"]))
    assert resp.status_code == 200
    assert resp.json()["modifiedCount"] == 1

    resp = await client.get(f"/users/admin/{users['user']}", headers=auth_headers(users["user"]))
    assert resp.json() == {"admin": True}

    audit = await mongo.audit_logs.find_one({"action": "promote_user"})
    assert audit["actor_email"] == users["admin"]
    assert audit["after"] == {"role": "admin"}

async def test_admin_deletes_user(client, mongo, users, auth_headers):
    target = await mongo.users_collection.find_one({"email": users["other"]})
    resp = await client.delete(f"/users/{target['_id']}", headers=auth_headers(users["admin"]))
    assert resp.status_code == 200
    assert resp.json() == {"acknowledged": True, "deletedCount": 1}
    assert await mongo.users_collection.find_one({"email": users["other"]}) is None

    resp = await client.delete(f"/users/{target['_id']}", headers=auth_headers(users["admin"]))
    assert resp.status_code == 404
