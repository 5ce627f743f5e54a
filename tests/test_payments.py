from types import SimpleNamespace
from bson import ObjectId
import pytest
import stripe
from pymongo.errors import PyMongoError
import services.payment_service as payment_service

@pytest.fixture
def stripe_calls(monkeypatch):
    calls = []

    def fake_create(**kwargs):
        calls.append(kwargs)
        return SimpleNamespace(client_secret="pi_123_secret_456")

    monkeypatch.setattr(stripe.PaymentIntent, "create", fake_create)
    return calls

async def fill_cart(client, headers, count):
    ids = []
    for i in range(count):
        resp = await client.post("/carts", json={"name": f"item-{i}", "price": 10}, headers=headers)
        ids.append(resp.json()["insertedId"])
    return ids

async def test_payment_intent_converts_to_cents(client, stripe_calls):
    resp = await client.post("/create-payment-intent", json={"price": 19.995})
    assert resp.status_code == 200
    assert resp.json() == {"clientSecret": "pi_123_secret_456"}
    assert stripe_calls[0]["amount"] == 2000
    assert stripe_calls[0]["currency"] == "usd"
    assert stripe_calls[0]["payment_method_types"] == ["card"]

@pytest.mark.parametrize("body", [{"price": 0}, {"price": -5}, {"price": "abc"}, {"price": None}, {"price": True}, {}])
async def test_payment_intent_rejects_invalid_price(client, stripe_calls, body):
    resp = await client.post("/create-payment-intent", json=body)
    assert resp.status_code == 400
    assert stripe_calls == []

async def test_payment_intent_provider_failure_is_502(client, monkeypatch):
    def failing_create(**kwargs):
        raise stripe.APIConnectionError("network down")

    monkeypatch.setattr(stripe.PaymentIntent, "create", failing_create)
    resp = await client.post("/create-payment-intent", json={"price": 12})
    assert resp.status_code == 502

async def test_settlement_records_payment_and_retires_paid_carts(client, mongo, users, auth_headers):
    headers = auth_headers(users["user"])
    a, b, c, d = await fill_cart(client, headers, 4)
    menu_ids = [str(ObjectId()), str(ObjectId())]

    resp = await client.post("/payments", json={
        "email": users["user"],
        "price": 30,
        "transactionId": "pi_123",
        "menuItemIds": menu_ids,
        "cartIds": [a, b, c],
        "status": "pending"
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["deleteResult"]["deletedCount"] == 3
    assert body["retiredCartIds"] == [a, b, c]

    payment = await mongo.payments.find_one({"_id": ObjectId(body["paymentResult"]["insertedId"])})
    assert payment["cartIds"] == [ObjectId(a), ObjectId(b), ObjectId(c)]
    assert payment["menuItemIds"] == [ObjectId(i) for i in menu_ids]
    assert payment["transactionId"] == "pi_123"

    resp = await client.get("/carts", headers=headers)
    assert [item["_id"] for item in resp.json()] == [d]

async def test_settling_already_retired_carts_is_404(client, mongo, users, auth_headers):
    a, = await fill_cart(client, auth_headers(users["user"]), 1)
    payload = {"email": users["user"], "price": 10, "cartIds": [a]}
    assert (await client.post("/payments", json=payload)).status_code == 200

    resp = await client.post("/payments", json=payload)
    assert resp.status_code == 404
    assert await mongo.payments.count_documents({}) == 1

async def test_malformed_cart_id_is_400_before_any_write(client, mongo, users):
    resp = await client.post("/payments", json={"email": users["user"], "price": 10, "cartIds": ["nope"]})
    assert resp.status_code == 400
    assert await mongo.payments.count_documents({}) == 0

async def test_failed_cleanup_keeps_payment_and_reports_its_id(client, mongo, users, auth_headers, monkeypatch):
    headers = auth_headers(users["user"])
    a, b = await fill_cart(client, headers, 2)

    async def broken_retire(mongo, cart_ids, session=None):
        raise PyMongoError("connection reset")

    monkeypatch.setattr(payment_service, "retire_cart_items", broken_retire)
    resp = await client.post("/payments", json={"email": users["user"], "price": 20, "cartIds": [a, b]})
    assert resp.status_code == 500
    payment_id = resp.json()["detail"]["paymentId"]
    assert await mongo.payments.count_documents({"_id": ObjectId(payment_id)}) == 1
    assert await mongo.carts.count_documents({}) == 2

    monkeypatch.undo()
    admin = auth_headers(users["admin"])
    resp = await client.post(f"/payments/{payment_id}/retire-carts", headers=admin)
    assert resp.status_code == 200
    assert resp.json()["deleteResult"]["deletedCount"] == 2
    assert await mongo.carts.count_documents({}) == 0

    # running the cleanup again is harmless
    resp = await client.post(f"/payments/{payment_id}/retire-carts", headers=admin)
    assert resp.json()["deleteResult"]["deletedCount"] == 0

async def test_retire_carts_is_admin_only(client, mongo, users, auth_headers):
    result = await mongo.payments.insert_one({"email": users["user"], "price": 1, "cartIds": [], "menuItemIds": []})
    resp = await client.post(f"/payments/{result.inserted_id}/retire-carts", headers=auth_headers(users["user"]))
    assert resp.status_code == 403

async def test_payment_history_is_self_only(client, users, auth_headers):
    await client.post("/payments", json={"email": users["user"], "price": 12.5})
    await client.post("/payments", json={"email": users["other"], "price": 8})

    resp = await client.get(f"/payments/{users['user']}", headers=auth_headers(users["user"]))
    assert resp.status_code == 200
    assert [p["price"] for p in resp.json()] == [12.5]

    resp = await client.get(f"/payments/{users['other']}", headers=auth_headers(users["user"]))
    assert resp.status_code == 403

async def test_failed_payment_insert_leaves_cart_untouched(client, mongo, users, auth_headers, monkeypatch):
    a, b = await fill_cart(client, auth_headers(users["user"]), 2)

    async def broken_record(mongo, payment_doc, session=None):
        raise PyMongoError("write concern error")

    monkeypatch.setattr(payment_service, "record_payment", broken_record)
    resp = await client.post("/payments", json={"email": users["user"], "price": 20, "cartIds": [a, b]})
    assert resp.status_code == 500
    assert await mongo.payments.count_documents({}) == 0
    assert await mongo.carts.count_documents({"_id": {"$in": [ObjectId(a), ObjectId(b)]}}) == 2

async def test_client_chosen_payment_id_is_ignored(client, mongo, users):
    payload = {"_id": "pay1", "id": "pay1", "email": users["user"], "price": 5}
    first = await client.post("/payments", json=payload)
    second = await client.post("/payments", json=payload)
    assert first.status_code == 200
    assert second.status_code == 200
    ids = [first.json()["paymentResult"]["insertedId"], second.json()["paymentResult"]["insertedId"]]
    assert ids[0] != ids[1]
    assert all(ObjectId.is_valid(i) for i in ids)
    assert await mongo.payments.count_documents({"_id": "pay1"}) == 0

async def test_retired_ids_are_reported_once(client, users, auth_headers):
    a, b = await fill_cart(client, auth_headers(users["user"]), 2)
    resp = await client.post("/payments", json={"email": users["user"], "price": 20, "cartIds": [a, b, a]})
    assert resp.status_code == 200
    assert resp.json()["retiredCartIds"] == [a, b]
    assert resp.json()["deleteResult"]["deletedCount"] == 2
