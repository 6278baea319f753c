from moneymigo.models.payment_type import DEFAULT_PAYMENT_TYPES

def names(client):
    return [p["name"] for p in client.get("/api/payment-types").json()]

def find(client, name):
    return next(p for p in client.get("/api/payment-types").json() if p["name"] == name)

def test_defaults_are_seeded(client):
    payment_types = client.get("/api/payment-types").json()

    assert sorted(p["name"] for p in payment_types) == sorted(DEFAULT_PAYMENT_TYPES)
    assert all(p["is_default"] for p in payment_types)

def test_list_defaults_first_then_alphabetical(client):
    client.post("/api/payment-types", json={"name": "amex"})
    client.post("/api/payment-types", json={"name": "wallet"})

    assert names(client) == ["card", "cash", "hdfc_debit", "upi", "amex", "wallet"]

def test_add_normalizes_name(client):
    response = client.post("/api/payment-types", json={"name": "  Paytm Wallet "})

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "paytm wallet"
    assert body["is_default"] == False
    assert isinstance(body["id"], int)

def test_add_upi_to_unseeded_table(unseeded_client):
    first = unseeded_client.post("/api/payment-types", json={"name": " UPI "})
    second = unseeded_client.post("/api/payment-types", json={"name": " UPI "})

    assert first.status_code == 201
    assert first.json()["name"] == "upi"
    assert second.status_code == 400
    assert second.json() == {"error": "Payment type already exists"}
    assert names(unseeded_client) == ["upi"]

def test_add_conflicts_with_seeded_default(client):
    response = client.post("/api/payment-types", json={"name": "CASH"})

    assert response.status_code == 400
    assert response.json() == {"error": "Payment type already exists"}

def test_add_requires_name(client):
    for body in ({"name": ""}, {"name": "   "}, {}):
        response = client.post("/api/payment-types", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Payment type name is required"}

def test_cannot_delete_default(client):
    cash = find(client, "cash")

    response = client.delete(f"/api/payment-types/{cash['id']}")

    assert response.status_code == 400
    assert response.json() == {"error": "Cannot delete default payment types"}
    assert "cash" in names(client)

def test_delete_custom_type(client):
    created = client.post("/api/payment-types", json={"name": "cheque"}).json()

    response = client.delete(f"/api/payment-types/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Payment type deleted successfully"}
    assert "cheque" not in names(client)

def test_delete_unknown_type(client):
    response = client.delete("/api/payment-types/4242")

    assert response.status_code == 404
    assert response.json() == {"error": "Payment type not found"}

def test_delete_type_in_use_leaves_transactions(client, make_transaction):
    wallet = client.post("/api/payment-types", json={"name": "wallet"}).json()
    transaction = make_transaction(payment_type="wallet")

    response = client.delete(f"/api/payment-types/{wallet['id']}")

    assert response.status_code == 200
    kept = client.get(f"/api/transactions/{transaction['id']}").json()
    assert kept["payment_type"] == "wallet"
