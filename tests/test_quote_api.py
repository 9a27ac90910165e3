import pytest

from app.storage import StorageError


def test_quote_without_dimensions(client, sender, quote_payload):
    resp = client.post("/api/quote", json=quote_payload)
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "message": "Quote request submitted successfully",
        "estimatedCost": 0,
        "estimatedArea": 0,
    }
    assert sender.sent[0].subject == "PVC Cabinets Haiti - Quote Request: Jean Baptiste (kitchen)"


def test_quote_with_dimensions_and_features(client, store, quote_payload):
    payload = {
        **quote_payload,
        "roomDimensions": {"length": 12, "width": 10, "height": 8},
        "features": ["soft-close-hinges", "glass-doors", "unknown-addon"],
    }
    resp = client.post("/api/quote", json=payload)
    assert resp.status_code == 200
    body = resp.json()
    assert body["estimatedArea"] == 120
    assert body["estimatedCost"] == 65340

    (record,) = [store.get(sid) for sid in store._records]
    assert record["kind"] == "quote"
    assert record["estimatedCost"] == 65340
    assert record["features"] == ["soft-close-hinges", "glass-doors", "unknown-addon"]


def test_quote_missing_fields_listed(client, sender, quote_payload):
    payload = {k: v for k, v in quote_payload.items() if k not in ("budget", "timeline")}
    resp = client.post("/api/quote", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields", "missingFields": ["budget", "timeline"]}
    assert sender.sent == []


def test_quote_invalid_email(client, quote_payload):
    resp = client.post("/api/quote", json={**quote_payload, "email": "jean@localhost"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid email format"}


def test_quote_incomplete_dimensions(client, quote_payload):
    payload = {**quote_payload, "roomDimensions": {"length": 12, "width": 10}}
    resp = client.post("/api/quote", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Incomplete room dimensions"}


@pytest.mark.parametrize("blank", ["", False, None, 0])
def test_quote_falsy_dimensions_count_as_absent(client, quote_payload, blank):
    resp = client.post("/api/quote", json={**quote_payload, "roomDimensions": blank})
    assert resp.status_code == 200
    assert resp.json()["estimatedCost"] == 0


def test_quote_oversized_dimensions_rejected(client, sender, quote_payload):
    payload = {
        **quote_payload,
        "roomDimensions": {"length": 1e200, "width": 1e200, "height": 8},
    }
    resp = client.post("/api/quote", json=payload)
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Invalid field values"
    assert "roomDimensions.length" in body["invalidFields"]
    assert sender.sent == []


def test_quote_invalid_enumeration(client, quote_payload):
    resp = client.post("/api/quote", json={**quote_payload, "finish": "chrome"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid field values", "invalidFields": ["finish"]}


def test_quote_urgent_recorded_in_notification(client, sender, quote_payload):
    resp = client.post("/api/quote", json={**quote_payload, "timeline": "asap"})
    assert resp.status_code == 200
    assert "URGENT REQUEST" in sender.sent[0].body_html


def test_quote_storage_failure_is_generic_500(client, store, monkeypatch, quote_payload):
    def broken_save(kind, record):
        raise StorageError("disk full")

    monkeypatch.setattr(store, "save", broken_save)
    resp = client.post("/api/quote", json=quote_payload)
    assert resp.status_code == 500
    assert resp.json() == {
        "error": "Internal server error",
        "message": "Failed to process quote request",
    }


def test_quote_options_preflight(client):
    resp = client.options("/api/quote")
    assert resp.status_code == 200


def test_quote_preflight_with_unlisted_header(client):
    resp = client.options(
        "/api/quote",
        headers={
            "Origin": "https://pvchaiti.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization",
        },
    )
    assert resp.status_code == 200
    assert "authorization" in resp.headers["access-control-allow-headers"].lower()


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "TRACE"])
def test_quote_other_methods_not_allowed(client, method):
    resp = client.request(method, "/api/quote")
    assert resp.status_code == 405
    assert resp.json() == {"error": "Method not allowed"}
