"""Integration tests for the receipt endpoints."""

from __future__ import annotations

import uuid

from fastapi import status
from fastapi.testclient import TestClient

from app import createApp


def test_process_receipt_returns_uuid(client, store, receipt_payload):
    response = client.post("/receipts/process", json=receipt_payload)

    assert response.status_code == status.HTTP_200_OK
    receiptId = response.json()["id"]
    assert str(uuid.UUID(receiptId)) == receiptId
    assert receiptId in store


def test_process_then_points_round_trip(client, receipt_payload):
    receiptId = client.post("/receipts/process", json=receipt_payload).json()["id"]

    response = client.get(f"/receipts/{receiptId}/points")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"points": 28}


def test_points_for_round_total_receipt(client):
    payload = {
        "retailer": "M&M Corner Market",
        "purchaseDate": "2022-03-20",
        "purchaseTime": "14:33",
        "items": [{"shortDescription": "Gatorade", "price": "2.25"}] * 4,
        "total": "9.00",
    }
    receiptId = client.post("/receipts/process", json=payload).json()["id"]

    assert client.get(f"/receipts/{receiptId}/points").json() == {"points": 109}


def test_points_are_idempotent(client, receipt_payload):
    receiptId = client.post("/receipts/process", json=receipt_payload).json()["id"]

    first = client.get(f"/receipts/{receiptId}/points").json()
    second = client.get(f"/receipts/{receiptId}/points").json()

    assert first == second


def test_receipt_without_items_is_accepted(client, receipt_payload):
    del receipt_payload["items"]
    receiptId = client.post("/receipts/process", json=receipt_payload).json()["id"]

    # "Target" (6) plus the odd day bonus (6)
    assert client.get(f"/receipts/{receiptId}/points").json() == {"points": 12}


def test_malformed_date_is_rejected(client, store, receipt_payload):
    receipt_payload["purchaseDate"] = "2022-01-0"

    response = client.post("/receipts/process", json=receipt_payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "The receipt is invalid."}
    assert len(store) == 0


def test_malformed_total_is_rejected(client, store, receipt_payload):
    receipt_payload["total"] = "35.35s"

    response = client.post("/receipts/process", json=receipt_payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert len(store) == 0


def test_malformed_time_is_rejected(client, receipt_payload):
    receipt_payload["purchaseTime"] = "1:01 PM"

    response = client.post("/receipts/process", json=receipt_payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_missing_field_is_rejected(client, store, receipt_payload):
    del receipt_payload["retailer"]

    response = client.post("/receipts/process", json=receipt_payload)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "The receipt is invalid."}
    assert len(store) == 0


def test_non_json_body_is_rejected(client):
    response = client.post(
        "/receipts/process",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_unknown_receipt_id(client):
    response = client.get("/receipts/invalidID/points")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "No receipt found for that ID."}


def test_apps_do_not_share_receipts(client, receipt_payload):
    receiptId = client.post("/receipts/process", json=receipt_payload).json()["id"]

    other = TestClient(createApp())
    assert other.get(f"/receipts/{receiptId}/points").status_code == status.HTTP_404_NOT_FOUND


def test_very_large_total_is_scored(client, receipt_payload):
    receipt_payload["total"] = "1" * 30 + ".00"
    receiptId = client.post("/receipts/process", json=receipt_payload).json()["id"]

    response = client.get(f"/receipts/{receiptId}/points")

    # 28 from the regular receipt, plus 50 and 25 for a round total
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"points": 103}
