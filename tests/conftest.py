"""Shared pytest fixtures for the receipt processor tests."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Dict, List

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app import createApp
from models import Item, Receipt
from store import ReceiptStore


@pytest.fixture()
def store() -> ReceiptStore:
    return ReceiptStore()


@pytest.fixture()
def app(store) -> FastAPI:
    """Create a new app with an empty store for each test."""

    return createApp(store)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def sample_receipts() -> List[Receipt]:
    """Three receipts covering the boundaries of every rule."""

    return [
        Receipt(
            retailer="ABC Supermarket",
            purchaseDate=date(2023, 1, 1),
            purchaseTime=time(15, 0),
            items=(
                Item(shortDescription="Item 1", price=Decimal("9.99")),
                Item(shortDescription="Item 2", price=Decimal("5.99")),
                Item(shortDescription="", price=Decimal("3.49")),
            ),
            total=Decimal("19.47"),
        ),
        Receipt(
            retailer="",
            purchaseDate=date(2023, 1, 2),
            purchaseTime=time(14, 0),
            items=(
                Item(shortDescription="Apples   ", price=Decimal("11.65")),
                Item(shortDescription="Bananas", price=Decimal("3.35")),
            ),
            total=Decimal("15"),
        ),
        Receipt(
            retailer="Barnes & Noble 60131",
            purchaseDate=date(2023, 1, 10),
            purchaseTime=time(14, 10),
            total=Decimal("12.25"),
        ),
    ]


@pytest.fixture()
def receipt_payload() -> Dict[str, object]:
    return {
        "retailer": "Target",
        "purchaseDate": "2022-01-01",
        "purchaseTime": "13:01",
        "items": [
            {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
            {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
            {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
            {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
            {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
        ],
        "total": "35.35",
    }
