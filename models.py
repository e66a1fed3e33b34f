from __future__ import annotations

import re
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictStr

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
TIME_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)
AMOUNT_PATTERN = re.compile(r"\d+(\.\d+)?", re.ASCII)


class ReceiptParseError(ValueError):
    """
    Raised when a submitted receipt cannot be converted into a Receipt.

    Attributes:
        field (str): Name of the payload field that failed to parse.
        value (str): The rejected raw value.
    """

    kind = "value"

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Malformed {self.kind} in {field}: {value!r}")


class MalformedDate(ReceiptParseError):
    kind = "date"


class MalformedTime(ReceiptParseError):
    kind = "time"


class MalformedAmount(ReceiptParseError):
    kind = "amount"


class ItemPayload(BaseModel):
    """
    An item exactly as submitted, before any conversion.

    Attributes:
        shortDescription (str): A short description of the product.
        price (str): The price paid for the item as a decimal string.
    """
    shortDescription: StrictStr = Field(
        ...,
        description="The Short Product Description for the item.",
        examples=["Mountain Dew 12PK"],
    )
    price: StrictStr = Field(
        ...,
        description="The total price paid for this item.",
        examples=["6.49"],
    )


class ReceiptPayload(BaseModel):
    """
    A receipt exactly as submitted. Every field is kept as the raw string
    so that conversion happens in one explicit step, see parseReceipt.

    Attributes:
        retailer (str): The name of the retailer or store.
        purchaseDate (str): The purchase date, YYYY-MM-DD.
        purchaseTime (str): The purchase time, HH:MM in 24-hour format.
        items (List[ItemPayload], optional): The purchased items.
        total (str): The total amount paid as a decimal string.
    """
    retailer: StrictStr = Field(
        ...,
        description="The name of the retailer or store the receipt is from.",
        examples=["M&M Corner Market"],
    )
    purchaseDate: StrictStr = Field(
        ...,
        description="The date of the purchase printed on the receipt.",
        examples=["2022-01-01"],
    )
    purchaseTime: StrictStr = Field(
        ...,
        description="The time of the purchase printed on the receipt. 24-hour time expected.",
        examples=["13:01"],
    )
    items: Optional[List[ItemPayload]] = Field(
        default=None,
        description="The items purchased on the receipt.",
    )
    total: StrictStr = Field(
        ...,
        description="The total amount paid on the receipt.",
        examples=["6.49"],
    )


class Item(BaseModel):
    """
    A parsed receipt item.

    Attributes:
        shortDescription (str): A short description of the product.
        price (Decimal): The price paid for the item.
    """
    model_config = ConfigDict(frozen=True)

    shortDescription: str
    price: Decimal


class Receipt(BaseModel):
    """
    A parsed receipt, ready for scoring.

    Attributes:
        retailer (str): The name of the retailer or store where the receipt is from.
        purchaseDate (date): The date the purchase was made.
        purchaseTime (time): The time the purchase was made.
        items (Tuple[Item, ...]): The items on the receipt, possibly empty.
        total (Decimal): The total amount paid.
    """
    model_config = ConfigDict(frozen=True)

    retailer: str
    purchaseDate: date
    purchaseTime: time
    items: Tuple[Item, ...] = ()
    total: Decimal


def parseDate(text: str, field: str = "purchaseDate") -> date:
    """
    Parse a strict YYYY-MM-DD date.

    Raises:
        MalformedDate: If the text is not in that exact form or is not a real date.
    """
    if not DATE_PATTERN.fullmatch(text):
        raise MalformedDate(field, text)
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as exc:
        raise MalformedDate(field, text) from exc


def parseTime(text: str, field: str = "purchaseTime") -> time:
    """
    Parse a strict 24-hour HH:MM time.

    Raises:
        MalformedTime: If the text is not in that exact form or is out of range.
    """
    if not TIME_PATTERN.fullmatch(text):
        raise MalformedTime(field, text)
    try:
        return datetime.strptime(text, "%H:%M").time()
    except ValueError as exc:
        raise MalformedTime(field, text) from exc


def parseAmount(text: str, field: str) -> Decimal:
    """
    Parse a non-negative decimal amount such as "6.49" or "15".

    Raises:
        MalformedAmount: If the text is not a plain decimal literal.
    """
    if not AMOUNT_PATTERN.fullmatch(text):
        raise MalformedAmount(field, text)
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise MalformedAmount(field, text) from exc


def parseReceipt(payload: ReceiptPayload) -> Receipt:
    """
    Convert a decoded payload into a Receipt. Any failure rejects the whole receipt.

    Args:
        payload (ReceiptPayload): The receipt as submitted.

    Returns:
        Receipt: The typed receipt.

    Raises:
        ReceiptParseError: If any date, time or amount field is malformed.
    """
    items = tuple(
        Item(
            shortDescription=item.shortDescription,
            price=parseAmount(item.price, f"items[{index}].price"),
        )
        for index, item in enumerate(payload.items or [])
    )
    return Receipt(
        retailer=payload.retailer,
        purchaseDate=parseDate(payload.purchaseDate),
        purchaseTime=parseTime(payload.purchaseTime),
        items=items,
        total=parseAmount(payload.total, "total"),
    )


class ReceiptIdResponse(BaseModel):
    """
    Represents the response for a processed receipt.

    Attributes:
        id (str): The identifier assigned to the stored receipt.
    """
    id: str


class PointsResponse(BaseModel):
    """
    Represents the response for points calculation based on a receipt.

    Attributes:
        points (int): The total points earned for a purchase based on the receipt.
    """
    points: int


class ErrorResponse(BaseModel):
    """
    Represents an error response when a request fails.

    Attributes:
        detail (str): The detail of the error message explaining what went wrong.
    """
    detail: str
