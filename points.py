from __future__ import annotations

import logging
import math
from datetime import time
from decimal import Decimal, localcontext
from typing import Callable, Dict

from config import CONFIG
from models import Receipt

logger = logging.getLogger("ReceiptLogger")

AFTERNOON_START = time(14, 0)
AFTERNOON_END = time(16, 0)


def _digits(*amounts: Decimal) -> int:
    """Working precision wide enough for exact arithmetic on the given amounts."""
    return sum(len(amount.as_tuple().digits) + max(amount.as_tuple().exponent, 0) for amount in amounts) + 2


def isMultipleOf(amount: Decimal, step: Decimal) -> bool:
    """Exact divisibility check, whatever the size of the amount."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _digits(amount, step))
        return amount % step == 0


def retailerNamePoints(receipt: Receipt) -> int:
    """One point for every letter or digit in the retailer name."""
    count = 0
    for c in receipt.retailer:
        if c.isalpha() or c.isdecimal():
            count += 1
    return count * CONFIG["retailerNameMultiplier"]


def roundDollarPoints(receipt: Receipt) -> int:
    """Bonus if the total is a round dollar amount with no cents."""
    if isMultipleOf(receipt.total, Decimal(1)):
        return CONFIG["roundDollarBonus"]
    return 0


def quarterMultiplePoints(receipt: Receipt) -> int:
    """Bonus if the total is a multiple of 0.25."""
    if isMultipleOf(receipt.total, Decimal("0.25")):
        return CONFIG["multipleOf025Bonus"]
    return 0


def itemCountPoints(receipt: Receipt) -> int:
    """Points for every two items on the receipt."""
    return (len(receipt.items) // 2) * CONFIG["itemsBonusPerTwo"]


def itemDescriptionPoints(receipt: Receipt) -> int:
    """
    For every item whose trimmed description length is a non-zero multiple of 3,
    multiply the price by the description multiplier and round up.
    """
    multiplier = CONFIG["itemDescriptionMultiplier"]
    points = 0
    for item in receipt.items:
        trimmedDescription = item.shortDescription.strip()
        if trimmedDescription and len(trimmedDescription) % 3 == 0:
            with localcontext() as ctx:
                ctx.prec = max(ctx.prec, _digits(item.price, multiplier))
                points += math.ceil(item.price * multiplier)
    return points


def oddDayPoints(receipt: Receipt) -> int:
    """Bonus if the day in the purchase date is odd."""
    if receipt.purchaseDate.day % 2 != 0:
        return CONFIG["oddDayBonus"]
    return 0


def afternoonPoints(receipt: Receipt) -> int:
    """Bonus if the purchase happened after 2:00pm and before 4:00pm."""
    if AFTERNOON_START < receipt.purchaseTime < AFTERNOON_END:
        return CONFIG["timeBonus"]
    return 0


RULES: Dict[str, Callable[[Receipt], int]] = {
    "retailerName": retailerNamePoints,
    "roundDollar": roundDollarPoints,
    "multipleOf025": quarterMultiplePoints,
    "itemCount": itemCountPoints,
    "itemDescription": itemDescriptionPoints,
    "oddDay": oddDayPoints,
    "afternoon": afternoonPoints,
}


def pointsBreakdown(receipt: Receipt) -> Dict[str, int]:
    """
    Evaluate every rule independently.

    Args:
        receipt (Receipt): The parsed receipt.

    Returns:
        dict: Points awarded by each rule, keyed by rule name.
    """
    return {name: rule(receipt) for name, rule in RULES.items()}


def calculatePoints(receipt: Receipt) -> int:
    """
    Calculate points based on the receipt data according to specific rules.
    Multiplier values are loaded from the config.

    Args:
        receipt (Receipt): The receipt object containing the data to calculate points.

    Returns:
        int: The total points calculated based on the rules.
    """
    points = 0
    for name, awarded in pointsBreakdown(receipt).items():
        points += awarded
        logger.debug("Rule %s: %d points (running total %d)", name, awarded, points)
    return points
