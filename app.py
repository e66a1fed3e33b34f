from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config import CONFIG
from models import (
    ErrorResponse,
    PointsResponse,
    ReceiptIdResponse,
    ReceiptParseError,
    ReceiptPayload,
    parseReceipt,
)
from points import calculatePoints
from store import ReceiptStore, UnknownReceipt

INVALID_RECEIPT_DETAIL = "The receipt is invalid."
UNKNOWN_RECEIPT_DETAIL = "No receipt found for that ID."

logger = logging.getLogger("ReceiptLogger")


def setupLogging() -> logging.Logger:
    """
    Attach the rotating file and console handlers to the receipt logger.
    Calling it again is a no-op.

    Returns:
        logging.Logger: The configured logger.
    """
    if logger.handlers:
        return logger

    logFilePath = CONFIG["logFilePath"]
    logDir = os.path.dirname(logFilePath)
    if logDir:
        os.makedirs(logDir, exist_ok=True)

    formatter = logging.Formatter("%(message)s")

    fileHandler = RotatingFileHandler(
        filename=logFilePath,
        maxBytes=1024 * 1024,
        backupCount=3,
    )
    fileHandler.setFormatter(formatter)

    consoleHandler = logging.StreamHandler()
    consoleHandler.setFormatter(formatter)

    logger.setLevel(CONFIG["logLevel"])
    logger.addHandler(fileHandler)
    logger.addHandler(consoleHandler)
    return logger


def getReceiptStore(request: Request) -> ReceiptStore:
    """Return the receipt store owned by the running application."""
    return request.app.state.receiptStore


async def customRequestValidationExceptionHandler(request: Request, exc: RequestValidationError):
    """
    Custom handler for validation errors.

    Args:
        request: The incoming request.
        exc: The exception raised.

    Returns:
        JSONResponse: The error response.
    """
    logger.error("Validation error: %s", exc.errors())
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(detail=INVALID_RECEIPT_DETAIL).model_dump(),
    )


async def receiptParseExceptionHandler(request: Request, exc: ReceiptParseError):
    """Reject receipts whose date, time or amount fields do not parse."""
    logger.error("Receipt parse error: %s", exc)
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(detail=INVALID_RECEIPT_DETAIL).model_dump(),
    )


async def unknownReceiptExceptionHandler(request: Request, exc: UnknownReceipt):
    logger.error("Receipt not found with ID: %s", exc.receiptId)
    return JSONResponse(
        status_code=404,
        content=ErrorResponse(detail=UNKNOWN_RECEIPT_DETAIL).model_dump(),
    )


async def processReceipt(
    payload: ReceiptPayload,
    store: ReceiptStore = Depends(getReceiptStore),
) -> ReceiptIdResponse:
    """
    Process a new receipt, generate a unique receipt ID, and store the receipt data.

    Args:
        payload (ReceiptPayload): The receipt data to be processed.
        store (ReceiptStore): Where the parsed receipt is kept.

    Returns:
        ReceiptIdResponse: A response containing the unique receipt ID.
    """
    receipt = parseReceipt(payload)
    receiptId = store.put(receipt)

    logger.info("Received receipt: %s", receipt)
    logger.info("Receipt processed with ID: %s", receiptId)

    return ReceiptIdResponse(id=receiptId)


async def getPoints(
    receiptId: str,
    store: ReceiptStore = Depends(getReceiptStore),
) -> PointsResponse:
    """
    Get the points for a specific receipt based on the receipt ID.

    Args:
        receiptId (str): The unique ID of the receipt.
        store (ReceiptStore): Where the receipt was stored.

    Returns:
        PointsResponse: A response model containing the calculated points.

    Raises:
        UnknownReceipt: If the receipt ID does not exist in the store.
    """
    receipt = store.get(receiptId)
    totalPoints = calculatePoints(receipt)

    logger.info("Points calculated for receipt ID %s: %d points", receiptId, totalPoints)

    return PointsResponse(points=totalPoints)


def createApp(store: Optional[ReceiptStore] = None) -> FastAPI:
    """
    Build the receipt processor application.

    Args:
        store (ReceiptStore, optional): Store to use; a new empty one by default.

    Returns:
        FastAPI: The application with its routes and error handlers registered.
    """
    setupLogging()

    application = FastAPI(title="Receipt Processor")
    application.state.receiptStore = store if store is not None else ReceiptStore()

    application.add_exception_handler(RequestValidationError, customRequestValidationExceptionHandler)
    application.add_exception_handler(ReceiptParseError, receiptParseExceptionHandler)
    application.add_exception_handler(UnknownReceipt, unknownReceiptExceptionHandler)

    application.add_api_route(
        "/receipts/process",
        processReceipt,
        methods=["POST"],
        response_model=ReceiptIdResponse,
        responses={400: {"model": ErrorResponse}},
    )
    application.add_api_route(
        "/receipts/{receiptId}/points",
        getPoints,
        methods=["GET"],
        response_model=PointsResponse,
        responses={404: {"model": ErrorResponse}},
    )
    return application


app = createApp()


def main() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    uvicorn.run(app, host=CONFIG["host"], port=int(CONFIG["port"]))


if __name__ == "__main__":
    main()
