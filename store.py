from __future__ import annotations

import threading
import uuid
from typing import Dict

from models import Receipt


class UnknownReceipt(KeyError):
    """Raised when no receipt is stored under the requested ID."""

    def __init__(self, receiptId: str):
        self.receiptId = receiptId
        super().__init__(receiptId)


class ReceiptStore:
    """
    In-memory receipt storage keyed by generated receipt IDs.

    All access goes through a lock, so a put is visible to every later get
    and concurrent puts never share a key.
    """

    def __init__(self):
        self._receipts: Dict[str, Receipt] = {}
        self._lock = threading.Lock()

    def put(self, receipt: Receipt) -> str:
        """
        Store a receipt under a freshly generated ID.

        Args:
            receipt (Receipt): The parsed receipt.

        Returns:
            str: The new receipt ID.
        """
        with self._lock:
            receiptId = str(uuid.uuid4())
            while receiptId in self._receipts:
                receiptId = str(uuid.uuid4())
            self._receipts[receiptId] = receipt
        return receiptId

    def get(self, receiptId: str) -> Receipt:
        """
        Fetch a stored receipt.

        Raises:
            UnknownReceipt: If the ID was never issued by this store.
        """
        with self._lock:
            try:
                return self._receipts[receiptId]
            except KeyError:
                raise UnknownReceipt(receiptId) from None

    def __contains__(self, receiptId: object) -> bool:
        with self._lock:
            return receiptId in self._receipts

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
