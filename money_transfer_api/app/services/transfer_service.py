"""
Transfers and transaction history.

A transfer is a recorded intent only: nothing is debited and no
balance is checked.  The record keeps the amount in the receiver's
local currency, which is XAF for Gabon and USD everywhere else.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from ..core.errors import ValidationError
from ..core.security import is_session_token, require_session_token
from ..core.storage import Store
from ..core.timeutils import utc_timestamp
from ..schemas.transaction import TransferRequest

logger = logging.getLogger(__name__)

TRANSACTION_ID_PREFIX = "mock-transaction-id-"
LOCAL_CURRENCIES = {"Gabon": "XAF"}
DEFAULT_CURRENCY = "USD"


def local_currency(receiver_country: Optional[str]) -> str:
    return LOCAL_CURRENCIES.get(receiver_country, DEFAULT_CURRENCY)


class TransferService:
    def __init__(self, store: Store) -> None:
        self.transactions = store.awaitable(store.transactions)

    async def transfer(self, data: TransferRequest) -> Dict[str, str]:
        if not data.amount or not data.recipient or not data.senderEmail or not is_session_token(data.token):
            raise ValidationError("Missing required fields")
        await self.transactions.insert(
            {
                "localAmount": data.amount,
                "localCurrency": local_currency(data.receiverCountry),
                "recipient": data.recipient,
                "recipientName": data.recipientName,
                "sendMethod": data.sendMethod,
                "receiveMethod": data.receiveMethod,
                "senderCountry": data.senderCountry,
                "receiverCountry": data.receiverCountry,
                "timestamp": utc_timestamp(),
                "transferFee": data.transferFee,
                "gasFee": data.gasFee,
                "senderEmail": data.senderEmail,
            }
        )
        transaction_id = f"{TRANSACTION_ID_PREFIX}{int(time.time() * 1000)}"
        logger.info("Recorded transfer %s from %s", transaction_id, data.senderEmail)
        return {"transactionId": transaction_id}

    async def history(self, email: Optional[str], token: Optional[str]) -> List[Dict[str, Any]]:
        if not email or not is_session_token(token):
            raise ValidationError("Invalid email or token")
        return await self.transactions.find_many({"senderEmail": email})

    async def status(self, transaction_id: str, token: Optional[str]) -> Dict[str, str]:
        # Every transfer settles immediately, so any id reports Completed.
        require_session_token(token)
        return {"status": "Completed"}
