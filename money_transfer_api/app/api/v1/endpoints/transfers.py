"""
Transfer endpoints.

``/transfer`` records the transfer and returns a synthetic id;
``/transaction-status`` reports every transfer as completed.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from money_transfer_api.app.core.deps import get_transfer_service
from money_transfer_api.app.schemas.transaction import (
    TransactionRead,
    TransactionStatus,
    TransferRequest,
    TransferResult,
)
from money_transfer_api.app.services.transfer_service import TransferService

router = APIRouter()


@router.post("/transfer", response_model=TransferResult)
async def transfer(payload: TransferRequest, service: TransferService = Depends(get_transfer_service)) -> dict:
    return await service.transfer(payload)


@router.get("/transactions", response_model=List[TransactionRead])
async def list_transactions(
    email: Optional[str] = Query(None, description="Sender email"),
    token: Optional[str] = Query(None),
    service: TransferService = Depends(get_transfer_service),
) -> List[dict]:
    return await service.history(email, token)


@router.get("/transaction-status/{transaction_id}", response_model=TransactionStatus)
async def transaction_status(
    transaction_id: str,
    token: Optional[str] = Query(None),
    service: TransferService = Depends(get_transfer_service),
) -> dict:
    return await service.status(transaction_id, token)
