"""Pydantic models for transfers and the transaction history."""

from typing import Optional

from pydantic import BaseModel, Field


class TransferRequest(BaseModel):
    amount: Optional[float] = Field(None, example=25.0)
    recipient: Optional[str] = Field(None, example="0x3fa94c1b2d07e8")
    recipientName: Optional[str] = None
    sendMethod: Optional[str] = Field(None, example="card")
    receiveMethod: Optional[str] = Field(None, example="mobile_money")
    senderCountry: Optional[str] = None
    receiverCountry: Optional[str] = Field(None, example="Gabon")
    transferFee: Optional[float] = None
    gasFee: Optional[float] = None
    senderEmail: Optional[str] = None
    token: Optional[str] = None


class TransactionRead(BaseModel):
    localAmount: float
    localCurrency: str
    recipient: str
    recipientName: Optional[str] = None
    sendMethod: Optional[str] = None
    receiveMethod: Optional[str] = None
    senderCountry: Optional[str] = None
    receiverCountry: Optional[str] = None
    timestamp: str
    transferFee: Optional[float] = None
    gasFee: Optional[float] = None
    senderEmail: str


class TransferResult(BaseModel):
    transactionId: str


class TransactionStatus(BaseModel):
    status: str
