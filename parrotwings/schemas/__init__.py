"""Pydantic schemas used across the project."""
from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    refresh_token: str
    refresh_token_expires_at: datetime


class LogoutResponse(BaseModel):
    message: str = "Logout successful."
    revoked: int


class AccountInfoResponse(BaseModel):
    id: str
    email: str
    full_name: str

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    users: list[AccountInfoResponse] = Field(default_factory=list)
    total_count: int


class BalanceResponse(BaseModel):
    balance: Decimal
    balance_cents: int


class TransferRequest(BaseModel):
    recipient: str = Field(..., min_length=1, description="Recipient email or account id")
    amount: Decimal


class TransferResponse(BaseModel):
    id: str
    sender_id: str
    recipient_id: str
    amount: Decimal
    created_at: datetime


class TransactionResponse(BaseModel):
    id: str
    created_at: datetime
    sender: AccountInfoResponse
    recipient: AccountInfoResponse
    amount: Decimal
    direction: Literal["incoming", "outgoing"]


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse] = Field(default_factory=list)
    total_count: int
