"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from loyalty.modules.transfers.models import TransferStatus


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AccountCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)

    @field_validator("password")
    @classmethod
    def password_has_letter_and_digit(cls, value: str) -> str:
        if not any(ch.isalpha() for ch in value) or not any(ch.isdigit() for ch in value):
            raise ValueError("Password must contain at least one letter and one number")
        return value


class AdminAccountCreate(AccountCreate):
    role: Literal["user", "admin"] = "user"
    is_active: bool = True


class TokenData(BaseModel):
    account_id: str
    email: str
    role: str


class AccountResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    is_active: bool
    balance: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AccountListResponse(BaseModel):
    total_items: int
    total_pages: int
    current_page: int
    page_size: int
    data: list[AccountResponse]


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account: AccountResponse


class TransferCreateRequest(BaseModel):
    receiver_email: EmailStr = Field(..., description="Email of the account receiving the points")
    amount: int = Field(..., ge=1, description="Number of points to transfer")


class TransferResponse(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    amount: int
    status: TransferStatus
    created_at: datetime
    expires_at: datetime
    confirmed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TransferActionResponse(BaseModel):
    message: str
    transfer: TransferResponse


class TransferListResponse(BaseModel):
    total_items: int
    total_pages: int
    current_page: int
    page_size: int
    data: list[TransferResponse]


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
