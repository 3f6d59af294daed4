from enum import Enum
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.core.clock import ensure_aware


STAMPS_REQUIRED_CHOICES = (5, 8, 10, 12)


def _check_stamps_required(value: Optional[int]) -> Optional[int]:
    if value is not None and value not in STAMPS_REQUIRED_CHOICES:
        choices = ", ".join(str(c) for c in STAMPS_REQUIRED_CHOICES)
        raise ValueError(f"stamps_required must be one of {choices}")
    return value


# ============================================
# Auth Schemas
# ============================================

class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class AuthSessionResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    access_token: Optional[str] = None  # None when email confirmation is pending
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None


class CafeOwnerResponse(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class CafeOwnerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20)


# ============================================
# Cafe Schemas
# ============================================

class CafeCreate(BaseModel):
    name: str = Field(..., max_length=100)
    address: Optional[str] = None
    city: Optional[str] = "Delhi"
    stamps_required: int = 10
    reward_description: str = "Free coffee"

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Please enter your cafe name")
        return value.strip()

    @field_validator("stamps_required")
    @classmethod
    def valid_stamps_required(cls, value: int) -> int:
        return _check_stamps_required(value)


class CafeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    address: Optional[str] = None
    city: Optional[str] = None
    stamps_required: Optional[int] = None
    reward_description: Optional[str] = Field(default=None, min_length=1)

    # Omitted fields keep their value; these columns cannot be cleared.
    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("Please enter your cafe name")
        return value.strip()

    @field_validator("reward_description")
    @classmethod
    def reward_not_blank(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("Please describe the reward")
        return value.strip()

    @field_validator("stamps_required")
    @classmethod
    def valid_stamps_required(cls, value: Optional[int]) -> int:
        if value is None:
            raise ValueError("stamps_required cannot be empty")
        return _check_stamps_required(value)


class CafeResponse(BaseModel):
    id: str
    owner_id: str
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    logo_url: Optional[str] = None
    nfc_tag_id: Optional[str] = None
    qr_code_url: Optional[str] = None
    stamps_required: int
    reward_description: str
    is_active: bool = True
    created_at: Optional[datetime] = None


class CafeStats(BaseModel):
    total_stamps: int = 0
    total_redemptions: int = 0
    active_customers: int = 0  # Last 30 days
    stamps_today: int = 0
    stamps_this_week: int = 0
    stamps_this_month: int = 0


# ============================================
# Customer Schemas
# ============================================

class StampEvent(BaseModel):
    """A stamp row joined with the customer's display fields."""
    user_id: str
    cafe_id: str
    stamped_at: datetime
    user_name: Optional[str] = None
    user_phone: Optional[str] = None

    @field_validator("stamped_at")
    @classmethod
    def aware_stamped_at(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class CustomerSummary(BaseModel):
    user_id: str
    user_name: Optional[str] = None
    user_phone: str = "Unknown"
    stamp_count: int = Field(default=0, ge=0)
    last_visit: datetime


class CustomerStats(BaseModel):
    total_customers: int = 0
    total_stamps: int = 0
    active_this_week: int = 0


class CustomerListResponse(BaseModel):
    stamps_required: int
    customers: List[CustomerSummary] = []
    stats: CustomerStats


# ============================================
# Redemption Schemas
# ============================================

class RedemptionStatus(str, Enum):
    PENDING = "pending"
    CLAIMED = "claimed"
    EXPIRED = "expired"


class RedemptionResponse(BaseModel):
    id: str
    user_id: str
    cafe_id: str
    stamps_used: int
    reward_description: str
    redemption_code: str
    is_claimed: bool
    created_at: datetime
    claimed_at: Optional[datetime] = None
    expires_at: datetime
    status: RedemptionStatus
    user_name: Optional[str] = None
    user_phone: Optional[str] = None


class VerifyRedemptionRequest(BaseModel):
    code: str


class VerifyRedemptionResponse(BaseModel):
    success: bool
    message: str
    error: Optional[str] = None  # Error code when success is False
    reward_description: Optional[str] = None
    redemptions: List[RedemptionResponse] = []


# ============================================
# QR & NFC Schemas
# ============================================

class QRSetupResponse(BaseModel):
    cafe_id: str
    stamp_url: str  # Encoded in the printed QR code
    nfc_url: str  # Programmed onto the NFC tag
    nfc_tag_id: Optional[str] = None
    qr_code: str  # PNG data URL
    qr_code_svg: str
    stamps_required: int


class NfcTagUpdate(BaseModel):
    nfc_tag_id: Optional[str] = Field(default=None, max_length=64)
