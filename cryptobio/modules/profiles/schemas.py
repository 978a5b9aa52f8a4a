from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from cryptobio.config.chain_config import DEFAULT_TIP_AMOUNTS
from cryptobio.core.validators import is_valid_address, is_valid_username, normalize_address


class ProfileCreate(BaseModel):
    username: str
    wallet_address: str
    payout_address: Optional[str] = None
    display_name: str = ""
    bio: str = ""
    avatar_url: str = ""
    twitter_url: str = ""
    tip_amounts: List[int] = Field(default_factory=list)


class ProfileCreateRequest(BaseModel):
    """Final submission of the create-profile wizard; the wallet comes from the session"""
    username: str
    display_name: str = ""
    bio: str = ""
    avatar_url: str = ""
    twitter_url: str = ""
    tip_amounts: List[int] = Field(default_factory=lambda: list(DEFAULT_TIP_AMOUNTS))

    @field_validator("username")
    @classmethod
    def username_format(cls, value: str) -> str:
        value = value.lower()
        if not is_valid_username(value):
            raise ValueError("Username must be 3-20 characters of a-z, 0-9 or _")
        return value


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    twitter_url: Optional[str] = None
    tip_amounts: Optional[List[int]] = None
    payout_address: Optional[str] = None

    @field_validator("payout_address")
    @classmethod
    def payout_address_format(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        if not is_valid_address(value):
            raise ValueError("Payout address must be 0x followed by 40 hex characters")
        return normalize_address(value)


class ProfileResponse(BaseModel):
    id: str
    username: str
    wallet_address: str
    payout_address: Optional[str] = None
    display_name: str = ""
    bio: Optional[str] = ""
    avatar_url: Optional[str] = ""
    twitter_url: Optional[str] = ""
    tip_amounts: List[int] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def payout_target(self) -> str:
        return self.payout_address or self.wallet_address


class UsernameAvailability(BaseModel):
    username: str
    available: bool
