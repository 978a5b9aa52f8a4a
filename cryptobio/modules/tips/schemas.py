from pydantic import BaseModel
from typing import List, Optional

from cryptobio.modules.profiles.schemas import ProfileResponse


class TipSplit(BaseModel):
    total_units: int
    creator_units: int
    fee_units: int


class TipOption(BaseModel):
    index: int
    label: str
    emoji: str
    amount: int
    creator_amount: str  # USDC the creator receives, two decimals


class TipTransfer(BaseModel):
    """A prepared ERC-20 transfer ready for the visitor's wallet to sign"""
    chain_id: int
    token_address: str
    recipient: str
    amount: str
    total_units: int
    creator_units: int
    fee_units: int
    data: str


class TipPageResponse(BaseModel):
    profile: ProfileResponse
    payout_address: str
    tip_options: List[TipOption]
    fee_percent: int
    creator_percent: int
    fee_note: str
    token_symbol: str
    token_address: str
    chain_id: int
    chain_name: str
    avatar_initial: Optional[str] = None
