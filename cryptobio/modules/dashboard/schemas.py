from pydantic import BaseModel, Field
from typing import List

from cryptobio.modules.profiles.schemas import ProfileResponse
from cryptobio.modules.tips.schemas import TipOption


class EditableProfile(BaseModel):
    display_name: str = ""
    bio: str = ""
    avatar_url: str = ""
    twitter_url: str = ""
    tip_amounts: List[int] = Field(default_factory=list)
    payout_address: str = ""


class ProfilePreview(BaseModel):
    username: str
    display_name: str
    avatar_url: str = ""
    avatar_initial: str
    bio: str = ""
    twitter_url: str = ""
    tip_options: List[TipOption]


class DashboardResponse(BaseModel):
    profile: ProfileResponse
    form: EditableProfile
    preview: ProfilePreview
    share_url: str
    wallet_display: str
    payout_address_valid: bool
