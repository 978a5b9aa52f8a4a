from typing import Optional

from cryptobio.config import settings
from cryptobio.config.chain_config import TOKEN_SYMBOL
from cryptobio.modules.profiles.service import ProfileService
from cryptobio.modules.tips.schemas import TipPageResponse, TipTransfer
from cryptobio.modules.tips.transfer import build_tip_options, build_transfer, format_fee_note


class TipService:
    def __init__(self, profiles: ProfileService):
        self.profiles = profiles

    def get_tip_page(self, username: str) -> Optional[TipPageResponse]:
        """Public page view for a username, or None when no profile resolves"""
        profile = self.profiles.get_profile_by_username(username)
        if profile is None:
            return None
        name = profile.display_name or profile.username
        return TipPageResponse(
            profile=profile,
            payout_address=profile.payout_target,
            tip_options=build_tip_options(profile.tip_amounts),
            fee_percent=settings.platform_fee_percent,
            creator_percent=settings.creator_percent,
            fee_note=format_fee_note(name),
            token_symbol=TOKEN_SYMBOL,
            token_address=settings.usdc_address,
            chain_id=settings.chain_id,
            chain_name=settings.chain_name,
            avatar_initial=name[0].upper() if name else None,
        )

    def prepare_transfer(self, username: str, amount) -> Optional[TipTransfer]:
        profile = self.profiles.get_profile_by_username(username)
        if profile is None:
            return None
        return build_transfer(profile, amount)
