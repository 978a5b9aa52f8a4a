import logging
from typing import Optional

from cryptobio.config import settings
from cryptobio.config.chain_config import DEFAULT_TIP_AMOUNTS
from cryptobio.core.validators import filter_tip_amounts, is_valid_address, parse_tip_amount
from cryptobio.modules.dashboard.schemas import EditableProfile, ProfilePreview
from cryptobio.modules.profiles.schemas import ProfileResponse, ProfileUpdate
from cryptobio.modules.profiles.service import ProfileService
from cryptobio.modules.tips.transfer import build_tip_options
from cryptobio.modules.wallet.token import truncate_address

logger = logging.getLogger(__name__)

CREATE_PATH = "/create"


def editable_from_profile(profile: ProfileResponse) -> EditableProfile:
    return EditableProfile(
        display_name=profile.display_name or "",
        bio=profile.bio or "",
        avatar_url=profile.avatar_url or "",
        twitter_url=profile.twitter_url or "",
        tip_amounts=list(profile.tip_amounts) if profile.tip_amounts else list(DEFAULT_TIP_AMOUNTS),
        payout_address=profile.payout_target,
    )


class DashboardEditor:
    """Editable copy of the caller's profile, kept apart from the stored record until saved"""

    def __init__(self, service: ProfileService, wallet_address: str):
        self.service = service
        self.wallet_address = wallet_address.lower()
        self.profile: Optional[ProfileResponse] = None
        self.form = EditableProfile()
        self.saving = False
        self.saved = False
        self.redirect_to: Optional[str] = None

    def load(self) -> Optional[ProfileResponse]:
        self.profile = self.service.get_profile_by_wallet(self.wallet_address)
        if self.profile is None:
            self.redirect_to = CREATE_PATH
            return None
        self.form = editable_from_profile(self.profile)
        return self.profile

    @property
    def payout_address_valid(self) -> bool:
        return not self.form.payout_address or is_valid_address(self.form.payout_address)

    @property
    def can_save(self) -> bool:
        return self.profile is not None and not self.saving and self.payout_address_valid

    @property
    def share_url(self) -> str:
        return settings.profile_url(self.profile.username) if self.profile else ""

    @property
    def wallet_display(self) -> str:
        return truncate_address(self.wallet_address)

    def edit(self, **fields) -> None:
        self.saved = False
        self.form = self.form.model_copy(update=fields)

    def set_tip_amount(self, index: int, raw) -> None:
        amounts = list(self.form.tip_amounts)
        amounts[index] = parse_tip_amount(raw)
        self.edit(tip_amounts=amounts)

    def use_connected_wallet(self) -> None:
        self.edit(payout_address=self.wallet_address)

    def preview(self) -> ProfilePreview:
        """Render from the unsaved form so edits show before they are persisted"""
        username = self.profile.username if self.profile else ""
        name = self.form.display_name or username
        return ProfilePreview(
            username=username,
            display_name=name,
            avatar_url=self.form.avatar_url,
            avatar_initial=name[:1].upper(),
            bio=self.form.bio,
            twitter_url=self.form.twitter_url,
            tip_options=build_tip_options(filter_tip_amounts(self.form.tip_amounts)),
        )

    def build_update(self) -> ProfileUpdate:
        return ProfileUpdate(
            display_name=self.form.display_name,
            bio=self.form.bio,
            avatar_url=self.form.avatar_url,
            twitter_url=self.form.twitter_url,
            tip_amounts=filter_tip_amounts(self.form.tip_amounts),
            payout_address=self.form.payout_address or self.wallet_address,
        )

    def save(self) -> Optional[ProfileResponse]:
        if not self.can_save:
            return None
        self.saving = True
        self.saved = False
        try:
            updated = self.service.update_profile(self.wallet_address, self.build_update())
        finally:
            self.saving = False
        if updated is None:
            logger.warning(f"Dashboard save for {self.wallet_address} did not persist")
            return None
        self.profile = updated
        self.saved = True
        return updated
