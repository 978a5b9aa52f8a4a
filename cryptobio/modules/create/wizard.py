"""
Create-profile wizard

Step 1 claims a username (availability checked after an idle debounce),
step 2 collects optional display details, step 3 the preset tip amounts.
Only a connected wallet without a profile may use it.
"""

import logging
from enum import Enum
from typing import List, Optional

from cryptobio.config import settings
from cryptobio.config.chain_config import DEFAULT_TIP_AMOUNTS
from cryptobio.core.debounce import Debouncer
from cryptobio.core.validators import (
    USERNAME_MIN_LENGTH, filter_tip_amounts, parse_tip_amount, sanitize_username,
)
from cryptobio.modules.profiles.schemas import ProfileCreate, ProfileCreateRequest, ProfileResponse
from cryptobio.modules.profiles.service import ProfileService

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/dashboard"
LAST_STEP = 3


class UsernameStatus(str, Enum):
    IDLE = "idle"
    CHECKING = "checking"
    AVAILABLE = "available"
    TAKEN = "taken"


def build_new_profile(request: ProfileCreateRequest, wallet_address: str) -> ProfileCreate:
    """Profile record for a wizard submission: payout goes to the creating wallet"""
    return ProfileCreate(
        username=request.username,
        wallet_address=wallet_address,
        payout_address=wallet_address,
        display_name=request.display_name or request.username,
        bio=request.bio,
        avatar_url=request.avatar_url,
        twitter_url=request.twitter_url,
        tip_amounts=filter_tip_amounts(request.tip_amounts),
    )


class ProfileWizard:
    def __init__(
        self,
        service: ProfileService,
        wallet_address: Optional[str],
        debounce_seconds: Optional[float] = None,
    ):
        self.service = service
        self.wallet_address = wallet_address
        self.debouncer = Debouncer(
            settings.username_check_debounce_seconds if debounce_seconds is None else debounce_seconds
        )

        self.step = 1
        self.username = ""
        self.username_status = UsernameStatus.IDLE
        self.display_name = ""
        self.bio = ""
        self.avatar_url = ""
        self.twitter_url = ""
        self.tip_amounts: List[int] = list(DEFAULT_TIP_AMOUNTS)
        self.creating = False
        self.error = ""
        self.redirect_to: Optional[str] = None

    @property
    def is_connected(self) -> bool:
        return bool(self.wallet_address)

    def enter(self) -> Optional[str]:
        """Send wallets that already own a profile to the dashboard"""
        if self.is_connected and self.service.get_profile_by_wallet(self.wallet_address):
            self.redirect_to = DASHBOARD_PATH
        return self.redirect_to

    def set_username(self, raw: str) -> str:
        self.username = sanitize_username(raw)
        if len(self.username) < USERNAME_MIN_LENGTH:
            self.debouncer.cancel()
            self.username_status = UsernameStatus.IDLE
            return self.username

        username = self.username

        async def check() -> bool:
            self.username_status = UsernameStatus.CHECKING
            return self.service.check_username_available(username)

        self.debouncer.schedule(check, self._apply_availability)
        return self.username

    def _apply_availability(self, available: bool) -> None:
        self.username_status = UsernameStatus.AVAILABLE if available else UsernameStatus.TAKEN

    async def wait_for_username_check(self) -> UsernameStatus:
        await self.debouncer.wait()
        return self.username_status

    def next_step(self) -> int:
        if self.step == 1 and self.username_status != UsernameStatus.AVAILABLE:
            return self.step
        if self.step < LAST_STEP:
            self.step += 1
        return self.step

    def back(self) -> int:
        if self.step > 1:
            self.step -= 1
        return self.step

    def set_details(
        self,
        display_name: Optional[str] = None,
        bio: Optional[str] = None,
        avatar_url: Optional[str] = None,
        twitter_url: Optional[str] = None,
    ) -> None:
        if display_name is not None:
            self.display_name = display_name
        if bio is not None:
            self.bio = bio
        if avatar_url is not None:
            self.avatar_url = avatar_url
        if twitter_url is not None:
            self.twitter_url = twitter_url

    def set_tip_amount(self, index: int, raw) -> None:
        self.tip_amounts[index] = parse_tip_amount(raw)

    def to_request(self) -> ProfileCreateRequest:
        return ProfileCreateRequest(
            username=self.username,
            display_name=self.display_name,
            bio=self.bio,
            avatar_url=self.avatar_url,
            twitter_url=self.twitter_url,
            tip_amounts=self.tip_amounts,
        )

    async def submit(self) -> Optional[ProfileResponse]:
        if not self.is_connected or self.step != LAST_STEP or self.creating:
            return None
        self.creating = True
        self.error = ""
        try:
            profile, error = self.service.create_profile(
                build_new_profile(self.to_request(), self.wallet_address)
            )
            if profile is None:
                self.error = error or "Failed to create profile. Please try again."
                return None
            logger.info(f"Wizard created profile {profile.username}")
            self.redirect_to = DASHBOARD_PATH
            return profile
        except Exception as e:
            logger.error(f"Wizard submission failed for {self.username}: {e}")
            self.error = "Something went wrong. Please try again."
            return None
        finally:
            self.creating = False
