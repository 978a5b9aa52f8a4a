from supabase import Client
from cryptobio.config import settings
from cryptobio.core.validators import filter_tip_amounts, normalize_address
from cryptobio.modules.profiles.schemas import ProfileCreate, ProfileUpdate, ProfileResponse
from datetime import datetime, timezone
from typing import Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    """Keyed reads and single-row writes against the profiles table.

    Lookups do not distinguish a missing row from a failed query: both come
    back as None and the failure is only logged.
    """

    def __init__(self, supabase: Client, table: Optional[str] = None):
        self.supabase = supabase
        self.table = table or settings.profiles_table

    def get_profile_by_username(self, username: str) -> Optional[ProfileResponse]:
        """Get profile by its public username"""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("username", username.lower())\
                .single()\
                .execute()

            if not result.data:
                return None

            return ProfileResponse(**result.data)
        except Exception as e:
            logger.error(f"Error getting profile for username {username}: {e}")
            return None

    def get_profile_by_wallet(self, wallet_address: str) -> Optional[ProfileResponse]:
        """Get profile owned by a wallet address"""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("wallet_address", normalize_address(wallet_address))\
                .single()\
                .execute()

            if not result.data:
                return None

            return ProfileResponse(**result.data)
        except Exception as e:
            logger.error(f"Error getting profile for wallet {wallet_address}: {e}")
            return None

    def check_username_available(self, username: str) -> bool:
        """True when no profile holds this username.

        A failed query reads as "no row", so it also reports available; the
        unique constraint on insert is the real guard.
        """
        try:
            result = self.supabase.table(self.table)\
                .select("id")\
                .eq("username", username.lower())\
                .execute()
            return not result.data
        except Exception as e:
            logger.error(f"Error checking username {username}: {e}")
            return True

    def create_profile(self, profile: ProfileCreate) -> Tuple[Optional[ProfileResponse], Optional[str]]:
        """Insert a new profile. Returns (profile, None) or (None, store error message)."""
        wallet_address = normalize_address(profile.wallet_address)
        payout_address = normalize_address(profile.payout_address) if profile.payout_address else wallet_address
        try:
            result = self.supabase.table(self.table).insert({
                "username": profile.username.lower(),
                "wallet_address": wallet_address,
                "payout_address": payout_address,
                "display_name": profile.display_name,
                "bio": profile.bio,
                "avatar_url": profile.avatar_url,
                "twitter_url": profile.twitter_url,
                "tip_amounts": filter_tip_amounts(profile.tip_amounts),
            }).execute()

            if not result.data:
                return None, "Failed to create profile"

            logger.info(f"Created profile {result.data[0].get('username')} for wallet {wallet_address}")
            return ProfileResponse(**result.data[0]), None
        except Exception as e:
            logger.error(f"Error creating profile {profile.username}: {e}")
            return None, getattr(e, "message", None) or str(e)

    def update_profile(self, wallet_address: str, updates: ProfileUpdate) -> Optional[ProfileResponse]:
        """Update the profile owned by wallet_address; username and wallet are never written"""
        try:
            update_data = {"updated_at": datetime.now(timezone.utc).isoformat()}
            if updates.display_name is not None:
                update_data["display_name"] = updates.display_name
            if updates.bio is not None:
                update_data["bio"] = updates.bio
            if updates.avatar_url is not None:
                update_data["avatar_url"] = updates.avatar_url
            if updates.twitter_url is not None:
                update_data["twitter_url"] = updates.twitter_url
            if updates.tip_amounts is not None:
                update_data["tip_amounts"] = filter_tip_amounts(updates.tip_amounts)
            if updates.payout_address:
                update_data["payout_address"] = normalize_address(updates.payout_address)

            result = self.supabase.table(self.table)\
                .update(update_data)\
                .eq("wallet_address", normalize_address(wallet_address))\
                .execute()

            if not result.data:
                return None

            return ProfileResponse(**result.data[0])
        except Exception as e:
            logger.error(f"Error updating profile for wallet {wallet_address}: {e}")
            return None
