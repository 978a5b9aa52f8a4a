"""Profile store client against the in-memory Supabase fake."""

from __future__ import annotations

from cryptobio.modules.profiles.schemas import ProfileCreate, ProfileUpdate
from tests.conftest import CREATOR_WALLET, PAYOUT_WALLET, VISITOR_WALLET


def _new(username: str, wallet: str, **kwargs) -> ProfileCreate:
    return ProfileCreate(username=username, wallet_address=wallet, **kwargs)


class TestCreateProfile:
    def test_username_and_wallet_stored_lowercase(self, profile_service, fake_db):
        profile, error = profile_service.create_profile(_new("AlexR", CREATOR_WALLET))
        assert error is None
        assert profile.username == "alexr"
        assert profile.wallet_address == CREATOR_WALLET.lower()
        row = fake_db.rows()[0]
        assert row["username"] == "alexr"
        assert row["wallet_address"] == CREATOR_WALLET.lower()

    def test_payout_defaults_to_wallet(self, profile_service):
        profile, _ = profile_service.create_profile(_new("alex", CREATOR_WALLET))
        assert profile.payout_address == CREATOR_WALLET.lower()

    def test_explicit_payout_lowercased(self, profile_service):
        profile, _ = profile_service.create_profile(
            _new("alex", CREATOR_WALLET, payout_address=PAYOUT_WALLET)
        )
        assert profile.payout_address == PAYOUT_WALLET.lower()

    def test_non_positive_tip_amounts_filtered(self, profile_service):
        profile, _ = profile_service.create_profile(
            _new("alex", CREATOR_WALLET, tip_amounts=[5, 0, -2, 25])
        )
        assert profile.tip_amounts == [5, 25]

    def test_all_zero_tip_amounts_become_empty(self, profile_service):
        profile, _ = profile_service.create_profile(
            _new("alex", CREATOR_WALLET, tip_amounts=[0, 0, 0])
        )
        assert profile.tip_amounts == []

    def test_duplicate_username_from_other_wallet_fails(self, profile_service, fake_db):
        assert profile_service.check_username_available("alex") is True
        first, _ = profile_service.create_profile(_new("alex", CREATOR_WALLET))
        second, error = profile_service.create_profile(_new("ALEX", VISITOR_WALLET))
        assert first is not None
        assert second is None
        assert "duplicate" in error
        assert len(fake_db.rows()) == 1
        assert fake_db.rows()[0]["wallet_address"] == CREATOR_WALLET.lower()

    def test_second_profile_for_same_wallet_fails(self, profile_service):
        profile_service.create_profile(_new("alex", CREATOR_WALLET))
        second, error = profile_service.create_profile(_new("other", CREATOR_WALLET.upper().replace("0X", "0x")))
        assert second is None
        assert error

    def test_store_failure_returns_message(self, profile_service, fake_db):
        fake_db.fail = True
        profile, error = profile_service.create_profile(_new("alex", CREATOR_WALLET))
        assert profile is None
        assert error == "connection refused"


class TestLookups:
    def test_lookup_by_username_is_case_insensitive(self, profile_service, creator_profile):
        found = profile_service.get_profile_by_username("ALEX")
        assert found.id == creator_profile.id

    def test_lookup_by_wallet_is_case_insensitive(self, profile_service, creator_profile):
        found = profile_service.get_profile_by_wallet(CREATOR_WALLET.upper().replace("0X", "0x"))
        assert found.id == creator_profile.id

    def test_missing_profile_returns_none(self, profile_service):
        assert profile_service.get_profile_by_username("nobody") is None
        assert profile_service.get_profile_by_wallet(VISITOR_WALLET) is None

    def test_store_failure_reads_as_missing(self, profile_service, creator_profile, fake_db):
        fake_db.fail = True
        assert profile_service.get_profile_by_username("alex") is None
        assert profile_service.get_profile_by_wallet(CREATOR_WALLET) is None

    def test_availability(self, profile_service, creator_profile):
        assert profile_service.check_username_available("Alex") is False
        assert profile_service.check_username_available("sam") is True

    def test_payout_target_falls_back_to_wallet(self, profile_service, creator_profile, fake_db):
        fake_db.rows()[0]["payout_address"] = None
        profile = profile_service.get_profile_by_username("alex")
        assert profile.payout_target == CREATOR_WALLET.lower()


class TestUpdateProfile:
    def test_update_targets_callers_wallet_only(self, profile_service, creator_profile):
        other, _ = profile_service.create_profile(_new("sam", VISITOR_WALLET, display_name="Sam"))
        updated = profile_service.update_profile(CREATOR_WALLET, ProfileUpdate(display_name="Alex R."))
        assert updated.id == creator_profile.id
        assert updated.display_name == "Alex R."
        assert profile_service.get_profile_by_username("sam").display_name == "Sam"

    def test_update_never_writes_identity_fields(self, profile_service, creator_profile, fake_db):
        profile_service.update_profile(CREATOR_WALLET, ProfileUpdate(bio="new bio"))
        table, op, filters = fake_db.calls[-1]
        assert op == "update"
        assert filters == [("wallet_address", CREATOR_WALLET.lower())]
        row = fake_db.rows()[0]
        assert row["username"] == "alex"
        assert row["wallet_address"] == CREATOR_WALLET.lower()

    def test_update_sets_timestamp_and_filters_amounts(self, profile_service, creator_profile):
        updated = profile_service.update_profile(
            CREATOR_WALLET, ProfileUpdate(tip_amounts=[0, 15, -1])
        )
        assert updated.tip_amounts == [15]
        assert updated.updated_at >= creator_profile.created_at

    def test_update_lowercases_payout(self, profile_service, creator_profile):
        updated = profile_service.update_profile(
            CREATOR_WALLET, ProfileUpdate(payout_address=VISITOR_WALLET)
        )
        assert updated.payout_address == VISITOR_WALLET.lower()

    def test_update_without_profile_returns_none(self, profile_service):
        assert profile_service.update_profile(VISITOR_WALLET, ProfileUpdate(bio="x")) is None
