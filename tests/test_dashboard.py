"""Dashboard editor: load, validation, preview and save."""

from __future__ import annotations

from cryptobio.config import settings
from cryptobio.modules.dashboard.editor import DashboardEditor
from cryptobio.modules.profiles.schemas import ProfileCreate
from tests.conftest import CREATOR_WALLET, PAYOUT_WALLET, VISITOR_WALLET


def _editor(profile_service, wallet=CREATOR_WALLET) -> DashboardEditor:
    editor = DashboardEditor(profile_service, wallet)
    editor.load()
    return editor


class TestLoad:
    def test_missing_profile_redirects_to_wizard(self, profile_service):
        editor = DashboardEditor(profile_service, VISITOR_WALLET)
        assert editor.load() is None
        assert editor.redirect_to == "/create"
        assert not editor.can_save

    def test_form_populated_from_profile(self, profile_service, creator_profile):
        editor = _editor(profile_service)
        assert editor.form.display_name == "Alex Rivera"
        assert editor.form.payout_address == PAYOUT_WALLET.lower()
        assert editor.form.tip_amounts == [5, 10, 25]

    def test_load_twice_is_identical(self, profile_service, creator_profile):
        first = _editor(profile_service).form
        second = _editor(profile_service).form
        assert first == second

    def test_empty_tip_amounts_use_defaults(self, profile_service):
        profile_service.create_profile(ProfileCreate(
            username="sam", wallet_address=VISITOR_WALLET, tip_amounts=[0],
        ))
        editor = _editor(profile_service, VISITOR_WALLET)
        assert editor.form.tip_amounts == [5, 10, 25]

    def test_share_url_and_wallet_display(self, profile_service, creator_profile):
        editor = _editor(profile_service)
        assert editor.share_url == settings.profile_url("alex")
        assert editor.wallet_display == "0xa1a1...a1a1"


class TestValidation:
    def test_invalid_payout_blocks_save(self, profile_service, creator_profile, fake_db):
        editor = _editor(profile_service)
        editor.edit(payout_address="0x1234")
        assert not editor.payout_address_valid
        assert not editor.can_save
        calls_before = len(fake_db.calls)
        assert editor.save() is None
        assert len(fake_db.calls) == calls_before

    def test_empty_payout_is_valid_and_saves_wallet(self, profile_service, creator_profile):
        editor = _editor(profile_service)
        editor.edit(payout_address="")
        assert editor.payout_address_valid
        saved = editor.save()
        assert saved.payout_address == CREATOR_WALLET.lower()

    def test_use_connected_wallet(self, profile_service, creator_profile):
        editor = _editor(profile_service)
        editor.use_connected_wallet()
        assert editor.form.payout_address == CREATOR_WALLET.lower()

    def test_no_save_while_saving(self, profile_service, creator_profile):
        editor = _editor(profile_service)
        editor.saving = True
        assert not editor.can_save


class TestPreviewAndSave:
    def test_preview_reflects_unsaved_edits(self, profile_service, creator_profile):
        editor = _editor(profile_service)
        editor.edit(display_name="Alex the Builder", bio="Now shipping")
        editor.set_tip_amount(0, "0")

        preview = editor.preview()
        assert preview.display_name == "Alex the Builder"
        assert preview.bio == "Now shipping"
        assert [o.amount for o in preview.tip_options] == [10, 25]
        assert profile_service.get_profile_by_username("alex").display_name == "Alex Rivera"

    def test_preview_initial_falls_back_to_username(self, profile_service, creator_profile):
        editor = _editor(profile_service)
        editor.edit(display_name="")
        preview = editor.preview()
        assert preview.display_name == "alex"
        assert preview.avatar_initial == "A"

    def test_save_persists_and_filters_amounts(self, profile_service, creator_profile):
        editor = _editor(profile_service)
        editor.edit(display_name="Alex R.", payout_address=VISITOR_WALLET)
        editor.set_tip_amount(1, "-5")

        saved = editor.save()

        assert saved.display_name == "Alex R."
        assert saved.tip_amounts == [5, 25]
        assert saved.payout_address == VISITOR_WALLET.lower()
        assert saved.username == "alex"
        assert editor.saved is True
        assert editor.saving is False
        assert editor.profile == saved

    def test_edit_clears_saved_flag(self, profile_service, creator_profile):
        editor = _editor(profile_service)
        editor.save()
        editor.edit(bio="changed")
        assert editor.saved is False

    def test_failed_save_keeps_form(self, profile_service, creator_profile, fake_db):
        editor = _editor(profile_service)
        editor.edit(bio="unsaved")
        fake_db.fail = True
        assert editor.save() is None
        assert editor.form.bio == "unsaved"
        assert editor.saved is False
