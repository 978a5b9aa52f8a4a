from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from cryptobio.core.dependencies import get_connected_wallet
from cryptobio.database.supabase_client import get_supabase
from cryptobio.modules.dashboard.editor import DashboardEditor
from cryptobio.modules.dashboard.schemas import DashboardResponse
from cryptobio.modules.profiles.schemas import ProfileUpdate
from cryptobio.modules.profiles.service import ProfileService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_editor(
    wallet: str = Depends(get_connected_wallet),
    supabase: Client = Depends(get_supabase)
) -> DashboardEditor:
    editor = DashboardEditor(ProfileService(supabase), wallet)
    if editor.load() is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
            headers={"Location": editor.redirect_to},
        )
    return editor


def render(editor: DashboardEditor) -> DashboardResponse:
    return DashboardResponse(
        profile=editor.profile,
        form=editor.form,
        preview=editor.preview(),
        share_url=editor.share_url,
        wallet_display=editor.wallet_display,
        payout_address_valid=editor.payout_address_valid,
    )


@router.get("", response_model=DashboardResponse)
async def get_dashboard(editor: DashboardEditor = Depends(get_editor)):
    """Load the connected wallet's profile into the editor"""
    return render(editor)


@router.put("", response_model=DashboardResponse)
async def save_dashboard(
    updates: ProfileUpdate,
    editor: DashboardEditor = Depends(get_editor)
):
    """Persist editor fields for the connected wallet's own profile"""
    fields = updates.model_dump(exclude_unset=True)
    # A cleared payout address validates to None; the editor treats "" as "use the wallet"
    if "payout_address" in fields and fields["payout_address"] is None:
        fields["payout_address"] = ""
    editor.edit(**{key: value for key, value in fields.items() if value is not None})
    if editor.save() is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save profile")
    return render(editor)
