from fastapi import APIRouter, Depends
from supabase import Client

from cryptobio.core.dependencies import get_connected_wallet
from cryptobio.database.supabase_client import get_supabase
from cryptobio.modules.create.wizard import DASHBOARD_PATH
from cryptobio.modules.dashboard.editor import CREATE_PATH
from cryptobio.modules.profiles.service import ProfileService

router = APIRouter(prefix="/landing", tags=["landing"])


def resolve_landing(service: ProfileService, wallet_address: str) -> str:
    """Where a freshly connected wallet goes: its dashboard, or the wizard"""
    if service.get_profile_by_wallet(wallet_address):
        return DASHBOARD_PATH
    return CREATE_PATH


@router.get("")
async def landing(
    wallet: str = Depends(get_connected_wallet),
    supabase: Client = Depends(get_supabase)
):
    return {"redirect": resolve_landing(ProfileService(supabase), wallet)}
