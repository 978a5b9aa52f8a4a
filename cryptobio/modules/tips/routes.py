from fastapi import APIRouter, Depends, HTTPException, Query, status
from supabase import Client

from cryptobio.database.supabase_client import get_supabase
from cryptobio.modules.profiles.service import ProfileService
from cryptobio.modules.tips.schemas import TipPageResponse, TipTransfer
from cryptobio.modules.tips.service import TipService
from cryptobio.modules.wallet.token import parse_amount

router = APIRouter(tags=["tips"])


def get_tip_service(supabase: Client = Depends(get_supabase)) -> TipService:
    return TipService(ProfileService(supabase))


@router.get("/profiles/{username}", response_model=TipPageResponse)
async def get_tip_page(
    username: str,
    service: TipService = Depends(get_tip_service)
):
    """Public tipping page for a creator"""
    page = service.get_tip_page(username)
    if page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return page


@router.get("/tips/{username}/transfer", response_model=TipTransfer)
async def prepare_transfer(
    username: str,
    amount: str = Query(..., description="Tip amount in USD"),
    service: TipService = Depends(get_tip_service)
):
    """Build the USDC transfer call for the visitor's wallet to sign"""
    parsed = parse_amount(amount)
    if parsed is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Amount must be a positive number"
        )
    try:
        transfer = service.prepare_transfer(username, parsed)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    if transfer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return transfer
