from fastapi import APIRouter, Depends, HTTPException, Request, status
from supabase import Client

from cryptobio.core.dependencies import get_connected_wallet
from cryptobio.core.rate_limit import limiter, USERNAME_CHECK_LIMIT
from cryptobio.core.validators import USERNAME_MIN_LENGTH, sanitize_username
from cryptobio.database.supabase_client import get_supabase
from cryptobio.modules.create.wizard import DASHBOARD_PATH, build_new_profile
from cryptobio.modules.profiles.schemas import ProfileCreateRequest, ProfileResponse, UsernameAvailability
from cryptobio.modules.profiles.service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/check-username/{username}", response_model=UsernameAvailability)
@limiter.limit(USERNAME_CHECK_LIMIT)
async def check_username(
    request: Request,
    username: str,
    service: ProfileService = Depends(get_profile_service)
):
    """Availability of a username after charset filtering"""
    cleaned = sanitize_username(username)
    if len(cleaned) < USERNAME_MIN_LENGTH:
        return UsernameAvailability(username=cleaned, available=False)
    return UsernameAvailability(username=cleaned, available=service.check_username_available(cleaned))


@router.post("", response_model=ProfileResponse, status_code=201)
async def create_profile(
    profile_data: ProfileCreateRequest,
    wallet: str = Depends(get_connected_wallet),
    service: ProfileService = Depends(get_profile_service)
):
    """Create the connected wallet's profile (wizard submission)"""
    if service.get_profile_by_wallet(wallet):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This wallet already has a profile",
            headers={"Location": DASHBOARD_PATH},
        )
    profile, error = service.create_profile(build_new_profile(profile_data, wallet))
    if profile is None:
        error = error or "Failed to create profile. Please try again."
        if "duplicate" in error.lower() or "already exists" in error.lower():
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username is already taken")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)
    return profile
