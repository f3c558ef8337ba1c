from fastapi import APIRouter, Depends

from ..application.services.profile_service import ProfileService
from ..schemas.profiles.profile import UserProfileCreate, UserProfileResponse
from .dependencies import get_profile_service

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("", response_model=UserProfileResponse)
def create_profile(
    body: UserProfileCreate,
    service: ProfileService = Depends(get_profile_service),
):
    return service.ensure_profile(body.uid, body.username).to_dict()


@router.get("/{uid}", response_model=UserProfileResponse)
def get_profile(
    uid: str,
    service: ProfileService = Depends(get_profile_service),
):
    return service.get_profile(uid).to_dict()
