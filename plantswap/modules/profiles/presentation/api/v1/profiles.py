# 📄 File: plantswap/modules/profiles/presentation/api/v1/profiles.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for member profiles: see your own or someone else's profile, create yours,
# edit it and change or remove your picture.
#
# 🧪 Purpose (Technical Summary):
# FastAPI profile endpoints delegating to ProfileService; domain exceptions propagate to the
# application-level handler.
#
# 🔗 Dependencies:
# - FastAPI router, File upload
# - plantswap.modules.profiles.presentation.dependencies
# - plantswap.modules.profiles.presentation.api.schemas.profile_schemas
#
# 🔄 Connected Modules / Calls From:
# - plantswap.api.v1.router (router inclusion)

"""
Profiles API Endpoints

Endpoints:
- GET /me: Current user's profile
- POST /: Create the current user's profile
- PATCH /me: Update name, bio, location
- POST /me/avatar: Upload profile picture
- DELETE /me/avatar: Remove profile picture
- GET /{user_id}: Any user's profile
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile, status

from plantswap.modules.profiles.domain.services.profile_service import ProfileService
from plantswap.modules.profiles.presentation.api.schemas.profile_schemas import (
    ProfileCreateRequest,
    ProfileResponse,
    ProfileUpdateRequest,
)
from plantswap.modules.profiles.presentation.dependencies import get_profile_service
from plantswap.shared.core.dependencies import CurrentUser, get_current_user

logger = logging.getLogger(__name__)

profiles_router = APIRouter()


@profiles_router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get current user's profile",
    responses={
        401: {"description": "Authentication required"},
        404: {"description": "Profile not found"},
    }
)
async def get_current_user_profile(
    current_user: CurrentUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await profile_service.get_profile(current_user.user_id)
    return ProfileResponse.from_domain(profile)


@profiles_router.post(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create current user's profile",
    responses={409: {"description": "Profile exists or username taken"}},
)
async def create_profile(
    request: ProfileCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await profile_service.create_profile(
        current_user,
        username=request.username,
        name=request.name,
        bio=request.bio,
        location=request.location,
    )
    return ProfileResponse.from_domain(profile)


@profiles_router.patch(
    "/me",
    response_model=ProfileResponse,
    summary="Update current user's profile",
)
async def update_profile(
    request: ProfileUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Update name, bio or location of the caller's profile.

    Only fields present in the body are changed; sending ``null`` clears them.
    """
    profile = await profile_service.update_profile(current_user, request.changes())
    return ProfileResponse.from_domain(profile)


@profiles_router.post(
    "/me/avatar",
    response_model=ProfileResponse,
    summary="Upload profile picture",
    responses={
        413: {"description": "File too large"},
        415: {"description": "File is not a supported image"},
    }
)
async def upload_avatar(
    avatar: UploadFile = File(..., description="Profile picture"),
    current_user: CurrentUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await profile_service.upload_avatar(
        current_user, await avatar.read(), avatar.filename
    )
    return ProfileResponse.from_domain(profile)


@profiles_router.delete(
    "/me/avatar",
    response_model=ProfileResponse,
    summary="Remove profile picture",
)
async def remove_avatar(
    current_user: CurrentUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await profile_service.remove_avatar(current_user)
    return ProfileResponse.from_domain(profile)


@profiles_router.get(
    "/{user_id}",
    response_model=ProfileResponse,
    summary="Get a user's profile",
    responses={404: {"description": "Profile not found"}},
)
async def get_profile(
    user_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    profile = await profile_service.get_profile(user_id)
    return ProfileResponse.from_domain(profile)
