# 📄 File: plantswap/modules/listings/presentation/api/v1/plants.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for plant listings: browse and search plants, add your own, edit or delete them,
# and attach or remove a photo.
#
# 🧪 Purpose (Technical Summary):
# FastAPI plant listing endpoints delegating to PlantService. Domain exceptions propagate to
# the application-level PlantSwapException handler.
#
# 🔗 Dependencies:
# - FastAPI router, Query parameters, File upload
# - plantswap.modules.listings.presentation.dependencies (service provider)
# - plantswap.modules.listings.presentation.api.schemas.plant_schemas
#
# 🔄 Connected Modules / Calls From:
# - plantswap.api.v1.router (router inclusion)

"""
Plant Listing API Endpoints

Endpoints:
- GET /plants: Browse available plants (search, location filters)
- POST /plants: List a new plant (multipart, optional photo)
- GET /plants/{plant_id}: Plant details
- PATCH /plants/{plant_id}: Edit an owned plant
- DELETE /plants/{plant_id}: Delete an owned plant
- POST /plants/{plant_id}/image: Replace the photo of an owned plant
- DELETE /plants/{plant_id}/image: Remove the photo of an owned plant
- GET /users/{user_id}/plants: Plants of one user
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status

from plantswap.modules.listings.domain.models.plant import PlantStatus
from plantswap.modules.listings.domain.services.plant_service import PlantService
from plantswap.modules.listings.presentation.api.schemas.plant_schemas import (
    PlantCreateRequest,
    PlantListResponse,
    PlantResponse,
    PlantUpdateRequest,
)
from plantswap.modules.listings.presentation.dependencies import get_plant_service
from plantswap.shared.core.dependencies import CurrentUser, get_current_user

logger = logging.getLogger(__name__)

plants_router = APIRouter()


@plants_router.get(
    "/plants",
    response_model=PlantListResponse,
    summary="Browse available plants",
    description="Available plants, newest first, filtered by free-text search and location",
)
async def browse_plants(
    search: Optional[str] = Query(None, max_length=100, description="Matches name, species or description"),
    location: Optional[str] = Query(None, max_length=100, description="Matches plant location"),
    current_user: CurrentUser = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantListResponse:
    plants = await plant_service.browse(search, location)
    return PlantListResponse.from_domain(plants)


@plants_router.post(
    "/plants",
    response_model=PlantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="List a new plant",
    responses={
        201: {"description": "Plant listed"},
        413: {"description": "Photo too large"},
        415: {"description": "Photo is not a supported image"},
    }
)
async def create_plant(
    request: PlantCreateRequest = Depends(PlantCreateRequest.as_form),
    image: Optional[UploadFile] = File(None, description="Optional plant photo"),
    current_user: CurrentUser = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantResponse:
    """
    Create a plant owned by the caller, optionally with a photo.

    Args:
        request: Listing fields from the multipart form
        image: Optional photo file
        current_user: Injected acting user
        plant_service: Injected listing service

    Returns:
        PlantResponse: The stored listing with status available
    """
    image_bytes = await image.read() if image else None
    plant = await plant_service.create_plant(
        current_user,
        name=request.name,
        species=request.species,
        location=request.location,
        subspecies=request.subspecies,
        description=request.description,
        plant_type=request.plant_type,
        image=image_bytes or None,
        image_filename=image.filename if image else None,
    )
    return PlantResponse.from_domain(plant)


@plants_router.get(
    "/plants/{plant_id}",
    response_model=PlantResponse,
    summary="Get plant details",
    responses={404: {"description": "Plant not found"}},
)
async def get_plant(
    plant_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantResponse:
    plant = await plant_service.get_plant(plant_id)
    return PlantResponse.from_domain(plant)


@plants_router.patch(
    "/plants/{plant_id}",
    response_model=PlantResponse,
    summary="Edit an owned plant",
    responses={
        403: {"description": "Not the owner"},
        404: {"description": "Plant not found"},
    }
)
async def update_plant(
    plant_id: str,
    request: PlantUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantResponse:
    plant = await plant_service.update_plant(current_user, plant_id, request.changes())
    return PlantResponse.from_domain(plant)


@plants_router.delete(
    "/plants/{plant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an owned plant",
    responses={
        403: {"description": "Not the owner"},
        404: {"description": "Plant not found"},
    }
)
async def delete_plant(
    plant_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> Response:
    await plant_service.delete_plant(current_user, plant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@plants_router.post(
    "/plants/{plant_id}/image",
    response_model=PlantResponse,
    summary="Upload plant photo",
    responses={
        403: {"description": "Not the owner"},
        413: {"description": "Photo too large"},
        415: {"description": "Photo is not a supported image"},
    }
)
async def upload_plant_image(
    plant_id: str,
    image: UploadFile = File(..., description="Plant photo"),
    current_user: CurrentUser = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantResponse:
    plant = await plant_service.set_image(
        current_user, plant_id, await image.read(), image.filename
    )
    return PlantResponse.from_domain(plant)


@plants_router.delete(
    "/plants/{plant_id}/image",
    response_model=PlantResponse,
    summary="Remove plant photo",
    responses={403: {"description": "Not the owner"}},
)
async def remove_plant_image(
    plant_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantResponse:
    plant = await plant_service.remove_image(current_user, plant_id)
    return PlantResponse.from_domain(plant)


@plants_router.get(
    "/users/{user_id}/plants",
    response_model=PlantListResponse,
    summary="List a user's plants",
)
async def list_user_plants(
    user_id: str,
    plant_status: Optional[PlantStatus] = Query(None, alias="status"),
    current_user: CurrentUser = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantListResponse:
    plants = await plant_service.list_user_plants(user_id, plant_status)
    return PlantListResponse.from_domain(plants)
