# 📄 File: plantswap/modules/exchanges/presentation/api/v1/exchanges.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for plant swaps: see your swaps, propose one, pick plants,
# confirm or call it off.
#
# 🧪 Purpose (Technical Summary):
# FastAPI exchange negotiation endpoints delegating to ExchangeService. Transition errors and
# authorization failures surface through the application-level PlantSwapException handler.
#
# 🔗 Dependencies:
# - FastAPI router, Query parameters
# - plantswap.modules.exchanges.presentation.dependencies
# - plantswap.modules.exchanges.presentation.api.schemas.exchange_schemas
#
# 🔄 Connected Modules / Calls From:
# - plantswap.api.v1.router (router inclusion)

"""
Exchanges API Endpoints

Endpoints:
- GET /exchanges: Caller's offers with details (status filter)
- POST /exchanges: Propose an exchange
- GET /exchanges/{offer_id}: Offer details
- POST /exchanges/{offer_id}/select: Receiver selects plants
- POST /exchanges/{offer_id}/confirm: Either party confirms
- POST /exchanges/{offer_id}/cancel: Either party cancels
- GET /plants/{plant_id}/exchange: Caller's open offer for a plant
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from plantswap.modules.exchanges.domain.services.exchange_service import ExchangeService
from plantswap.modules.exchanges.presentation.api.schemas.exchange_schemas import (
    ConfirmationResponse,
    ExchangeCreateRequest,
    ExchangeListResponse,
    ExchangeOfferDetailsResponse,
    ExchangeOfferResponse,
    ExchangeStatusFilter,
    OpenOfferResponse,
    SelectPlantsRequest,
)
from plantswap.modules.exchanges.presentation.dependencies import get_exchange_service
from plantswap.shared.core.dependencies import CurrentUser, get_current_user

logger = logging.getLogger(__name__)

exchanges_router = APIRouter()


@exchanges_router.get(
    "/exchanges",
    response_model=ExchangeListResponse,
    summary="List my exchanges",
    description="Offers where the caller is sender or receiver, newest first",
)
async def list_exchanges(
    status_filter: ExchangeStatusFilter = Query(ExchangeStatusFilter.ALL, alias="status"),
    current_user: CurrentUser = Depends(get_current_user),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeListResponse:
    details = await exchange_service.list_details_for_user(current_user, status_filter.to_status())
    return ExchangeListResponse(
        exchanges=[ExchangeOfferDetailsResponse.from_domain(d) for d in details],
        total=len(details),
    )


@exchanges_router.post(
    "/exchanges",
    response_model=ExchangeOfferResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Propose an exchange",
    responses={
        404: {"description": "Plant not found"},
        422: {"description": "Plant unavailable or no available plants to offer"},
    }
)
async def create_exchange(
    request: ExchangeCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeOfferResponse:
    """
    Propose an exchange for another user's available plant.

    Args:
        request: Target plant and optionally the plant to offer
        current_user: Injected acting user (the sender)
        exchange_service: Injected negotiation service

    Returns:
        ExchangeOfferResponse: The new pending offer
    """
    offer = await exchange_service.create_offer(
        current_user,
        receiver_plant_id=request.receiver_plant_id,
        sender_plant_id=request.sender_plant_id,
    )
    return ExchangeOfferResponse.from_domain(offer)


@exchanges_router.get(
    "/exchanges/{offer_id}",
    response_model=ExchangeOfferDetailsResponse,
    summary="Get exchange details",
    responses={
        403: {"description": "Not a party to the exchange"},
        404: {"description": "Exchange not found"},
    }
)
async def get_exchange(
    offer_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeOfferDetailsResponse:
    details = await exchange_service.get_details(current_user, offer_id)
    return ExchangeOfferDetailsResponse.from_domain(details)


@exchanges_router.post(
    "/exchanges/{offer_id}/select",
    response_model=ExchangeOfferResponse,
    summary="Select plants (receiver)",
    responses={
        403: {"description": "Only the receiver can select"},
        422: {"description": "Empty or invalid selection, or offer not pending"},
    }
)
async def select_plants(
    offer_id: str,
    request: SelectPlantsRequest,
    current_user: CurrentUser = Depends(get_current_user),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeOfferResponse:
    offer = await exchange_service.select_plants(current_user, offer_id, request.plant_ids)
    return ExchangeOfferResponse.from_domain(offer)


@exchanges_router.post(
    "/exchanges/{offer_id}/confirm",
    response_model=ConfirmationResponse,
    summary="Confirm an exchange",
    responses={
        403: {"description": "Not a party to the exchange"},
        422: {"description": "Offer is not awaiting confirmation"},
    }
)
async def confirm_exchange(
    offer_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> ConfirmationResponse:
    result = await exchange_service.confirm(current_user, offer_id)
    return ConfirmationResponse.from_domain(result)


@exchanges_router.post(
    "/exchanges/{offer_id}/cancel",
    response_model=ExchangeOfferResponse,
    summary="Cancel an exchange",
    responses={
        403: {"description": "Not a party to the exchange"},
        422: {"description": "Offer already completed or cancelled"},
    }
)
async def cancel_exchange(
    offer_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeOfferResponse:
    offer = await exchange_service.cancel(current_user, offer_id)
    return ExchangeOfferResponse.from_domain(offer)


@exchanges_router.get(
    "/plants/{plant_id}/exchange",
    response_model=OpenOfferResponse,
    summary="My open exchange for a plant",
)
async def get_open_exchange_for_plant(
    plant_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> OpenOfferResponse:
    offer = await exchange_service.find_open_offer_for_plant(current_user, plant_id)
    return OpenOfferResponse(offer=ExchangeOfferResponse.from_domain(offer) if offer else None)
