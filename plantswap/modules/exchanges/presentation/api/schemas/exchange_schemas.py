# 📄 File: plantswap/modules/exchanges/presentation/api/schemas/exchange_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines what exchange requests and answers look like: proposing a swap, picking plants,
# and the full picture of a swap with both people and their plants.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for exchange endpoints, including the status filter,
# confirmation result and hydrated offer details.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - plant and profile response schemas
#
# 🔄 Connected Modules / Calls From:
# - plantswap.modules.exchanges.presentation.api.v1.exchanges

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from plantswap.modules.exchanges.domain.models.exchange import (
    ConfirmationResult,
    ExchangeOffer,
    ExchangeOfferDetails,
    ExchangeStatus,
)
from plantswap.modules.listings.presentation.api.schemas.plant_schemas import PlantResponse
from plantswap.modules.profiles.presentation.api.schemas.profile_schemas import ProfileResponse


class ExchangeStatusFilter(str, Enum):
    """Status filter for the exchanges list."""
    ALL = "all"
    PENDING = "pending"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def to_status(self) -> Optional[ExchangeStatus]:
        return None if self is ExchangeStatusFilter.ALL else ExchangeStatus(self.value)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class ExchangeCreateRequest(BaseModel):
    """Propose an exchange for another user's plant."""

    receiver_plant_id: str = Field(..., min_length=1, description="The plant you want")
    sender_plant_id: Optional[str] = Field(
        None,
        description="Which of your available plants to offer; defaults to your newest"
    )


class SelectPlantsRequest(BaseModel):
    """Receiver's choice among the sender's available plants."""

    plant_ids: List[str] = Field(..., description="Ids of the sender's plants to take")


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ExchangeOfferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    sender_id: str
    receiver_id: str
    sender_plant_id: str
    receiver_plant_id: str
    selected_plant_ids: List[str]
    status: ExchangeStatus
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, offer: ExchangeOffer) -> "ExchangeOfferResponse":
        return cls.model_validate(offer)


class ExchangeOfferDetailsResponse(BaseModel):
    """Offer plus both parties and the plants involved."""

    offer: ExchangeOfferResponse
    sender: Optional[ProfileResponse] = None
    receiver: Optional[ProfileResponse] = None
    sender_plant: Optional[PlantResponse] = None
    receiver_plant: Optional[PlantResponse] = None
    selected_plants: List[PlantResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, details: ExchangeOfferDetails) -> "ExchangeOfferDetailsResponse":
        return cls(
            offer=ExchangeOfferResponse.from_domain(details.offer),
            sender=ProfileResponse.from_domain(details.sender) if details.sender else None,
            receiver=ProfileResponse.from_domain(details.receiver) if details.receiver else None,
            sender_plant=PlantResponse.from_domain(details.sender_plant) if details.sender_plant else None,
            receiver_plant=PlantResponse.from_domain(details.receiver_plant) if details.receiver_plant else None,
            selected_plants=[PlantResponse.from_domain(p) for p in details.selected_plants],
        )


class ExchangeListResponse(BaseModel):
    exchanges: List[ExchangeOfferDetailsResponse]
    total: int


class ConfirmationResponse(BaseModel):
    """
    Confirmation outcome; ``failed_plant_ids`` lists plants whose status could
    not be set to exchanged.
    """

    offer: ExchangeOfferResponse
    exchanged_plant_ids: List[str]
    failed_plant_ids: List[str]

    @classmethod
    def from_domain(cls, result: ConfirmationResult) -> "ConfirmationResponse":
        return cls(
            offer=ExchangeOfferResponse.from_domain(result.offer),
            exchanged_plant_ids=result.exchanged_plant_ids,
            failed_plant_ids=result.failed_plant_ids,
        )


class OpenOfferResponse(BaseModel):
    """The caller's open offer for a plant, if there is one."""

    offer: Optional[ExchangeOfferResponse] = None
