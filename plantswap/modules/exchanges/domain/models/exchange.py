# 📄 File: plantswap/modules/exchanges/domain/models/exchange.py
# 🧭 Purpose (Layman Explanation):
# Describes a proposed plant swap between two people and the steps it goes through: proposed,
# waiting for confirmation, done or called off.
# 🧪 Purpose (Technical Summary):
# ExchangeOffer entity with its status enum and explicit transition table, plus the
# ConfirmationResult and ExchangeOfferDetails value objects. Row mapping reads the
# `selected_plants_ids` column and treats null as an empty selection.
# 🔗 Dependencies:
# pydantic, datetime, typing, enum, Plant and Profile domain models
# 🔄 Connected Modules / Calls From:
# exchange_service.py, exchange_repository_impl.py, notification rules, exchange schemas

from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from plantswap.modules.listings.domain.models.plant import Plant
from plantswap.modules.profiles.domain.models.profile import Profile


class ExchangeStatus(str, Enum):
    """Negotiation state of an exchange offer"""
    PENDING = "pending"                                # Sender proposed, receiver to select
    AWAITING_CONFIRMATION = "awaiting_confirmation"    # Receiver selected, either party confirms
    COMPLETED = "completed"                            # Terminal
    CANCELLED = "cancelled"                            # Terminal


# Allowed moves; anything not listed is rejected
TRANSITIONS: Dict[ExchangeStatus, FrozenSet[ExchangeStatus]] = {
    ExchangeStatus.PENDING: frozenset({
        ExchangeStatus.AWAITING_CONFIRMATION,
        ExchangeStatus.CANCELLED,
    }),
    ExchangeStatus.AWAITING_CONFIRMATION: frozenset({
        ExchangeStatus.COMPLETED,
        ExchangeStatus.CANCELLED,
    }),
    ExchangeStatus.COMPLETED: frozenset(),
    ExchangeStatus.CANCELLED: frozenset(),
}

OPEN_STATUSES = frozenset({ExchangeStatus.PENDING, ExchangeStatus.AWAITING_CONFIRMATION})


def can_transition(current: ExchangeStatus, target: ExchangeStatus) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


class ExchangeOffer(BaseModel):
    """
    Proposed trade between a sender and a receiver.

    References plants by id only; the plant rows are owned by their users.
    ``selected_plant_ids`` stays empty until the receiver selects.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: Optional[str] = None
    sender_id: str
    receiver_id: str
    sender_plant_id: str
    receiver_plant_id: str
    selected_plant_ids: List[str] = Field(default_factory=list)
    status: ExchangeStatus = ExchangeStatus.PENDING
    created_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_STATUSES

    def is_party(self, user_id: str) -> bool:
        return user_id in (self.sender_id, self.receiver_id)

    def referenced_plant_ids(self) -> List[str]:
        """Sender plant, receiver plant and the selection, without duplicates."""
        ids = [self.sender_plant_id, self.receiver_plant_id, *self.selected_plant_ids]
        return list(dict.fromkeys(ids))

    def references_plant(self, plant_id: str) -> bool:
        return plant_id in self.referenced_plant_ids()

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ExchangeOffer":
        return cls(
            id=str(row["id"]),
            sender_id=str(row["sender_id"]),
            receiver_id=str(row["receiver_id"]),
            sender_plant_id=str(row["sender_plant_id"]),
            receiver_plant_id=str(row["receiver_plant_id"]),
            selected_plant_ids=[str(pid) for pid in (row.get("selected_plants_ids") or [])],
            status=row.get("status") or ExchangeStatus.PENDING,
            created_at=row.get("created_at"),
        )

    def to_row(self) -> Dict[str, Any]:
        row = {
            "sender_id": self.sender_id,
            "receiver_id": self.receiver_id,
            "sender_plant_id": self.sender_plant_id,
            "receiver_plant_id": self.receiver_plant_id,
            "selected_plants_ids": list(self.selected_plant_ids),
            "status": self.status.value,
        }
        if self.id:
            row["id"] = self.id
        return row


class ConfirmationResult(BaseModel):
    """Outcome of confirming an exchange."""

    offer: ExchangeOffer
    exchanged_plant_ids: List[str] = Field(default_factory=list)
    failed_plant_ids: List[str] = Field(default_factory=list)

    @property
    def fully_applied(self) -> bool:
        return not self.failed_plant_ids


class ExchangeOfferDetails(BaseModel):
    """An offer with the profiles and plants it refers to, for display."""

    offer: ExchangeOffer
    sender: Optional[Profile] = None
    receiver: Optional[Profile] = None
    sender_plant: Optional[Plant] = None
    receiver_plant: Optional[Plant] = None
    selected_plants: List[Plant] = Field(default_factory=list)
