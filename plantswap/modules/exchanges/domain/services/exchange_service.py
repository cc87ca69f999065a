# 📄 File: plantswap/modules/exchanges/domain/services/exchange_service.py
# 🧭 Purpose (Layman Explanation):
# Runs the plant swap negotiation: someone proposes a swap, the other person picks which of the proposer's
# plants they want, either of them confirms, and the traded plants are marked as exchanged. Either side
# can call it off before it is done.
# 🧪 Purpose (Technical Summary):
# Domain service implementing the exchange state machine (create / select / confirm / cancel) against
# the explicit transition table, party authorization, best-effort plant status side effects on
# confirmation, offer listing with status filter and hydrated offer details. Every persisted status
# change publishes ExchangeStatusChanged.
# 🔗 Dependencies:
# Exchange, Plant and Profile repositories, EventPublisher, shared exceptions
# 🔄 Connected Modules / Calls From:
# exchanges API endpoints, exchanges presentation dependencies

import logging
from typing import Dict, Iterable, List, Optional

import httpx

from plantswap.modules.listings.domain.models.plant import Plant, PlantStatus
from plantswap.modules.listings.domain.repositories.plant_repository import PlantRepository
from plantswap.modules.profiles.domain.repositories.profile_repository import ProfileRepository
from plantswap.shared.core.dependencies import CurrentUser
from plantswap.shared.core.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    ExchangeNotFoundError,
    InvalidTransitionError,
    NoAvailablePlantsError,
    PlantNotFoundError,
    PlantSwapException,
    ValidationError,
)
from plantswap.shared.events.publisher import EventPublisher

from ..events.exchange_events import ExchangeStatusChanged
from ..models.exchange import (
    ConfirmationResult,
    ExchangeOffer,
    ExchangeOfferDetails,
    ExchangeStatus,
    can_transition,
)
from ..repositories.exchange_repository import ExchangeRepository

logger = logging.getLogger(__name__)


class ExchangeService:
    """
    Domain service for exchange negotiation.

    States: pending -> awaiting_confirmation -> completed, with cancelled
    reachable from both open states. Only the two parties of an offer may act
    on it; selecting is reserved to the receiver.
    """

    def __init__(
        self,
        exchange_repository: ExchangeRepository,
        plant_repository: PlantRepository,
        profile_repository: ProfileRepository,
        event_publisher: EventPublisher,
    ):
        self.exchange_repository = exchange_repository
        self.plant_repository = plant_repository
        self.profile_repository = profile_repository
        self.event_publisher = event_publisher

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    async def create_offer(
        self,
        actor: CurrentUser,
        receiver_plant_id: str,
        sender_plant_id: Optional[str] = None
    ) -> ExchangeOffer:
        """
        Propose an exchange for another user's available plant.

        Args:
            actor: The sender
            receiver_plant_id: The plant the sender wants
            sender_plant_id: Which of the sender's available plants to offer;
                defaults to the most recently listed one

        Returns:
            The new offer in status pending

        Raises:
            PlantNotFoundError: Target plant does not exist
            BusinessRuleViolationError: Target is the sender's own or not available,
                or the named sender plant is not one of their available plants
            NoAvailablePlantsError: Sender has no available plants
        """
        target = await self.plant_repository.get_by_id(receiver_plant_id)
        if not target:
            raise PlantNotFoundError(receiver_plant_id)

        if target.is_owned_by(actor.user_id):
            raise BusinessRuleViolationError(
                "You cannot propose an exchange for your own plant",
                rule="target_plant_not_own",
                context={"plant_id": receiver_plant_id},
            )
        if not target.is_available:
            raise BusinessRuleViolationError(
                "This plant is no longer available for exchange",
                rule="target_plant_available",
                context={"plant_id": receiver_plant_id, "status": target.status.value},
            )

        available = await self.plant_repository.list_by_owner(actor.user_id, PlantStatus.AVAILABLE)
        if not available:
            raise NoAvailablePlantsError(actor.user_id)

        if sender_plant_id:
            if sender_plant_id not in {plant.id for plant in available}:
                raise BusinessRuleViolationError(
                    "The offered plant must be one of your available plants",
                    rule="sender_plant_available",
                    context={"plant_id": sender_plant_id},
                )
            offered_plant_id = sender_plant_id
        else:
            offered_plant_id = available[0].id

        offer = ExchangeOffer(
            sender_id=actor.user_id,
            receiver_id=target.owner_id,
            sender_plant_id=offered_plant_id,
            receiver_plant_id=target.id,
            selected_plant_ids=[],
            status=ExchangeStatus.PENDING,
        )
        created = await self.exchange_repository.create(offer)

        logger.info(
            f"Exchange {created.id} proposed by {actor.user_id} "
            f"for plant {target.id} of {target.owner_id}"
        )
        await self._publish(created, None, actor)
        return created

    async def select_plants(
        self,
        actor: CurrentUser,
        offer_id: str,
        plant_ids: Iterable[str]
    ) -> ExchangeOffer:
        """
        Receiver picks which of the sender's available plants to take.

        Duplicate ids are collapsed, keeping first-seen order.

        Raises:
            AuthorizationError: Actor is not the receiver
            InvalidTransitionError: Offer is not pending
            ValidationError: Empty selection
            BusinessRuleViolationError: Selection contains plants that are not
                available plants of the sender
        """
        offer = await self._get_offer_for_party(actor, offer_id, "select")
        if actor.user_id != offer.receiver_id:
            raise AuthorizationError(
                "Only the receiver can select plants",
                resource_type="exchange_offer",
                resource_id=offer_id,
                required_action="select",
                user_id=actor.user_id,
            )
        self._check_transition(offer, ExchangeStatus.AWAITING_CONFIRMATION)

        selection = list(dict.fromkeys(plant_ids))
        if not selection:
            raise ValidationError(
                "Select at least one plant",
                field="plant_ids",
                constraint="non_empty",
            )

        available = await self.plant_repository.list_by_owner(offer.sender_id, PlantStatus.AVAILABLE)
        available_ids = {plant.id for plant in available}
        invalid = [plant_id for plant_id in selection if plant_id not in available_ids]
        if invalid:
            raise BusinessRuleViolationError(
                "Selected plants must be available plants of the sender",
                rule="selection_from_sender_inventory",
                context={"invalid_plant_ids": invalid},
            )

        updated = offer.model_copy(update={
            "selected_plant_ids": selection,
            "status": ExchangeStatus.AWAITING_CONFIRMATION,
        })
        saved = await self.exchange_repository.save(updated)

        logger.info(f"Exchange {offer_id}: receiver selected {len(selection)} plant(s)")
        await self._publish(saved, offer.status, actor)
        return saved

    async def confirm(self, actor: CurrentUser, offer_id: str) -> ConfirmationResult:
        """
        Complete an exchange and mark every referenced plant as exchanged.

        The offer is completed first; plant updates follow one at a time. A plant
        that cannot be updated is logged and reported in ``failed_plant_ids``
        without undoing the completion or the other updates.

        Raises:
            AuthorizationError: Actor is not a party
            InvalidTransitionError: Offer is not awaiting confirmation
        """
        offer = await self._get_offer_for_party(actor, offer_id, "confirm")
        self._check_transition(offer, ExchangeStatus.COMPLETED)

        saved = await self.exchange_repository.save(
            offer.model_copy(update={"status": ExchangeStatus.COMPLETED})
        )

        exchanged: List[str] = []
        failed: List[str] = []
        for plant_id in saved.referenced_plant_ids():
            try:
                plant = await self.plant_repository.set_status(plant_id, PlantStatus.EXCHANGED)
            except (PlantSwapException, httpx.HTTPError) as e:
                logger.error(f"Exchange {offer_id}: failed to mark plant {plant_id} exchanged: {e}")
                failed.append(plant_id)
                continue

            if plant is None:
                logger.error(f"Exchange {offer_id}: plant {plant_id} not found while completing")
                failed.append(plant_id)
            else:
                exchanged.append(plant_id)

        if failed:
            logger.warning(
                f"Exchange {offer_id} completed with {len(failed)} plant update failure(s)",
                extra={"offer_id": offer_id, "failed_plant_ids": failed},
            )
        else:
            logger.info(f"Exchange {offer_id} completed by {actor.user_id}")

        await self._publish(saved, offer.status, actor)
        return ConfirmationResult(offer=saved, exchanged_plant_ids=exchanged, failed_plant_ids=failed)

    async def cancel(self, actor: CurrentUser, offer_id: str) -> ExchangeOffer:
        """
        Call off an open exchange. Plants are left untouched.

        Raises:
            AuthorizationError: Actor is not a party
            InvalidTransitionError: Offer is already completed or cancelled
        """
        offer = await self._get_offer_for_party(actor, offer_id, "cancel")
        self._check_transition(offer, ExchangeStatus.CANCELLED)

        saved = await self.exchange_repository.save(
            offer.model_copy(update={"status": ExchangeStatus.CANCELLED})
        )

        logger.info(f"Exchange {offer_id} cancelled by {actor.user_id}")
        await self._publish(saved, offer.status, actor)
        return saved

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_offer(self, actor: CurrentUser, offer_id: str) -> ExchangeOffer:
        return await self._get_offer_for_party(actor, offer_id, "view")

    async def list_for_user(
        self,
        actor: CurrentUser,
        status: Optional[ExchangeStatus] = None
    ) -> List[ExchangeOffer]:
        """
        Offers where the actor is sender or receiver, newest first.

        Args:
            actor: Acting user
            status: Only offers in this state; None for all
        """
        offers = await self.exchange_repository.list_for_user(actor.user_id)
        if status is None:
            return offers
        return [offer for offer in offers if offer.status == status]

    async def get_details(self, actor: CurrentUser, offer_id: str) -> ExchangeOfferDetails:
        offer = await self._get_offer_for_party(actor, offer_id, "view")
        details = await self.hydrate([offer])
        return details[0]

    async def list_details_for_user(
        self,
        actor: CurrentUser,
        status: Optional[ExchangeStatus] = None
    ) -> List[ExchangeOfferDetails]:
        offers = await self.list_for_user(actor, status)
        return await self.hydrate(offers)

    async def find_open_offer_for_plant(self, actor: CurrentUser, plant_id: str) -> Optional[ExchangeOffer]:
        """The actor's newest pending or awaiting offer that references the plant, if any."""
        offers = await self.exchange_repository.list_for_user(actor.user_id)
        for offer in offers:
            if offer.is_open and offer.references_plant(plant_id):
                return offer
        return None

    async def hydrate(self, offers: List[ExchangeOffer]) -> List[ExchangeOfferDetails]:
        """
        Resolve profiles and plants for a batch of offers with one lookup each.
        """
        if not offers:
            return []

        user_ids = {uid for offer in offers for uid in (offer.sender_id, offer.receiver_id)}
        plant_ids = {pid for offer in offers for pid in offer.referenced_plant_ids()}

        profiles = {p.id: p for p in await self.profile_repository.get_many(user_ids)}
        plants: Dict[str, Plant] = {p.id: p for p in await self.plant_repository.get_many(plant_ids)}

        return [
            ExchangeOfferDetails(
                offer=offer,
                sender=profiles.get(offer.sender_id),
                receiver=profiles.get(offer.receiver_id),
                sender_plant=plants.get(offer.sender_plant_id),
                receiver_plant=plants.get(offer.receiver_plant_id),
                selected_plants=[plants[pid] for pid in offer.selected_plant_ids if pid in plants],
            )
            for offer in offers
        ]

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _get_offer_for_party(self, actor: CurrentUser, offer_id: str, action: str) -> ExchangeOffer:
        offer = await self.exchange_repository.get_by_id(offer_id)
        if not offer:
            raise ExchangeNotFoundError(offer_id)

        if not offer.is_party(actor.user_id):
            logger.warning(f"User {actor.user_id} tried to {action} exchange {offer_id} without being a party")
            raise AuthorizationError(
                "You are not a party to this exchange",
                resource_type="exchange_offer",
                resource_id=offer_id,
                required_action=action,
                user_id=actor.user_id,
            )
        return offer

    def _check_transition(self, offer: ExchangeOffer, target: ExchangeStatus) -> None:
        if not can_transition(offer.status, target):
            raise InvalidTransitionError(
                offer_id=offer.id,
                current_status=offer.status.value,
                target_status=target.value,
            )

    async def _publish(
        self,
        offer: ExchangeOffer,
        old_status: Optional[ExchangeStatus],
        actor: CurrentUser
    ) -> None:
        await self.event_publisher.publish(ExchangeStatusChanged(offer, old_status, actor.user_id))
