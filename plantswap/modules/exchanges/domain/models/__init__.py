from .exchange import (
    ConfirmationResult,
    ExchangeOffer,
    ExchangeOfferDetails,
    ExchangeStatus,
    TRANSITIONS,
    can_transition,
)

__all__ = [
    "ConfirmationResult",
    "ExchangeOffer",
    "ExchangeOfferDetails",
    "ExchangeStatus",
    "TRANSITIONS",
    "can_transition",
]
