"""
Domain events shared across modules.
"""

from .base import DomainEvent, EventHandler, EventMetadata
from .publisher import EventPublisher

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventMetadata",
    "EventPublisher",
]
