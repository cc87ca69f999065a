"""
Core utilities package for the PlantSwap API.
Provides the exception hierarchy; FastAPI dependencies live in ``dependencies``.
"""

from .exceptions import (
    PlantSwapException,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
    NotFoundError,
    DuplicateResourceError,
    BusinessRuleViolationError,
    InvalidTransitionError,
    NoAvailablePlantsError,
    RepositoryError,
    StorageError,
    FileTooLargeError,
    InvalidFileTypeError,
)

__all__ = [
    "PlantSwapException",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "DuplicateResourceError",
    "BusinessRuleViolationError",
    "InvalidTransitionError",
    "NoAvailablePlantsError",
    "RepositoryError",
    "StorageError",
    "FileTooLargeError",
    "InvalidFileTypeError",
]
