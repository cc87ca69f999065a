# 📄 File: plantswap/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# Every way a plant exchange request can go wrong, each with the HTTP answer the client gets:
# missing login, somebody else's plant, an offer that already finished, a photo that is too big.
# 🧪 Purpose (Technical Summary):
# PlantSwapException carries status_code, a stable error_code and a details dict. The
# handlers in plantswap.main render them into the {"error": {...}} envelope.
# 🔗 Dependencies:
# FastAPI status codes
# 🔄 Connected Modules / Calls From:
# Domain services, Supabase repositories, storage client, auth dependencies, plantswap.main

from typing import Any, Dict, List, Optional
from fastapi import status


def _with_details(details: Optional[Dict[str, Any]], **fields: Any) -> Dict[str, Any]:
    """Copy of ``details`` plus every field that has a value."""
    merged = dict(details or {})
    merged.update({key: value for key, value in fields.items() if value not in (None, "", [], {})})
    return merged


class PlantSwapException(Exception):
    """
    Root of the application's error hierarchy.

    ``error_code`` defaults to the upper-cased class name; subclasses pass a
    fixed one so clients can branch on it.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Body of the error envelope, without the per-request fields."""
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


# =============================================================================
# WHO IS ASKING
# =============================================================================

class AuthenticationError(PlantSwapException):
    """Missing, malformed or expired access token."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class AuthorizationError(PlantSwapException):
    """The caller neither owns nor takes part in the resource."""

    def __init__(
        self,
        message: str = "Access denied",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        required_action: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=_with_details(
                details,
                resource_type=resource_type,
                resource_id=resource_id,
                required_action=required_action,
                user_id=user_id,
            ),
            error_code="AUTHORIZATION_ERROR"
        )


# =============================================================================
# INPUT AND LOOKUPS
# =============================================================================

class ValidationError(PlantSwapException):
    """Input that parsed fine but breaks a domain constraint (length, emptiness)."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=_with_details(
                details,
                field=field,
                value=None if value is None else str(value),
                constraint=constraint,
            ),
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(PlantSwapException):

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=_with_details(details, resource_type=resource_type, resource_id=resource_id),
            error_code="NOT_FOUND"
        )


class DuplicateResourceError(PlantSwapException):
    """A unique value (profile per user, username) is already taken."""

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=_with_details(details, resource_type=resource_type, field=field, value=value),
            error_code="DUPLICATE_RESOURCE"
        )


# =============================================================================
# EXCHANGE RULES
# =============================================================================

class BusinessRuleViolationError(PlantSwapException):
    """
    A well-formed request the marketplace rules do not allow, for example
    offering on your own plant. ``rule`` names the rule, ``context`` holds
    the ids involved.
    """

    def __init__(
        self,
        message: str = "Business rule violation",
        rule: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "BUSINESS_RULE_VIOLATION"
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=_with_details(details, rule=rule, context=context),
            error_code=error_code
        )


class InvalidTransitionError(BusinessRuleViolationError):
    """The offer's current status does not lead to the requested one."""

    def __init__(
        self,
        offer_id: Optional[str],
        current_status: str,
        target_status: str,
        message: Optional[str] = None
    ):
        super().__init__(
            message=message or f"Cannot move exchange from '{current_status}' to '{target_status}'",
            rule="exchange_status_transition",
            context={
                "offer_id": offer_id,
                "current_status": current_status,
                "target_status": target_status,
            },
            error_code="INVALID_TRANSITION"
        )


class NoAvailablePlantsError(BusinessRuleViolationError):

    def __init__(self, user_id: str):
        super().__init__(
            message="You need at least one available plant to propose an exchange",
            rule="sender_has_available_plant",
            context={"user_id": user_id},
            error_code="NO_AVAILABLE_PLANTS"
        )


# =============================================================================
# BACKEND FAILURES
# =============================================================================

class RepositoryError(PlantSwapException):
    """
    A row API call failed. Wraps postgrest errors so services never see
    client internals.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        table: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=_with_details(
                details, table=table, operation=operation, original_error=original_error
            ),
            error_code="REPOSITORY_ERROR"
        )


class StorageError(PlantSwapException):
    """Upload, public URL or removal against a storage bucket failed."""

    def __init__(
        self,
        message: str = "Storage operation failed",
        bucket: Optional[str] = None,
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=_with_details(details, bucket=bucket, path=path),
            error_code="STORAGE_ERROR"
        )


class FileTooLargeError(PlantSwapException):

    def __init__(
        self,
        message: str = "File too large",
        file_size: Optional[int] = None,
        max_size: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            details=_with_details(details, file_size=file_size, max_size=max_size),
            error_code="FILE_TOO_LARGE"
        )


class InvalidFileTypeError(PlantSwapException):
    """Upload is not one of the accepted image formats."""

    def __init__(
        self,
        message: str = "Invalid file type",
        file_type: Optional[str] = None,
        allowed_types: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            details=_with_details(details, file_type=file_type, allowed_types=allowed_types),
            error_code="INVALID_FILE_TYPE"
        )


# =============================================================================
# MARKETPLACE LOOKUPS
# =============================================================================

class PlantNotFoundError(NotFoundError):

    def __init__(self, plant_id: str):
        super().__init__(
            message=f"Plant not found: {plant_id}",
            resource_type="plant",
            resource_id=plant_id
        )


class ExchangeNotFoundError(NotFoundError):

    def __init__(self, offer_id: str):
        super().__init__(
            message=f"Exchange offer not found: {offer_id}",
            resource_type="exchange_offer",
            resource_id=offer_id
        )


def is_server_error(exception: Exception) -> bool:
    """5xx application errors and anything that is not a PlantSwapException."""
    if isinstance(exception, PlantSwapException):
        return exception.status_code >= 500
    return True
