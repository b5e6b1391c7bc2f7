# samyukta/core/exceptions.py
"""
Custom exception hierarchy for the registration service.
All exceptions inherit from AppError so the error handler can render them
uniformly.
"""

from typing import Optional


class ErrorCategory:
    """Error categories for structured error handling"""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found_error"
    PRECONDITION = "precondition_error"
    CAPACITY = "capacity_error"
    DATABASE = "database_error"
    AUTHENTICATION = "authentication_error"
    AUTHORIZATION = "authorization_error"
    RATE_LIMIT = "rate_limit_error"
    INTERNAL = "internal_error"


class AppError(Exception):
    """Base application error with structured information"""

    def __init__(
        self,
        message: str,
        category: str = ErrorCategory.INTERNAL,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[dict] = None,
    ):
        self.message = message
        self.category = category
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            status_code=400,
            error_code="INVALID_INPUT",
            details={"field": field} if field else {},
        )


# ===========================================
# Not found
# ===========================================


class NotFoundError(AppError):
    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            message=f"{resource} not found",
            category=ErrorCategory.NOT_FOUND,
            status_code=404,
            error_code=f"{resource.upper()}_NOT_FOUND",
            details={"resource": resource.lower(), "id": identifier},
        )


class ParticipantNotFoundError(NotFoundError):
    def __init__(self, participant_id: str):
        super().__init__("Participant", participant_id)


class RegistrationNotFoundError(NotFoundError):
    def __init__(self, team_id: str):
        super().__init__("Registration", team_id)


# ===========================================
# Action preconditions
# ===========================================


class PreconditionError(AppError):
    """A domain rule for an on-site action was not met."""

    def __init__(self, message: str, error_code: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.PRECONDITION,
            status_code=400,
            error_code=error_code,
            details=details,
        )


class DuplicateActionError(PreconditionError):
    def __init__(self, message: str, participant_id: str, action: str, date: str):
        super().__init__(
            message=message,
            error_code="ALREADY_RECORDED",
            details={"participant_id": participant_id, "action": action, "date": date},
        )


class CompetitionTrackMismatchError(PreconditionError):
    def __init__(self, participant_id: str, registered: str, scanned: str):
        self.registered = registered
        self.scanned = scanned
        super().__init__(
            message=(
                f"Participant not registered for {scanned}. "
                f"Registered for: {registered}"
            ),
            error_code="COMPETITION_TRACK_MISMATCH",
            details={
                "participant_id": participant_id,
                "registered_track": registered,
                "scanned_track": scanned,
            },
        )


class CompetitionNotRegisteredError(PreconditionError):
    def __init__(self, participant_id: str):
        super().__init__(
            message="Participant is not registered for any competition",
            error_code="COMPETITION_NOT_REGISTERED",
            details={"participant_id": participant_id},
        )


class WorkshopNotRegisteredError(PreconditionError):
    def __init__(self, participant_id: str):
        super().__init__(
            message="Participant is not registered for any workshop",
            error_code="WORKSHOP_NOT_REGISTERED",
            details={"participant_id": participant_id},
        )


class AccommodationNotRequestedError(PreconditionError):
    def __init__(self, participant_id: str):
        super().__init__(
            message="Participant did not request accommodation",
            error_code="ACCOMMODATION_NOT_REQUESTED",
            details={"participant_id": participant_id},
        )


class InvalidAccommodationTransitionError(PreconditionError):
    def __init__(self, participant_id: str, current: str, action: str):
        super().__init__(
            message=f"Cannot {action} while accommodation is {current}",
            error_code="INVALID_ACCOMMODATION_TRANSITION",
            details={
                "participant_id": participant_id,
                "current_status": current,
                "action": action,
            },
        )


# ===========================================
# Capacity
# ===========================================


class CapacityError(AppError):
    def __init__(self, message: str, error_code: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.CAPACITY,
            status_code=409,
            error_code=error_code,
            details=details,
        )


class TrackClosedError(CapacityError):
    def __init__(self, track: str, used: int, max_capacity: int):
        self.track = track
        super().__init__(
            message=f"Registrations for {track} are closed ({used}/{max_capacity} slots used)",
            error_code="TRACK_CLOSED",
            details={"track": track, "used": used, "max": max_capacity},
        )


class EventClosedError(CapacityError):
    def __init__(self, used: int, max_capacity: int):
        super().__init__(
            message=f"Event has reached its maximum capacity ({used}/{max_capacity})",
            error_code="EVENT_CLOSED",
            details={"used": used, "max": max_capacity},
        )


class DirectJoinUnavailableError(CapacityError):
    def __init__(self, total: int, threshold: int):
        super().__init__(
            message="Direct join is not available yet",
            error_code="DIRECT_JOIN_UNAVAILABLE",
            details={"total_registrations": total, "threshold": threshold},
        )


# ===========================================
# Store
# ===========================================


class StoreUnavailableError(AppError):
    """The database could not be queried. Never reported as an empty result."""

    def __init__(self, operation: str):
        super().__init__(
            message="Registration store is unavailable. Please try again.",
            category=ErrorCategory.DATABASE,
            status_code=503,
            error_code="STORE_UNAVAILABLE",
            details={"operation": operation},
        )
