class DomainError(Exception):
    """Base exception for business rule violations.

    ``kind`` is the stable machine-readable name sent to clients,
    ``status_code`` the HTTP status the controllers answer with.
    """

    kind = "domain_error"
    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""

    kind = "validation_error"


class NotFoundError(DomainError):
    kind = "not_found"
    status_code = 404


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""

    kind = "unauthorized"
    status_code = 403


class DuplicatePunchInError(DomainError):
    kind = "duplicate_punch_in"
    status_code = 409


class DuplicatePunchOutError(DomainError):
    kind = "duplicate_punch_out"
    status_code = 409


class NoOpenSessionError(DomainError):
    kind = "no_open_session"
    status_code = 409


class OverlappingLeaveError(DomainError):
    kind = "overlapping_leave"
    status_code = 409


class GeocodeUnavailable(Exception):
    """Reverse geocoding failed or timed out.

    Not a DomainError: enrichment swallows it, it never reaches a client.
    """
