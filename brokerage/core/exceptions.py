"""
core/exceptions.py
------------------
Domain error taxonomy for the partnership and sharing workflow.

Services raise these; the global handler registered in main.py turns them
into JSON responses of the form {"detail": ..., "code": ...}. None of them
are retried: they describe user-initiated transitions, not transient I/O.
"""

from fastapi import status


class BrokerageError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(BrokerageError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class Forbidden(BrokerageError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"


class NoCompany(Forbidden):
    """The authenticated user is not attached to any company."""

    code = "no_company"

    def __init__(self, message: str = "User does not belong to a company") -> None:
        super().__init__(message)


class SelfReference(BrokerageError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "self_reference"


class Conflict(BrokerageError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class PartnershipRequired(BrokerageError):
    status_code = status.HTTP_409_CONFLICT
    code = "partnership_required"


class InvalidState(BrokerageError):
    """
    Transition attempted from a status that does not permit it.
    Also raised for the loser of two racing transitions on the same row;
    callers should refresh and re-check.
    """

    status_code = status.HTTP_409_CONFLICT
    code = "invalid_state"
