class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


# ============================ Ticket lifecycle ============================


class TicketNotListable(ConflictError):
    def __init__(self, message: str = 'Ticket cannot be listed for resale') -> None:
        super().__init__(message)


class TicketStateConflict(ConflictError):
    """Ticket state changed on the backend; refresh the ticket before retrying."""

    def __init__(self, message: str = 'Ticket state has changed, please refresh') -> None:
        super().__init__(message)


class SoldOut(ConflictError):
    def __init__(self, message: str = 'Tickets are sold out') -> None:
        super().__init__(message)


class SelfPurchaseRejected(ForbiddenError):
    def __init__(self, message: str = 'You cannot buy your own ticket') -> None:
        super().__init__(message)


# ============================ Resale input validation ============================


class InvalidResalePrice(DomainError):
    def __init__(self, message: str = 'Resale price must be greater than zero') -> None:
        super().__init__(message, 400)


class InvalidPayoutDestination(DomainError):
    def __init__(self, message: str = 'Invalid payout destination') -> None:
        super().__init__(message, 400)


class InvalidPurchaseRequest(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class MalformedToken(DomainError):
    def __init__(self, message: str = 'Invalid ticket data') -> None:
        super().__init__(message, 400)


# ============================ Remote backend ============================


class NetworkOrServerError(CustomBaseError):
    """Backend unreachable or answered with something we cannot interpret."""

    def __init__(self, message: str = 'Ticketing service is unavailable, please try again') -> None:
        super().__init__(message, 502)
