"""Application layer DTOs"""

from src.service.ticketing.app.dto.issued_verification_token import IssuedVerificationToken
from src.service.ticketing.app.dto.my_tickets_summary import EventTicketsSummary, StatusSummary
from src.service.ticketing.app.dto.ticket_verification_result import TicketVerificationResult

__all__ = [
    'EventTicketsSummary',
    'IssuedVerificationToken',
    'StatusSummary',
    'TicketVerificationResult',
]
