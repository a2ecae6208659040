"""Ticketing Domain Enums"""

from src.service.ticketing.domain.enum.ticket_status import TicketStatus, display_status_from_flags
from src.service.ticketing.domain.enum.user_role import UserRole

__all__ = ['TicketStatus', 'UserRole', 'display_status_from_flags']
