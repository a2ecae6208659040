"""
Ticket Status Enum - Domain Value Object

A ticket occupies exactly one of these states. The remote API still speaks in
two flags (isUsed / isListed); `from_flags` collapses them with used taking
precedence over listed, so an overlapping pair resolves deterministically.
"""

from enum import StrEnum


class TicketStatus(StrEnum):
    ACTIVE = 'ACTIVE'
    LISTED = 'LISTED'
    USED = 'USED'

    @classmethod
    def from_flags(cls, *, is_used: bool, is_listed: bool) -> 'TicketStatus':
        if is_used:
            return cls.USED
        if is_listed:
            return cls.LISTED
        return cls.ACTIVE

    @property
    def display_text(self) -> str:
        return _DISPLAY_TEXT[self]

    @property
    def is_terminal(self) -> bool:
        return self is TicketStatus.USED


_DISPLAY_TEXT = {
    TicketStatus.USED: 'Used',
    TicketStatus.LISTED: 'Listed for Resale',
    TicketStatus.ACTIVE: 'Active',
}


def display_status_from_flags(*, is_used: bool, is_listed: bool) -> str:
    return TicketStatus.from_flags(is_used=is_used, is_listed=is_listed).display_text
