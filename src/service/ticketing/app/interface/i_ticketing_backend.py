"""
Ticketing Backend Interface

Port to the remote ticketing API, the source of truth for tickets, events,
ownership and payments. Every method is exactly one network round trip.

Implementations translate backend failures into the domain error taxonomy:
- NetworkOrServerError: backend unreachable, 5xx, or an unreadable response
- TicketStateConflict: the ticket changed underneath the caller (409)
- SoldOut: the backend reports no capacity left
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo
from src.service.ticketing.domain.value_object.purchase_request import (
    PurchaseOutcome,
    PurchaseRequest,
)
from src.service.ticketing.domain.value_object.resale_listing_request import (
    ResaleListingRequest,
)


class ITicketingBackend(ABC):
    @abstractmethod
    async def get_current_user(self, *, access_token: str) -> CurrentUserInfo:
        """
        Resolve the bearer token into the caller's identity

        Raises:
            AuthenticationError: token missing, expired or rejected
        """
        pass

    @abstractmethod
    async def get_ticket(self, *, actor: CurrentUserInfo, ticket_id: str) -> TicketEntity:
        pass

    @abstractmethod
    async def get_event(self, *, event_id: str) -> EventEntity:
        pass

    @abstractmethod
    async def list_my_tickets(self, *, actor: CurrentUserInfo) -> list[TicketEntity]:
        pass

    @abstractmethod
    async def list_resale_listings(self, *, event_id: str) -> list[TicketEntity]:
        pass

    @abstractmethod
    async def list_for_resale(
        self, *, actor: CurrentUserInfo, request: ResaleListingRequest
    ) -> TicketEntity:
        """
        Submit a resale listing

        Returns:
            The ticket as persisted by the backend (LISTED)
        """
        pass

    @abstractmethod
    async def buy_ticket(
        self, *, actor: CurrentUserInfo, request: PurchaseRequest
    ) -> PurchaseOutcome:
        pass

    @abstractmethod
    async def verify_ticket(
        self, *, ticket_id: str, code: str, event_id: str
    ) -> tuple[bool, Optional[TicketEntity]]:
        """
        Ask the backend whether the ticket is valid for entry

        Returns:
            (is_valid, ticket) - ticket is None when the backend omits it
        """
        pass
