from decimal import Decimal
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import InvalidPurchaseRequest


MAX_TICKETS_PER_PURCHASE = 8


@attrs.define(frozen=True)
class PurchaseRequest:
    """
    One submission shape for primary and resale purchases.

    - primary, whole event:   event_id
    - primary, category:      ticket_category_id (event_id optional)
    - resale:                 resale_ticket_id, quantity 1
    """

    quantity: int
    idempotency_key: str
    event_id: Optional[str] = None
    ticket_category_id: Optional[str] = None
    resale_ticket_id: Optional[str] = None

    def __attrs_post_init__(self) -> None:
        if self.ticket_category_id and self.resale_ticket_id:
            raise InvalidPurchaseRequest(
                'Specify either a ticket category or a resale ticket, not both'
            )
        if self.quantity < 1:
            raise InvalidPurchaseRequest('quantity must be at least 1')
        if self.quantity > MAX_TICKETS_PER_PURCHASE:
            raise InvalidPurchaseRequest(
                f'Maximum {MAX_TICKETS_PER_PURCHASE} tickets per purchase'
            )
        if self.resale_ticket_id and self.quantity != 1:
            raise InvalidPurchaseRequest('A resale ticket is bought one at a time')
        if not (self.event_id or self.ticket_category_id or self.resale_ticket_id):
            raise InvalidPurchaseRequest('event_id is required for a primary purchase')

    @property
    def is_resale(self) -> bool:
        return bool(self.resale_ticket_id)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {'quantity': self.quantity}
        if self.event_id:
            payload['eventId'] = self.event_id
        if self.ticket_category_id:
            payload['ticketCategoryId'] = self.ticket_category_id
        if self.resale_ticket_id:
            payload['resaleTicketId'] = self.resale_ticket_id
        return payload


@attrs.define(frozen=True)
class PurchaseOutcome:
    """Either a checkout redirect (paid tickets) or a direct confirmation (free tickets)."""

    checkout_url: Optional[str] = None
    confirmed: bool = False
    message: str = ''
    # Amount shown to the buyer before payment, service fee included
    quoted_total: Optional[Decimal] = None

    @property
    def requires_payment(self) -> bool:
        return self.checkout_url is not None
