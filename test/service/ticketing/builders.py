from decimal import Decimal
from typing import Any, Optional

from src.service.ticketing.domain.entity.event_entity import EventEntity, TicketCategoryEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from test.constants import EVENT_ID, SELLER_ID, TICKET_CODE, TICKET_ID


def make_ticket(
    *,
    status: TicketStatus = TicketStatus.ACTIVE,
    owner_id: str = SELLER_ID,
    resale_price: Optional[Decimal] = None,
    **overrides: Any,
) -> TicketEntity:
    if status is TicketStatus.LISTED and resale_price is None:
        resale_price = Decimal('1000')
    fields: dict[str, Any] = {
        'id': TICKET_ID,
        'code': TICKET_CODE,
        'event_id': EVENT_ID,
        'owner_id': owner_id,
        'status': status,
        'resale_price': resale_price,
    }
    fields.update(overrides)
    return TicketEntity(**fields)


def make_event(
    *,
    max_tickets: int = 100,
    minted: int = 0,
    is_active: bool = True,
    categories: tuple[TicketCategoryEntity, ...] = (),
) -> EventEntity:
    return EventEntity(
        id=EVENT_ID,
        name='Lagos Jazz Night',
        price=Decimal('5000'),
        max_tickets=max_tickets,
        minted=minted,
        is_active=is_active,
        categories=categories,
    )


def ticket_payload(**overrides: Any) -> dict[str, Any]:
    """Ticket as the remote API sends it (camelCase, two flags)."""
    payload: dict[str, Any] = {
        'id': TICKET_ID,
        'code': TICKET_CODE,
        'eventId': EVENT_ID,
        'userId': SELLER_ID,
        'isUsed': False,
        'isListed': False,
        'resalePrice': None,
        'resaleCount': 0,
        'createdAt': '2025-01-10T10:30:00.000Z',
    }
    payload.update(overrides)
    return payload
