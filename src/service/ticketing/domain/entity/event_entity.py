from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import DomainError, SoldOut
from src.service.ticketing.domain.resale_fee_policy import to_decimal


def _remaining(max_tickets: int, minted: int) -> int:
    return max(max_tickets - minted, 0)


def _check_capacity(*, remaining: int, quantity: int, label: str) -> None:
    if remaining <= 0:
        raise SoldOut(f'{label} is sold out')
    if quantity > remaining:
        raise SoldOut(f'Only {remaining} ticket(s) left for {label}')


@attrs.define(frozen=True)
class TicketCategoryEntity:
    """Priced tier of an event (e.g. Regular, VIP) with its own capacity."""

    id: str
    event_id: str
    name: str
    price: Decimal
    max_tickets: int
    minted: int = 0

    @classmethod
    def from_transport(cls, data: dict[str, Any], *, event_id: str = '') -> 'TicketCategoryEntity':
        return cls(
            id=str(data['id']),
            event_id=str(data.get('eventId') or event_id),
            name=str(data.get('name') or ''),
            price=to_decimal(data.get('price') or 0),
            max_tickets=int(data.get('maxTickets') or 0),
            minted=int(data.get('minted') or 0),
        )

    @property
    def tickets_available(self) -> int:
        return _remaining(self.max_tickets, self.minted)

    def ensure_purchasable(self, quantity: int) -> None:
        _check_capacity(
            remaining=self.tickets_available, quantity=quantity, label=f'Category {self.name}'
        )


@attrs.define(frozen=True)
class EventEntity:
    """Read-only view of an event; minted never exceeds max_tickets on the backend."""

    id: str
    name: str
    price: Decimal
    max_tickets: int
    minted: int = 0
    is_active: bool = True
    organizer_id: Optional[str] = None
    location: Optional[str] = None
    date: Optional[datetime] = None
    categories: tuple[TicketCategoryEntity, ...] = attrs.field(factory=tuple, converter=tuple)

    @classmethod
    def from_transport(cls, data: dict[str, Any]) -> 'EventEntity':
        event_id = str(data['id'])
        raw_date = data.get('date')
        return cls(
            id=event_id,
            name=str(data.get('name') or ''),
            price=to_decimal(data.get('price') or 0),
            max_tickets=int(data.get('maxTickets') or 0),
            minted=int(data.get('minted') or 0),
            is_active=bool(data.get('isActive', True)),
            organizer_id=data.get('organizerId') or None,
            location=data.get('location') or None,
            date=(
                datetime.fromisoformat(str(raw_date).replace('Z', '+00:00')) if raw_date else None
            ),
            categories=tuple(
                TicketCategoryEntity.from_transport(category, event_id=event_id)
                for category in data.get('ticketCategories') or []
            ),
        )

    @property
    def tickets_available(self) -> int:
        return _remaining(self.max_tickets, self.minted)

    def find_category(self, category_id: str) -> Optional[TicketCategoryEntity]:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def ensure_purchasable(self, quantity: int) -> None:
        """
        Raises:
            DomainError: event is no longer on sale
            SoldOut: no capacity left, or fewer tickets left than requested
        """
        if not self.is_active:
            raise DomainError(f'Event {self.name} is not on sale')
        _check_capacity(remaining=self.tickets_available, quantity=quantity, label=self.name)
