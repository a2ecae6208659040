from decimal import Decimal

import pytest

from src.platform.exception.exceptions import DomainError, SoldOut
from src.service.ticketing.domain.entity.event_entity import EventEntity, TicketCategoryEntity
from test.constants import EVENT_ID
from test.service.ticketing.builders import make_event


@pytest.mark.unit
class TestEventCapacity:
    def test_sold_out_event_rejects_purchase(self) -> None:
        event = make_event(max_tickets=100, minted=100)

        assert event.tickets_available == 0
        with pytest.raises(SoldOut, match='sold out'):
            event.ensure_purchasable(1)

    def test_quantity_above_remaining(self) -> None:
        event = make_event(max_tickets=100, minted=98)

        with pytest.raises(SoldOut, match='Only 2 ticket'):
            event.ensure_purchasable(3)

    def test_remaining_capacity_accepted(self) -> None:
        make_event(max_tickets=100, minted=98).ensure_purchasable(2)

    def test_inactive_event(self) -> None:
        with pytest.raises(DomainError):
            make_event(is_active=False).ensure_purchasable(1)

    def test_category_capacity_is_separate(self) -> None:
        vip = TicketCategoryEntity(
            id='cat_vip',
            event_id=EVENT_ID,
            name='VIP',
            price=Decimal('20000'),
            max_tickets=10,
            minted=10,
        )
        event = make_event(categories=(vip,))

        event.ensure_purchasable(1)
        with pytest.raises(SoldOut):
            event.find_category('cat_vip').ensure_purchasable(1)  # type: ignore[union-attr]
        assert event.find_category('missing') is None


@pytest.mark.unit
class TestEventTransport:
    def test_from_transport_with_categories(self) -> None:
        event = EventEntity.from_transport(
            {
                'id': EVENT_ID,
                'name': 'Lagos Jazz Night',
                'price': 5000,
                'maxTickets': 200,
                'minted': 150,
                'isActive': True,
                'date': '2025-03-01T19:00:00.000Z',
                'ticketCategories': [
                    {'id': 'cat_reg', 'name': 'Regular', 'price': 5000, 'maxTickets': 150},
                ],
            }
        )

        assert event.tickets_available == 50
        assert event.categories[0].event_id == EVENT_ID
        assert event.categories[0].tickets_available == 150
        assert event.date is not None and event.date.year == 2025
