from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import InvalidResalePrice
from src.service.ticketing.app.query.get_resale_quote_use_case import GetResaleQuoteUseCase
from src.service.ticketing.app.query.list_resale_listings_use_case import (
    ListResaleListingsUseCase,
)
from src.service.ticketing.app.query.summarize_my_tickets_use_case import (
    SummarizeMyTicketsUseCase,
)
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo
from test.constants import BUYER_ID, EVENT_ID, SELLER_ID
from test.service.ticketing.builders import make_ticket


@pytest.mark.unit
class TestGetResaleQuote:
    def test_quote(self, test_settings: Settings) -> None:
        quote = GetResaleQuoteUseCase(settings=test_settings).quote(resale_price=1000)

        assert quote.seller_payout == 950
        assert quote.buyer_total == Decimal('1050.00')

    def test_invalid_price(self, test_settings: Settings) -> None:
        with pytest.raises(InvalidResalePrice):
            GetResaleQuoteUseCase(settings=test_settings).quote(resale_price=0)


@pytest.mark.unit
class TestListResaleListings:
    @pytest.mark.asyncio
    async def test_filters_own_and_unlisted_tickets(self, buyer: CurrentUserInfo) -> None:
        backend = AsyncMock()
        backend.list_resale_listings = AsyncMock(
            return_value=[
                make_ticket(id='t1', status=TicketStatus.LISTED),
                make_ticket(id='t2', status=TicketStatus.LISTED, owner_id=BUYER_ID),
                make_ticket(id='t3'),
                make_ticket(id='t4', status=TicketStatus.USED),
            ]
        )

        listings = await ListResaleListingsUseCase(backend=backend).list_for_event(
            event_id=EVENT_ID, actor=buyer
        )

        assert [ticket.id for ticket in listings] == ['t1']
        backend.list_resale_listings.assert_awaited_once_with(event_id=EVENT_ID)


@pytest.mark.unit
class TestSummarizeMyTickets:
    @pytest.mark.asyncio
    async def test_groups_by_event_with_status_counts(self, seller: CurrentUserInfo) -> None:
        backend = AsyncMock()
        backend.list_my_tickets = AsyncMock(
            return_value=[
                make_ticket(id='t1'),
                make_ticket(id='t2', status=TicketStatus.LISTED),
                make_ticket(id='t3', status=TicketStatus.USED),
                make_ticket(id='t4', event_id='evt_2'),
            ]
        )

        summaries = await SummarizeMyTicketsUseCase(backend=backend).summarize(actor=seller)

        assert [summary.event_id for summary in summaries] == [EVENT_ID, 'evt_2']
        first = summaries[0]
        assert first.ticket_count == 3
        assert (
            first.status_summary.active,
            first.status_summary.listed,
            first.status_summary.used,
        ) == (1, 1, 1)
        assert summaries[1].status_summary.active == 1
        assert all(ticket.owner_id == SELLER_ID for ticket in first.tickets)

    @pytest.mark.asyncio
    async def test_no_tickets(self, seller: CurrentUserInfo) -> None:
        backend = AsyncMock()
        backend.list_my_tickets = AsyncMock(return_value=[])

        assert await SummarizeMyTicketsUseCase(backend=backend).summarize(actor=seller) == []
