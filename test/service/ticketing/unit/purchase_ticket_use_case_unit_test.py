from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import (
    InvalidPurchaseRequest,
    NotFoundError,
    SelfPurchaseRejected,
    SoldOut,
    TicketStateConflict,
)
from src.service.ticketing.app.command.purchase_ticket_use_case import PurchaseTicketUseCase
from src.service.ticketing.domain.entity.event_entity import TicketCategoryEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo
from src.service.ticketing.domain.value_object.purchase_request import PurchaseOutcome
from test.constants import EVENT_ID, TICKET_ID
from test.service.ticketing.builders import make_event, make_ticket


CHECKOUT_URL = 'https://pay.example.com/session/1'


@pytest.mark.unit
class TestPurchasePrimary:
    @pytest.fixture
    def mock_backend(self) -> AsyncMock:
        backend = AsyncMock()
        backend.buy_ticket = AsyncMock(return_value=PurchaseOutcome(checkout_url=CHECKOUT_URL))
        return backend

    @pytest.fixture
    def use_case(self, mock_backend: AsyncMock) -> PurchaseTicketUseCase:
        return PurchaseTicketUseCase(backend=mock_backend)

    @pytest.mark.asyncio
    async def test_event_purchase_returns_checkout(
        self, use_case: PurchaseTicketUseCase, mock_backend: AsyncMock, buyer: CurrentUserInfo
    ) -> None:
        outcome = await use_case.purchase_primary(
            actor=buyer, event=make_event(), quantity=2, idempotency_key='idem-2'
        )

        assert outcome.requires_payment
        request = mock_backend.buy_ticket.call_args.kwargs['request']
        assert request.to_payload() == {'quantity': 2, 'eventId': EVENT_ID}
        assert request.idempotency_key == 'idem-2'

    @pytest.mark.asyncio
    async def test_sold_out_event_never_reaches_backend(
        self, use_case: PurchaseTicketUseCase, mock_backend: AsyncMock, buyer: CurrentUserInfo
    ) -> None:
        with pytest.raises(SoldOut):
            await use_case.purchase_primary(
                actor=buyer, event=make_event(max_tickets=100, minted=100), quantity=1
            )

        mock_backend.buy_ticket.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_quantity_cap(
        self, use_case: PurchaseTicketUseCase, mock_backend: AsyncMock, buyer: CurrentUserInfo
    ) -> None:
        with pytest.raises(InvalidPurchaseRequest):
            await use_case.purchase_primary(actor=buyer, event=make_event(), quantity=9)

        mock_backend.buy_ticket.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_category_purchase_checks_category_capacity(
        self, use_case: PurchaseTicketUseCase, mock_backend: AsyncMock, buyer: CurrentUserInfo
    ) -> None:
        vip = TicketCategoryEntity(
            id='cat_vip',
            event_id=EVENT_ID,
            name='VIP',
            price=Decimal('20000'),
            max_tickets=5,
            minted=4,
        )
        event = make_event(categories=(vip,))

        with pytest.raises(SoldOut):
            await use_case.purchase_primary(
                actor=buyer, event=event, quantity=2, ticket_category_id='cat_vip'
            )
        await use_case.purchase_primary(
            actor=buyer, event=event, quantity=1, ticket_category_id='cat_vip'
        )

        mock_backend.buy_ticket.assert_awaited_once()
        payload = mock_backend.buy_ticket.call_args.kwargs['request'].to_payload()
        assert payload['ticketCategoryId'] == 'cat_vip'

    @pytest.mark.asyncio
    async def test_outcome_quotes_total_with_service_fee(
        self, use_case: PurchaseTicketUseCase, buyer: CurrentUserInfo
    ) -> None:
        outcome = await use_case.purchase_primary(actor=buyer, event=make_event(), quantity=2)

        # 2 x 5000 plus 5%
        assert outcome.quoted_total == Decimal('10500')

    @pytest.mark.asyncio
    async def test_unknown_category(
        self, use_case: PurchaseTicketUseCase, buyer: CurrentUserInfo
    ) -> None:
        with pytest.raises(NotFoundError):
            await use_case.purchase_primary(
                actor=buyer, event=make_event(), quantity=1, ticket_category_id='missing'
            )


@pytest.mark.unit
class TestPurchaseResale:
    @pytest.fixture
    def mock_backend(self) -> AsyncMock:
        backend = AsyncMock()
        backend.buy_ticket = AsyncMock(return_value=PurchaseOutcome(checkout_url=CHECKOUT_URL))
        return backend

    @pytest.fixture
    def use_case(self, mock_backend: AsyncMock) -> PurchaseTicketUseCase:
        return PurchaseTicketUseCase(backend=mock_backend)

    @pytest.mark.asyncio
    async def test_buys_listed_ticket(
        self, use_case: PurchaseTicketUseCase, mock_backend: AsyncMock, buyer: CurrentUserInfo
    ) -> None:
        listing = make_ticket(status=TicketStatus.LISTED)

        outcome = await use_case.purchase_resale(actor=buyer, listing=listing)

        assert outcome.checkout_url == CHECKOUT_URL
        request = mock_backend.buy_ticket.call_args.kwargs['request']
        assert request.is_resale
        assert request.to_payload() == {
            'quantity': 1,
            'eventId': EVENT_ID,
            'resaleTicketId': TICKET_ID,
        }

    @pytest.mark.asyncio
    async def test_seller_cannot_buy_own_listing(
        self, use_case: PurchaseTicketUseCase, mock_backend: AsyncMock, seller: CurrentUserInfo
    ) -> None:
        with pytest.raises(SelfPurchaseRejected):
            await use_case.purchase_resale(
                actor=seller, listing=make_ticket(status=TicketStatus.LISTED)
            )

        mock_backend.buy_ticket.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stale_listing_is_a_conflict(
        self, use_case: PurchaseTicketUseCase, mock_backend: AsyncMock, buyer: CurrentUserInfo
    ) -> None:
        with pytest.raises(TicketStateConflict):
            await use_case.purchase_resale(actor=buyer, listing=make_ticket())

        mock_backend.buy_ticket.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_loser_sees_backend_conflict(
        self, use_case: PurchaseTicketUseCase, mock_backend: AsyncMock, buyer: CurrentUserInfo
    ) -> None:
        mock_backend.buy_ticket.side_effect = TicketStateConflict()

        with pytest.raises(TicketStateConflict):
            await use_case.purchase_resale(
                actor=buyer, listing=make_ticket(status=TicketStatus.LISTED)
            )

    @pytest.mark.asyncio
    async def test_resale_quantity_other_than_one_rejected(
        self, use_case: PurchaseTicketUseCase, mock_backend: AsyncMock, buyer: CurrentUserInfo
    ) -> None:
        with pytest.raises(InvalidPurchaseRequest):
            await use_case.purchase_resale(
                actor=buyer, listing=make_ticket(status=TicketStatus.LISTED), quantity=3
            )

        mock_backend.buy_ticket.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_outcome_quotes_buyer_total(
        self, use_case: PurchaseTicketUseCase, buyer: CurrentUserInfo
    ) -> None:
        listing = make_ticket(status=TicketStatus.LISTED, resale_price=Decimal('1000'))

        outcome = await use_case.purchase_resale(actor=buyer, listing=listing)

        assert outcome.quoted_total == Decimal('1050')
