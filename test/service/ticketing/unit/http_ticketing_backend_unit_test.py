"""
Unit tests for the HTTP gateway adapters

The real adapters run against httpx.MockTransport, so request shapes and
error translation are exercised without a live backend.
"""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import httpx
import orjson
import pytest

from src.platform.exception.exceptions import (
    AuthenticationError,
    DomainError,
    NetworkOrServerError,
    NotFoundError,
    SoldOut,
    TicketStateConflict,
)
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo
from src.service.ticketing.domain.value_object.payout_destination import PayoutDestination
from src.service.ticketing.domain.value_object.purchase_request import PurchaseRequest
from src.service.ticketing.domain.value_object.resale_listing_request import (
    ResaleListingRequest,
)
from src.service.ticketing.driven_adapter.backend.http_bank_registry import HttpBankRegistry
from src.service.ticketing.driven_adapter.backend.http_ticketing_backend import (
    HttpTicketingBackend,
)
from test.constants import EVENT_ID, TICKET_ID, VALID_ACCOUNT_NUMBER, VALID_BANK_CODE
from test.service.ticketing.builders import ticket_payload


BASE_URL = 'https://backend.example.com/api'
Handler = Callable[[httpx.Request], httpx.Response]


def _backend(handler: Handler) -> HttpTicketingBackend:
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return HttpTicketingBackend(client=client)


def _json(status_code: int, body: Any) -> httpx.Response:
    return httpx.Response(status_code, content=orjson.dumps(body))


@pytest.mark.unit
class TestHttpTicketingBackendRequests:
    @pytest.mark.asyncio
    async def test_get_current_user(self) -> None:
        seen: dict[str, Any] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen['path'] = request.url.path
            seen['auth'] = request.headers.get('Authorization')
            return _json(200, {'user': {'id': 'u1', 'role': 'ORGANIZER'}})

        user = await _backend(handler).get_current_user(access_token='tok')

        assert seen == {'path': '/api/auth/me', 'auth': 'Bearer tok'}
        assert user.user_id == 'u1'
        assert user.role is UserRole.ORGANIZER
        assert user.access_token == 'tok'

    @pytest.mark.asyncio
    async def test_unknown_role_falls_back_to_user(self) -> None:
        backend = _backend(lambda request: _json(200, {'id': 'u1', 'role': 'ROOT'}))

        assert (await backend.get_current_user(access_token='tok')).role is UserRole.USER

    @pytest.mark.asyncio
    async def test_list_for_resale_posts_payload_with_idempotency_key(
        self, seller: CurrentUserInfo
    ) -> None:
        seen: dict[str, Any] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen['path'] = request.url.path
            seen['key'] = request.headers.get('Idempotency-Key')
            seen['body'] = orjson.loads(request.content)
            return _json(200, {'ticket': ticket_payload(isListed=True, resalePrice=1000)})

        request = ResaleListingRequest(
            ticket_id=TICKET_ID,
            resale_price=Decimal('1000'),
            payout=PayoutDestination(
                bank_code=VALID_BANK_CODE, account_number=VALID_ACCOUNT_NUMBER
            ),
            idempotency_key='idem-1',
        )

        ticket = await _backend(handler).list_for_resale(actor=seller, request=request)

        assert ticket.status is TicketStatus.LISTED
        assert seen['path'] == '/api/tickets/resale'
        assert seen['key'] == 'idem-1'
        assert seen['body'] == {
            'ticketId': TICKET_ID,
            'resalePrice': 1000.0,
            'bankCode': VALID_BANK_CODE,
            'accountNumber': VALID_ACCOUNT_NUMBER,
        }

    @pytest.mark.asyncio
    async def test_buy_ticket_checkout_and_free_confirmation(
        self, buyer: CurrentUserInfo
    ) -> None:
        request = PurchaseRequest(quantity=1, idempotency_key='k', event_id=EVENT_ID)

        paid = await _backend(
            lambda r: _json(200, {'checkoutUrl': 'https://pay.example.com/s/1'})
        ).buy_ticket(actor=buyer, request=request)
        free = await _backend(
            lambda r: _json(200, {'success': True, 'message': 'Ticket issued'})
        ).buy_ticket(actor=buyer, request=request)

        assert paid.requires_payment and not paid.confirmed
        assert free.confirmed and free.message == 'Ticket issued'

    @pytest.mark.asyncio
    async def test_verify_ticket(self) -> None:
        seen: dict[str, Any] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen['body'] = orjson.loads(request.content)
            return _json(200, {'isValid': True, 'ticket': ticket_payload()})

        is_valid, ticket = await _backend(handler).verify_ticket(
            ticket_id='t1', code='ABC', event_id='e1'
        )

        assert is_valid
        assert ticket is not None and ticket.id == TICKET_ID
        assert seen['body'] == {'ticketId': 't1', 'code': 'ABC', 'eventId': 'e1'}

    @pytest.mark.asyncio
    async def test_list_my_tickets_accepts_bare_list(self, seller: CurrentUserInfo) -> None:
        backend = _backend(
            lambda r: _json(200, [ticket_payload(), ticket_payload(id='t2', isUsed=True)])
        )

        tickets = await backend.list_my_tickets(actor=seller)

        assert [t.status for t in tickets] == [TicketStatus.ACTIVE, TicketStatus.USED]


@pytest.mark.unit
class TestHttpTicketingBackendErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'status_code,body,expected',
        [
            (500, {'message': 'boom'}, NetworkOrServerError),
            (503, None, NetworkOrServerError),
            (409, {'message': 'Ticket already sold'}, TicketStateConflict),
            (400, {'message': 'Event is sold out'}, SoldOut),
            (401, {}, AuthenticationError),
            (404, {'message': 'Ticket not found'}, NotFoundError),
            (422, {'message': ['price must be positive']}, DomainError),
        ],
    )
    async def test_error_translation(
        self,
        seller: CurrentUserInfo,
        status_code: int,
        body: Any,
        expected: type[Exception],
    ) -> None:
        backend = _backend(lambda r: _json(status_code, body))

        with pytest.raises(expected):
            await backend.get_ticket(actor=seller, ticket_id=TICKET_ID)

    @pytest.mark.asyncio
    async def test_backend_message_is_surfaced(self, seller: CurrentUserInfo) -> None:
        backend = _backend(lambda r: _json(400, {'message': ['a', 'b']}))

        with pytest.raises(DomainError) as exc_info:
            await backend.get_ticket(actor=seller, ticket_id=TICKET_ID)

        assert exc_info.value.message == 'a, b'
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_transport_failure(self, seller: CurrentUserInfo) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('refused', request=request)

        with pytest.raises(NetworkOrServerError):
            await _backend(handler).get_ticket(actor=seller, ticket_id=TICKET_ID)

    @pytest.mark.asyncio
    async def test_timeout(self, seller: CurrentUserInfo) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout('slow', request=request)

        with pytest.raises(NetworkOrServerError, match='timed out'):
            await _backend(handler).get_ticket(actor=seller, ticket_id=TICKET_ID)

    @pytest.mark.asyncio
    async def test_unreadable_body(self, seller: CurrentUserInfo) -> None:
        backend = _backend(lambda r: httpx.Response(200, content=b'<html>'))

        with pytest.raises(NetworkOrServerError):
            await backend.get_ticket(actor=seller, ticket_id=TICKET_ID)

    @pytest.mark.asyncio
    async def test_unexpected_ticket_shape(self, seller: CurrentUserInfo) -> None:
        backend = _backend(lambda r: _json(200, {'ticket': {'code': 'no-id'}}))

        with pytest.raises(NetworkOrServerError):
            await backend.get_ticket(actor=seller, ticket_id=TICKET_ID)


@pytest.mark.unit
class TestHttpBankRegistry:
    @pytest.mark.asyncio
    async def test_parses_wrapped_list(self) -> None:
        body = {'data': [{'code': '058', 'name': 'GTBank'}, {'name': 'no code'}]}
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: _json(200, body)))

        registry = await HttpBankRegistry(
            client=client, bank_codes_url='https://banks.example.com/codes'
        ).get_registry()

        assert len(registry) == 1
        assert '058' in registry

    @pytest.mark.asyncio
    async def test_failure(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: _json(500, {})))

        with pytest.raises(NetworkOrServerError):
            await HttpBankRegistry(
                client=client, bank_codes_url='https://banks.example.com/codes'
            ).get_registry()
