from typing import Any, Optional

import httpx
import orjson

from src.platform.constant import backend_route
from src.platform.exception.exceptions import AuthenticationError, NetworkOrServerError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_ticketing_backend import ITicketingBackend
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.user_role import UserRole
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo
from src.service.ticketing.domain.value_object.purchase_request import (
    PurchaseOutcome,
    PurchaseRequest,
)
from src.service.ticketing.domain.value_object.resale_listing_request import (
    ResaleListingRequest,
)
from src.service.ticketing.driven_adapter.backend.backend_error_translator import (
    translate_error_response,
    translate_transport_error,
)


IDEMPOTENCY_KEY_HEADER = 'Idempotency-Key'


def _auth_headers(access_token: str) -> dict[str, str]:
    return {'Authorization': f'Bearer {access_token}'} if access_token else {}


def _unwrap(body: Any, key: str) -> Any:
    """Accept both `{key: {...}}` envelopes and bare objects."""
    if isinstance(body, dict) and isinstance(body.get(key), dict | list):
        return body[key]
    return body


class HttpTicketingBackend(ITicketingBackend):
    """
    ITicketingBackend over the remote REST API.

    The httpx client is owned by the DI container (base_url and timeout come
    from settings); this adapter never closes it.
    """

    def __init__(self, *, client: httpx.AsyncClient) -> None:
        self.client = client

    async def _request(
        self,
        method: str,
        url: str,
        *,
        access_token: str = '',
        json: Optional[dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
    ) -> Any:
        headers = _auth_headers(access_token)
        if idempotency_key:
            headers[IDEMPOTENCY_KEY_HEADER] = idempotency_key

        try:
            response = await self.client.request(method, url, json=json, headers=headers)
        except httpx.HTTPError as e:
            Logger.base.warning(f'[BACKEND] {method} {url} transport error: {type(e).__name__}')
            raise translate_transport_error(e) from e

        if response.is_error:
            Logger.base.warning(f'[BACKEND] {method} {url} -> {response.status_code}')
            raise translate_error_response(response)

        if not response.content:
            return {}
        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise NetworkOrServerError('Ticketing service returned an unreadable response') from e

    @staticmethod
    def _parse(parser: Any, data: Any) -> Any:
        try:
            return parser(data)
        except (KeyError, ValueError, TypeError, ArithmeticError) as e:
            raise NetworkOrServerError(
                'Ticketing service returned an unexpected response'
            ) from e

    def _parse_tickets(self, body: Any) -> list[TicketEntity]:
        items = _unwrap(body, 'tickets')
        if not isinstance(items, list):
            raise NetworkOrServerError('Ticketing service returned an unexpected response')
        return [self._parse(TicketEntity.from_transport, item) for item in items]

    # ============================ Queries ============================

    @Logger.io
    async def get_current_user(self, *, access_token: str) -> CurrentUserInfo:
        if not access_token:
            raise AuthenticationError('Please log in to continue')

        body = await self._request('GET', backend_route.AUTH_ME, access_token=access_token)
        user = _unwrap(body, 'user')
        if not isinstance(user, dict) or not user.get('id'):
            raise AuthenticationError('Please log in to continue')

        try:
            role = UserRole(str(user.get('role') or UserRole.USER))
        except ValueError:
            role = UserRole.USER
        return CurrentUserInfo(user_id=str(user['id']), role=role, access_token=access_token)

    @Logger.io
    async def get_ticket(self, *, actor: CurrentUserInfo, ticket_id: str) -> TicketEntity:
        body = await self._request(
            'GET',
            backend_route.TICKET_GET.format(ticket_id=ticket_id),
            access_token=actor.access_token,
        )
        return self._parse(TicketEntity.from_transport, _unwrap(body, 'ticket'))

    @Logger.io
    async def get_event(self, *, event_id: str) -> EventEntity:
        body = await self._request('GET', backend_route.EVENT_GET.format(event_id=event_id))
        return self._parse(EventEntity.from_transport, _unwrap(body, 'event'))

    @Logger.io
    async def list_my_tickets(self, *, actor: CurrentUserInfo) -> list[TicketEntity]:
        body = await self._request(
            'GET', backend_route.TICKET_MY_TICKETS, access_token=actor.access_token
        )
        return self._parse_tickets(body)

    @Logger.io
    async def list_resale_listings(self, *, event_id: str) -> list[TicketEntity]:
        body = await self._request(
            'GET', backend_route.RESALE_LISTINGS_BY_EVENT.format(event_id=event_id)
        )
        return self._parse_tickets(body)

    # ============================ Commands ============================

    @Logger.io
    async def list_for_resale(
        self, *, actor: CurrentUserInfo, request: ResaleListingRequest
    ) -> TicketEntity:
        body = await self._request(
            'POST',
            backend_route.RESALE_LIST,
            access_token=actor.access_token,
            json=request.to_payload(),
            idempotency_key=request.idempotency_key,
        )
        return self._parse(TicketEntity.from_transport, _unwrap(body, 'ticket'))

    @Logger.io
    async def buy_ticket(
        self, *, actor: CurrentUserInfo, request: PurchaseRequest
    ) -> PurchaseOutcome:
        body = await self._request(
            'POST',
            backend_route.TICKET_BUY,
            access_token=actor.access_token,
            json=request.to_payload(),
            idempotency_key=request.idempotency_key,
        )
        if not isinstance(body, dict):
            raise NetworkOrServerError('Ticketing service returned an unexpected response')

        checkout_url = body.get('checkoutUrl') or None
        return PurchaseOutcome(
            checkout_url=checkout_url,
            # Free tickets come back without a checkout session
            confirmed=checkout_url is None and body.get('success', True) is not False,
            message=str(body.get('message') or ''),
        )

    @Logger.io
    async def verify_ticket(
        self, *, ticket_id: str, code: str, event_id: str
    ) -> tuple[bool, Optional[TicketEntity]]:
        body = await self._request(
            'POST',
            backend_route.TICKET_VERIFY,
            json={'ticketId': ticket_id, 'code': code, 'eventId': event_id},
        )
        if not isinstance(body, dict):
            raise NetworkOrServerError('Ticketing service returned an unexpected response')

        raw_ticket = body.get('ticket')
        ticket = self._parse(TicketEntity.from_transport, raw_ticket) if raw_ticket else None
        return bool(body.get('isValid')), ticket
