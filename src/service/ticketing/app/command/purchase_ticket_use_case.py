from decimal import Decimal
from typing import Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_ticketing_backend import ITicketingBackend
from src.service.ticketing.domain.entity.event_entity import EventEntity
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.resale_fee_policy import buyer_total, primary_purchase_total
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo
from src.service.ticketing.domain.value_object.purchase_request import (
    PurchaseOutcome,
    PurchaseRequest,
)


class PurchaseTicketUseCase:
    """
    Primary and resale purchases through one submission shape.

    The backend performs the ownership transfer and guarantees at most one
    successful purchase per listing; this use case only refuses requests that
    are already known to fail (sold out, self purchase, stale listing).
    """

    def __init__(self, *, backend: ITicketingBackend) -> None:
        self.backend = backend
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        backend: ITicketingBackend = Depends(Provide[Container.ticketing_backend]),
    ) -> Self:
        return cls(backend=backend)

    @Logger.io
    async def purchase_primary(
        self,
        *,
        actor: CurrentUserInfo,
        event: EventEntity,
        quantity: int,
        ticket_category_id: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> PurchaseOutcome:
        """
        Raises:
            InvalidPurchaseRequest: malformed quantity
            NotFoundError: category does not belong to the event
            SoldOut: event (or category) has no capacity left
            NetworkOrServerError: backend unreachable
        """
        with self.tracer.start_as_current_span(
            'use_case.purchase_primary',
            attributes={'event.id': event.id, 'user.id': actor.user_id, 'quantity': quantity},
        ):
            request = PurchaseRequest(
                event_id=event.id,
                quantity=quantity,
                ticket_category_id=ticket_category_id,
                idempotency_key=idempotency_key or str(uuid_utils.uuid7()),
            )

            unit_price = event.price
            if ticket_category_id:
                category = event.find_category(ticket_category_id)
                if category is None:
                    raise NotFoundError(f'Ticket category {ticket_category_id} not found')
                category.ensure_purchasable(quantity)
                unit_price = category.price
            else:
                event.ensure_purchasable(quantity)

            outcome = await self.backend.buy_ticket(actor=actor, request=request)
            outcome = attrs.evolve(
                outcome, quoted_total=Decimal(primary_purchase_total(unit_price, quantity))
            )
            Logger.base.info(
                f'🎟️ [PURCHASE] Primary x{quantity} for event {event.id} by user {actor.user_id} '
                f'({"checkout" if outcome.requires_payment else "confirmed"})'
            )
            return outcome

    @Logger.io
    async def purchase_resale(
        self,
        *,
        actor: CurrentUserInfo,
        listing: TicketEntity,
        quantity: int = 1,
        idempotency_key: Optional[str] = None,
    ) -> PurchaseOutcome:
        """
        Raises:
            InvalidPurchaseRequest: quantity other than 1
            TicketStateConflict: listing is no longer LISTED
            SelfPurchaseRejected: buyer owns the ticket or already bought it
            NetworkOrServerError: backend unreachable
        """
        with self.tracer.start_as_current_span(
            'use_case.purchase_resale',
            attributes={'ticket.id': listing.id, 'user.id': actor.user_id},
        ):
            listing.ensure_purchasable_by(actor.user_id)

            request = PurchaseRequest(
                event_id=listing.event_id or None,
                quantity=quantity,
                resale_ticket_id=listing.id,
                idempotency_key=idempotency_key or str(uuid_utils.uuid7()),
            )
            outcome = await self.backend.buy_ticket(actor=actor, request=request)
            outcome = attrs.evolve(outcome, quoted_total=buyer_total(listing.resale_price or 0))
            Logger.base.info(
                f'🔁 [PURCHASE] Resale ticket {listing.id} bought by user {actor.user_id}'
            )
            return outcome
