from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    ForbiddenError,
    TicketNotListable,
    TicketStateConflict,
)
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_bank_registry import IBankRegistry
from src.service.ticketing.app.interface.i_ticketing_backend import ITicketingBackend
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.resale_fee_policy import Amount, validate_resale_price
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo
from src.service.ticketing.domain.value_object.payout_destination import PayoutDestination
from src.service.ticketing.domain.value_object.resale_listing_request import (
    ResaleListingRequest,
)


class ListTicketForResaleUseCase:
    """
    List a ticket for resale (ACTIVE -> LISTED)

    Flow:
    1. State, then ownership, checks against the backend copy of the ticket
    2. Price validation (> 0, whole cents, <= MAX_RESALE_PRICE)
    3. Payout destination validation against the bank registry
    4. Single backend call; the backend's ticket is returned as-is

    Steps 1-2 never touch the network. The caller's ticket object is never
    mutated, so a failed submission leaves the last confirmed state in place.
    """

    def __init__(
        self,
        *,
        backend: ITicketingBackend,
        bank_registry: IBankRegistry,
        settings: Settings,
    ) -> None:
        self.backend = backend
        self.bank_registry = bank_registry
        self.settings = settings
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        backend: ITicketingBackend = Depends(Provide[Container.ticketing_backend]),
        bank_registry: IBankRegistry = Depends(Provide[Container.bank_registry]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(backend=backend, bank_registry=bank_registry, settings=settings)

    @Logger.io
    async def list_for_resale(
        self,
        *,
        actor: CurrentUserInfo,
        ticket: TicketEntity,
        resale_price: Amount,
        bank_code: str,
        account_number: str,
        narration: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> TicketEntity:
        """
        Raises:
            ForbiddenError: caller does not own the ticket
            TicketNotListable: ticket is USED or already LISTED
            InvalidResalePrice: price <= 0 or above the configured maximum
            InvalidPayoutDestination: unknown bank code or malformed account number
            TicketStateConflict: backend state differs from the caller's copy
            NetworkOrServerError: backend unreachable
        """
        with self.tracer.start_as_current_span(
            'use_case.list_ticket_for_resale',
            attributes={'ticket.id': ticket.id, 'user.id': actor.user_id},
        ):
            if not ticket.can_be_listed():
                raise TicketNotListable(
                    'Used tickets cannot be listed for resale'
                    if ticket.is_used
                    else 'Ticket is already listed for resale'
                )
            if not ticket.is_owned_by(actor.user_id):
                raise ForbiddenError('You can only resell your own tickets')

            price = validate_resale_price(resale_price, max_price=self.settings.MAX_RESALE_PRICE)

            registry = await self.bank_registry.get_registry()
            payout = PayoutDestination.create(
                bank_code=bank_code,
                account_number=account_number,
                narration=narration,
                registry=registry,
            )

            request = ResaleListingRequest(
                ticket_id=ticket.id,
                resale_price=price,
                payout=payout,
                idempotency_key=idempotency_key or str(uuid_utils.uuid7()),
            )
            listed_ticket = await self.backend.list_for_resale(actor=actor, request=request)
            if not listed_ticket.is_listed:
                raise TicketStateConflict('Listing was not applied, please refresh the ticket')

            Logger.base.info(
                f'🏷️ [RESALE] Ticket {ticket.id} listed at {price} by user {actor.user_id}'
            )
            return listed_ticket
