from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_ticketing_backend import ITicketingBackend
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo


class ListResaleListingsUseCase:
    def __init__(self, *, backend: ITicketingBackend) -> None:
        self.backend = backend

    @classmethod
    @inject
    def depends(
        cls,
        backend: ITicketingBackend = Depends(Provide[Container.ticketing_backend]),
    ) -> Self:
        return cls(backend=backend)

    @Logger.io
    async def list_for_event(
        self, *, event_id: str, actor: CurrentUserInfo
    ) -> list[TicketEntity]:
        """Tickets the actor could buy: still LISTED and held by someone else."""
        tickets = await self.backend.list_resale_listings(event_id=event_id)
        listings = [
            ticket
            for ticket in tickets
            if ticket.is_listed and not ticket.is_owned_by(actor.user_id)
        ]

        Logger.base.info(
            f'🏷️ [RESALE] {len(listings)} listing(s) for event {event_id} '
            f'({len(tickets) - len(listings)} filtered)'
        )
        return listings
