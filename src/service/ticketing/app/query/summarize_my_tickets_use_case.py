from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.my_tickets_summary import EventTicketsSummary
from src.service.ticketing.app.interface.i_ticketing_backend import ITicketingBackend
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo


class SummarizeMyTicketsUseCase:
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
    async def summarize(self, *, actor: CurrentUserInfo) -> list[EventTicketsSummary]:
        """
        Group the caller's tickets by event, in the order events first appear.

        Status comes from TicketEntity.status, which already resolves
        used-and-listed to USED.
        """
        tickets = await self.backend.list_my_tickets(actor=actor)

        grouped: dict[str, EventTicketsSummary] = {}
        for ticket in tickets:
            summary = grouped.get(ticket.event_id)
            if summary is None:
                summary = grouped[ticket.event_id] = EventTicketsSummary(event_id=ticket.event_id)
            summary.tickets.append(ticket)
            summary.status_summary.count(ticket.status)

        return list(grouped.values())
