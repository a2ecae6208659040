import attrs

from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


@attrs.define
class StatusSummary:
    active: int = 0
    listed: int = 0
    used: int = 0

    def count(self, status: TicketStatus) -> None:
        if status is TicketStatus.USED:
            self.used += 1
        elif status is TicketStatus.LISTED:
            self.listed += 1
        else:
            self.active += 1


@attrs.define
class EventTicketsSummary:
    event_id: str
    tickets: list[TicketEntity] = attrs.field(factory=list)
    status_summary: StatusSummary = attrs.field(factory=StatusSummary)

    @property
    def ticket_count(self) -> int:
        return len(self.tickets)
