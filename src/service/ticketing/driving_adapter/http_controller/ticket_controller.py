from decimal import Decimal
from typing import List, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Header, Query, status

from src.platform.config.di import Container
from src.platform.exception.exceptions import TicketStateConflict
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.issue_verification_token_use_case import (
    IssueVerificationTokenUseCase,
)
from src.service.ticketing.app.command.list_ticket_for_resale_use_case import (
    ListTicketForResaleUseCase,
)
from src.service.ticketing.app.command.purchase_ticket_use_case import PurchaseTicketUseCase
from src.service.ticketing.app.interface.i_ticketing_backend import ITicketingBackend
from src.service.ticketing.app.query.get_resale_quote_use_case import GetResaleQuoteUseCase
from src.service.ticketing.app.query.list_resale_listings_use_case import (
    ListResaleListingsUseCase,
)
from src.service.ticketing.app.query.summarize_my_tickets_use_case import (
    SummarizeMyTicketsUseCase,
)
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo
from src.service.ticketing.driving_adapter.http_controller.auth.current_user import (
    get_current_user,
)
from src.service.ticketing.driving_adapter.schema.ticket_schema import (
    EventTicketsSummaryResponse,
    ListTicketForResaleRequest,
    PurchaseResponse,
    PurchaseTicketRequest,
    ResaleListingResponse,
    ResaleQuoteResponse,
    TicketResponse,
    VerificationTokenResponse,
)


router = APIRouter()


@router.get('/my', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_tickets(
    current_user: CurrentUserInfo = Depends(get_current_user),
    use_case: SummarizeMyTicketsUseCase = Depends(SummarizeMyTicketsUseCase.depends),
) -> List[EventTicketsSummaryResponse]:
    summaries = await use_case.summarize(actor=current_user)
    return [EventTicketsSummaryResponse.from_summary(summary) for summary in summaries]


@router.get('/resale-quote', status_code=status.HTTP_200_OK)
@Logger.io
async def get_resale_quote(
    resale_price: Decimal = Query(...),
    use_case: GetResaleQuoteUseCase = Depends(GetResaleQuoteUseCase.depends),
) -> ResaleQuoteResponse:
    return ResaleQuoteResponse.from_quote(use_case.quote(resale_price=resale_price))


# ============================ Resale ============================


@router.post('/{ticket_id}/resale', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def list_ticket_for_resale(
    ticket_id: str,
    request: ListTicketForResaleRequest,
    idempotency_key: Optional[str] = Header(None, alias='Idempotency-Key'),
    current_user: CurrentUserInfo = Depends(get_current_user),
    backend: ITicketingBackend = Depends(Provide[Container.ticketing_backend]),
    use_case: ListTicketForResaleUseCase = Depends(ListTicketForResaleUseCase.depends),
) -> TicketResponse:
    # Always act on the backend's current copy, never a client-supplied one
    ticket = await backend.get_ticket(actor=current_user, ticket_id=ticket_id)

    listed_ticket = await use_case.list_for_resale(
        actor=current_user,
        ticket=ticket,
        resale_price=request.resale_price,
        bank_code=request.bank_code,
        account_number=request.account_number,
        narration=request.narration,
        idempotency_key=idempotency_key,
    )
    return TicketResponse.from_entity(listed_ticket)


@router.get('/event/{event_id}/resale', status_code=status.HTTP_200_OK)
@Logger.io
async def list_resale_listings(
    event_id: str,
    current_user: CurrentUserInfo = Depends(get_current_user),
    use_case: ListResaleListingsUseCase = Depends(ListResaleListingsUseCase.depends),
) -> List[ResaleListingResponse]:
    listings = await use_case.list_for_event(event_id=event_id, actor=current_user)
    return [ResaleListingResponse.from_entity(ticket) for ticket in listings]


# ============================ Purchase ============================


@router.post('/purchase', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def purchase_ticket(
    request: PurchaseTicketRequest,
    idempotency_key: Optional[str] = Header(None, alias='Idempotency-Key'),
    current_user: CurrentUserInfo = Depends(get_current_user),
    backend: ITicketingBackend = Depends(Provide[Container.ticketing_backend]),
    use_case: PurchaseTicketUseCase = Depends(PurchaseTicketUseCase.depends),
) -> PurchaseResponse:
    if request.resale_ticket_id:
        listings = await backend.list_resale_listings(event_id=request.event_id)
        listing = next((t for t in listings if t.id == request.resale_ticket_id), None)
        if listing is None:
            raise TicketStateConflict('Ticket is no longer listed for resale')

        outcome = await use_case.purchase_resale(
            actor=current_user,
            listing=listing,
            quantity=request.quantity,
            idempotency_key=idempotency_key,
        )
    else:
        event = await backend.get_event(event_id=request.event_id)
        outcome = await use_case.purchase_primary(
            actor=current_user,
            event=event,
            quantity=request.quantity,
            ticket_category_id=request.ticket_category_id,
            idempotency_key=idempotency_key,
        )

    return PurchaseResponse.from_outcome(outcome)


# ============================ Verification ============================


@router.get('/{ticket_id}/verification', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def issue_verification_token(
    ticket_id: str,
    current_user: CurrentUserInfo = Depends(get_current_user),
    backend: ITicketingBackend = Depends(Provide[Container.ticketing_backend]),
    use_case: IssueVerificationTokenUseCase = Depends(IssueVerificationTokenUseCase.depends),
) -> VerificationTokenResponse:
    ticket = await backend.get_ticket(actor=current_user, ticket_id=ticket_id)
    issued = use_case.issue(actor=current_user, ticket=ticket)
    return VerificationTokenResponse.from_issued(issued)
