from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.verify_ticket_use_case import VerifyTicketUseCase
from src.service.ticketing.driving_adapter.schema.ticket_schema import (
    TicketVerificationResponse,
)


router = APIRouter()


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def verify_ticket(
    data: Optional[str] = Query(None),
    use_case: VerifyTicketUseCase = Depends(VerifyTicketUseCase.depends),
) -> TicketVerificationResponse:
    """
    Landing endpoint for scanned QR codes.

    Always answers 200 with a verdict; malformed payloads are an invalid
    verdict, not a client error.
    """
    result = await use_case.verify(data=data)
    return TicketVerificationResponse.from_result(result)
