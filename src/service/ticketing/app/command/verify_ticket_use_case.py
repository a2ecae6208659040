from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import MalformedToken
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.ticket_verification_result import TicketVerificationResult
from src.service.ticketing.app.interface.i_ticketing_backend import ITicketingBackend
from src.service.ticketing.app.interface.i_verification_code_generator import (
    IVerificationCodeGenerator,
)
from src.service.ticketing.domain.value_object.verification_token import VerificationToken
from src.service.ticketing.domain.verification_token_codec import decode_verification_data


INVALID_LINK_MESSAGE = 'Invalid verification link'
VERIFICATION_CODE_MISMATCH_MESSAGE = 'Ticket verification code does not match'


class VerifyTicketUseCase:
    """
    Resolve a scanned verification payload into a verdict.

    Flow:
    1. Decode the `data` parameter; malformed -> invalid verdict, no backend call
    2. hmac scheme only: recompute the verification code; mismatch -> invalid verdict
    3. Ask the backend with {ticketId, code, eventId}; its answer is final

    Backend failures are not folded into an "invalid" verdict: they propagate
    as NetworkOrServerError so the scanner can retry instead of turning the
    holder away.
    """

    def __init__(
        self,
        *,
        backend: ITicketingBackend,
        code_generator: IVerificationCodeGenerator,
    ) -> None:
        self.backend = backend
        self.code_generator = code_generator
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        backend: ITicketingBackend = Depends(Provide[Container.ticketing_backend]),
        code_generator: IVerificationCodeGenerator = Depends(
            Provide[Container.verification_code_generator]
        ),
    ) -> Self:
        return cls(backend=backend, code_generator=code_generator)

    @Logger.io
    async def verify(self, *, data: Optional[str]) -> TicketVerificationResult:
        scanned_at = datetime.now(timezone.utc)

        if not data:
            return TicketVerificationResult(
                is_valid=False, scanned_at=scanned_at, error=INVALID_LINK_MESSAGE
            )

        token = decode_verification_data(data)
        if token is None:
            Logger.base.warning('⚠️ [VERIFY] Malformed verification payload rejected')
            return TicketVerificationResult(
                is_valid=False, scanned_at=scanned_at, error=MalformedToken().message
            )

        # Legacy display codes are not credentials; only keyed codes gate the lookup
        if self.code_generator.scheme == 'hmac' and not self.check_verification_code(token=token):
            Logger.base.warning(f'⚠️ [VERIFY] Verification code mismatch for {token.ticket_id}')
            return TicketVerificationResult(
                is_valid=False,
                scanned_at=scanned_at,
                token=token,
                error=VERIFICATION_CODE_MISMATCH_MESSAGE,
            )

        with self.tracer.start_as_current_span(
            'use_case.verify_ticket',
            attributes={'ticket.id': token.ticket_id, 'event.id': token.event_id},
        ):
            is_valid, ticket = await self.backend.verify_ticket(
                ticket_id=token.ticket_id, code=token.code, event_id=token.event_id
            )

        Logger.base.info(
            f'{"✅" if is_valid else "❌"} [VERIFY] Ticket {token.ticket_id} '
            f'for event {token.event_id}: {"valid" if is_valid else "invalid"}'
        )
        return TicketVerificationResult(
            is_valid=is_valid, scanned_at=scanned_at, token=token, ticket=ticket
        )

    @Logger.io
    def check_verification_code(self, *, token: VerificationToken) -> bool:
        """Server-side authenticity check of the token's verification code."""
        return self.code_generator.matches(token)
