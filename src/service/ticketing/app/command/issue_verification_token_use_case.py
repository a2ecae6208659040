import time
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, TicketStateConflict
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.issued_verification_token import IssuedVerificationToken
from src.service.ticketing.app.interface.i_qr_code_renderer import IQrCodeRenderer
from src.service.ticketing.app.interface.i_verification_code_generator import (
    IVerificationCodeGenerator,
)
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo
from src.service.ticketing.domain.value_object.verification_token import VerificationToken
from src.service.ticketing.domain.verification_token_codec import build_verification_url


class IssueVerificationTokenUseCase:
    def __init__(
        self,
        *,
        code_generator: IVerificationCodeGenerator,
        qr_renderer: IQrCodeRenderer,
        settings: Settings,
    ) -> None:
        self.code_generator = code_generator
        self.qr_renderer = qr_renderer
        self.settings = settings

    @classmethod
    @inject
    def depends(
        cls,
        code_generator: IVerificationCodeGenerator = Depends(
            Provide[Container.verification_code_generator]
        ),
        qr_renderer: IQrCodeRenderer = Depends(Provide[Container.qr_code_renderer]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(code_generator=code_generator, qr_renderer=qr_renderer, settings=settings)

    @Logger.io
    def issue(
        self,
        *,
        actor: CurrentUserInfo,
        ticket: TicketEntity,
        now_ms: Optional[int] = None,
    ) -> IssuedVerificationToken:
        """
        Build the QR payload for a ticket the caller holds.

        Raises:
            ForbiddenError: caller does not own the ticket
            TicketStateConflict: ticket has already been used
        """
        if not ticket.is_owned_by(actor.user_id):
            raise ForbiddenError('You can only display your own tickets')
        if ticket.is_used:
            raise TicketStateConflict('Ticket has already been used')

        timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
        token = VerificationToken(
            ticket_id=ticket.id,
            event_id=ticket.event_id,
            user_id=ticket.owner_id,
            code=ticket.code,
            verification_code=self.code_generator.generate(
                code=ticket.code,
                event_id=ticket.event_id,
                user_id=ticket.owner_id,
                timestamp=timestamp,
            ),
            timestamp=timestamp,
        )
        url = build_verification_url(token, self.settings.APP_ORIGIN)

        return IssuedVerificationToken(
            token=token,
            verification_url=url,
            qr_code_png_base64=self.qr_renderer.render_png_base64(url),
        )
