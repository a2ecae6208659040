from datetime import datetime
from typing import Optional

import attrs

from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.value_object.verification_token import VerificationToken


@attrs.define(frozen=True)
class TicketVerificationResult:
    """
    Verdict shown at the door.

    error is set when the scanned data never reached the backend (malformed
    or incomplete token); is_valid is then always False.
    """

    is_valid: bool
    scanned_at: datetime
    token: Optional[VerificationToken] = None
    ticket: Optional[TicketEntity] = None
    error: Optional[str] = None
