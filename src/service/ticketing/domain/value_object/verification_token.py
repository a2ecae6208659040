from typing import Any

import attrs


REQUIRED_TOKEN_FIELDS = ('ticketId', 'eventId', 'userId', 'verificationCode')


@attrs.define(frozen=True)
class VerificationToken:
    """Payload embedded in a ticket's QR code."""

    ticket_id: str
    event_id: str
    user_id: str
    code: str
    verification_code: str
    timestamp: int  # issuance time, ms since epoch

    def to_wire(self) -> dict[str, Any]:
        # Key order is part of the compact JSON the scanner sees
        return {
            'ticketId': self.ticket_id,
            'eventId': self.event_id,
            'userId': self.user_id,
            'code': self.code,
            'verificationCode': self.verification_code,
            'timestamp': self.timestamp,
        }
