from decimal import Decimal
from typing import Any

import attrs

from src.service.ticketing.domain.value_object.payout_destination import PayoutDestination


@attrs.define(frozen=True)
class ResaleListingRequest:
    ticket_id: str
    resale_price: Decimal
    payout: PayoutDestination
    idempotency_key: str

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            'ticketId': self.ticket_id,
            'resalePrice': float(self.resale_price),
            'bankCode': self.payout.bank_code,
            'accountNumber': self.payout.account_number,
        }
        if self.payout.narration:
            payload['narration'] = self.payout.narration
        return payload
