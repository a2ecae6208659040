from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import (
    SelfPurchaseRejected,
    TicketNotListable,
    TicketStateConflict,
)
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.domain.resale_fee_policy import to_decimal


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    # JS toISOString() ends with 'Z'
    return datetime.fromisoformat(str(value).replace('Z', '+00:00'))


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _optional_decimal(value: Any) -> Optional[Decimal]:
    return None if value is None else to_decimal(value)


@attrs.define(frozen=True)
class TicketEntity:
    """
    One admission right to one event.

    Immutable: every transition returns a new entity, so a caller's copy is
    only replaced once the backend has confirmed the change.

    Invariants:
    - resale_price / listed_at are set if and only if status is LISTED
    - resale_count never decreases
    - USED is terminal
    """

    id: str
    code: str
    event_id: str
    owner_id: str
    status: TicketStatus = TicketStatus.ACTIVE
    resale_price: Optional[Decimal] = attrs.field(default=None)
    resale_count: int = attrs.field(default=0)
    resale_commission: Optional[Decimal] = None
    listed_at: Optional[datetime] = None
    sold_to: Optional[str] = None
    seat_number: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @resale_price.validator
    def _check_resale_price(self, attribute: attrs.Attribute, value: Optional[Decimal]) -> None:
        if self.status is TicketStatus.LISTED:
            if value is None or value <= 0:
                raise ValueError('Listed ticket must carry a positive resale price')
        elif value is not None:
            raise ValueError('Only listed tickets carry a resale price')

    @resale_count.validator
    def _check_resale_count(self, attribute: attrs.Attribute, value: int) -> None:
        if value < 0:
            raise ValueError('resale_count cannot be negative')

    # ============================ Transport mapping ============================

    @classmethod
    def from_transport(cls, data: dict[str, Any]) -> 'TicketEntity':
        """Build from the remote API's camelCase ticket representation."""
        status = TicketStatus.from_flags(
            is_used=bool(data.get('isUsed')),
            is_listed=bool(data.get('isListed')),
        )
        is_listed = status is TicketStatus.LISTED
        event = data.get('event') or {}

        return cls(
            id=str(data['id']),
            code=str(data.get('code') or ''),
            event_id=str(data.get('eventId') or event.get('id') or ''),
            owner_id=str(data.get('userId') or ''),
            status=status,
            resale_price=_optional_decimal(data.get('resalePrice')) if is_listed else None,
            resale_count=int(data.get('resaleCount') or 0),
            resale_commission=_optional_decimal(data.get('resaleCommission')),
            listed_at=_parse_datetime(data.get('listedAt')) if is_listed else None,
            sold_to=data.get('soldTo') or None,
            seat_number=data.get('seatNumber') or None,
            created_at=_parse_datetime(data.get('createdAt')),
            updated_at=_parse_datetime(data.get('updatedAt')),
        )

    def to_transport(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'code': self.code,
            'eventId': self.event_id,
            'userId': self.owner_id,
            'status': self.status.value,
            'isUsed': self.is_used,
            'isListed': self.is_listed,
            'resalePrice': float(self.resale_price) if self.resale_price is not None else None,
            'resaleCount': self.resale_count,
            'resaleCommission': (
                float(self.resale_commission) if self.resale_commission is not None else None
            ),
            'listedAt': _format_datetime(self.listed_at),
            'soldTo': self.sold_to,
            'seatNumber': self.seat_number,
            'createdAt': _format_datetime(self.created_at),
            'updatedAt': _format_datetime(self.updated_at),
        }

    # ============================ Queries ============================

    @property
    def is_used(self) -> bool:
        return self.status is TicketStatus.USED

    @property
    def is_listed(self) -> bool:
        return self.status is TicketStatus.LISTED

    def can_be_listed(self) -> bool:
        return self.status is TicketStatus.ACTIVE

    def display_status_text(self) -> str:
        return self.status.display_text

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner_id == user_id

    # ============================ Transitions ============================

    @Logger.io
    def list_for_resale(
        self, *, resale_price: Decimal, listed_at: Optional[datetime] = None
    ) -> 'TicketEntity':
        """
        ACTIVE -> LISTED

        Raises:
            TicketNotListable: ticket is USED or already LISTED
        """
        if self.is_used:
            raise TicketNotListable('Used tickets cannot be listed for resale')
        if self.is_listed:
            raise TicketNotListable('Ticket is already listed for resale')

        now = listed_at or datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=TicketStatus.LISTED,
            resale_price=resale_price,
            listed_at=now,
            updated_at=now,
        )

    def ensure_purchasable_by(self, buyer_id: str) -> None:
        if not self.is_listed:
            raise TicketStateConflict('Ticket is no longer listed for resale')
        if buyer_id == self.owner_id or (self.sold_to is not None and buyer_id == self.sold_to):
            raise SelfPurchaseRejected()

    @Logger.io
    def transfer_to(
        self,
        *,
        buyer_id: str,
        commission: Decimal,
        sold_at: Optional[datetime] = None,
    ) -> 'TicketEntity':
        """
        LISTED -> ACTIVE under the buyer's ownership

        resale_count accumulates across resales; resale_commission keeps only
        the most recent sale's commission.

        Raises:
            TicketStateConflict: ticket is not LISTED
            SelfPurchaseRejected: buyer already owns (or just bought) the ticket
        """
        self.ensure_purchasable_by(buyer_id)

        now = sold_at or datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=TicketStatus.ACTIVE,
            owner_id=buyer_id,
            sold_to=buyer_id,
            resale_price=None,
            listed_at=None,
            resale_count=self.resale_count + 1,
            resale_commission=commission,
            updated_at=now,
        )

    @Logger.io
    def redeem(self, *, redeemed_at: Optional[datetime] = None) -> 'TicketEntity':
        """
        ACTIVE -> USED (terminal)

        Raises:
            TicketStateConflict: ticket already used, or still listed for resale
        """
        if self.is_used:
            raise TicketStateConflict('Ticket has already been used')
        if self.is_listed:
            raise TicketStateConflict('Ticket is listed for resale and cannot be redeemed')

        return attrs.evolve(
            self,
            status=TicketStatus.USED,
            updated_at=redeemed_at or datetime.now(timezone.utc),
        )
