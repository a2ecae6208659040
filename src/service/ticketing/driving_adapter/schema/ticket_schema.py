from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.service.ticketing.app.dto.issued_verification_token import IssuedVerificationToken
from src.service.ticketing.app.dto.my_tickets_summary import EventTicketsSummary
from src.service.ticketing.app.dto.ticket_verification_result import TicketVerificationResult
from src.service.ticketing.domain.entity.ticket_entity import TicketEntity
from src.service.ticketing.domain.resale_fee_policy import ResaleQuote, buyer_total
from src.service.ticketing.domain.value_object.purchase_request import (
    MAX_TICKETS_PER_PURCHASE,
    PurchaseOutcome,
)


# ============================ Requests ============================


class ListTicketForResaleRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'resale_price': 1000,
                'bank_code': '058',
                'account_number': '0123456789',
                'narration': 'Resale payout',
            }
        }
    )

    resale_price: Decimal
    bank_code: str
    account_number: str
    narration: Optional[str] = None


class PurchaseTicketRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'examples': [
                {'event_id': 'evt_1', 'quantity': 2, 'ticket_category_id': 'cat_vip'},
                {'event_id': 'evt_1', 'resale_ticket_id': 'tkt_42'},
            ]
        }
    )

    event_id: str
    quantity: int = Field(default=1, ge=1, le=MAX_TICKETS_PER_PURCHASE)
    ticket_category_id: Optional[str] = None
    resale_ticket_id: Optional[str] = None

    @model_validator(mode='after')
    def _one_purchase_target(self) -> 'PurchaseTicketRequest':
        if self.ticket_category_id and self.resale_ticket_id:
            raise ValueError('Specify either a ticket category or a resale ticket, not both')
        if self.resale_ticket_id and self.quantity != 1:
            raise ValueError('A resale ticket is bought one at a time')
        return self


# ============================ Responses ============================


class TicketResponse(BaseModel):
    id: str
    code: str
    event_id: str
    owner_id: str
    status: str
    status_text: str
    resale_price: Optional[Decimal] = None
    resale_count: int = 0
    resale_commission: Optional[Decimal] = None
    listed_at: Optional[datetime] = None
    sold_to: Optional[str] = None
    seat_number: Optional[str] = None

    @classmethod
    def from_entity(cls, ticket: TicketEntity) -> 'TicketResponse':
        return cls(
            id=ticket.id,
            code=ticket.code,
            event_id=ticket.event_id,
            owner_id=ticket.owner_id,
            status=ticket.status.value,
            status_text=ticket.display_status_text(),
            resale_price=ticket.resale_price,
            resale_count=ticket.resale_count,
            resale_commission=ticket.resale_commission,
            listed_at=ticket.listed_at,
            sold_to=ticket.sold_to,
            seat_number=ticket.seat_number,
        )


class ResaleListingResponse(TicketResponse):
    buyer_total: Decimal

    @classmethod
    def from_entity(cls, ticket: TicketEntity) -> 'ResaleListingResponse':
        base = TicketResponse.from_entity(ticket).model_dump()
        return cls(**base, buyer_total=buyer_total(ticket.resale_price or 0))


class ResaleQuoteResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'resale_price': 1000,
                'platform_commission': 50,
                'seller_payout': 950,
                'buyer_service_fee': 50,
                'buyer_total': 1050,
            }
        }
    )

    resale_price: Decimal
    platform_commission: Decimal
    seller_payout: int
    buyer_service_fee: Decimal
    buyer_total: Decimal

    @classmethod
    def from_quote(cls, quote: ResaleQuote) -> 'ResaleQuoteResponse':
        return cls(
            resale_price=quote.resale_price,
            platform_commission=quote.platform_commission,
            seller_payout=quote.seller_payout,
            buyer_service_fee=quote.buyer_service_fee,
            buyer_total=quote.buyer_total,
        )


class PurchaseResponse(BaseModel):
    checkout_url: Optional[str] = None
    confirmed: bool
    requires_payment: bool
    message: str = ''
    quoted_total: Optional[Decimal] = None

    @classmethod
    def from_outcome(cls, outcome: PurchaseOutcome) -> 'PurchaseResponse':
        return cls(
            checkout_url=outcome.checkout_url,
            confirmed=outcome.confirmed,
            requires_payment=outcome.requires_payment,
            message=outcome.message,
            quoted_total=outcome.quoted_total,
        )


class StatusSummaryResponse(BaseModel):
    active: int
    listed: int
    used: int


class EventTicketsSummaryResponse(BaseModel):
    event_id: str
    ticket_count: int
    status_summary: StatusSummaryResponse
    tickets: List[TicketResponse]

    @classmethod
    def from_summary(cls, summary: EventTicketsSummary) -> 'EventTicketsSummaryResponse':
        return cls(
            event_id=summary.event_id,
            ticket_count=summary.ticket_count,
            status_summary=StatusSummaryResponse(
                active=summary.status_summary.active,
                listed=summary.status_summary.listed,
                used=summary.status_summary.used,
            ),
            tickets=[TicketResponse.from_entity(ticket) for ticket in summary.tickets],
        )


class VerificationTokenResponse(BaseModel):
    ticket_id: str
    event_id: str
    user_id: str
    code: str
    verification_code: str
    timestamp: int
    verification_url: str
    qr_code_png_base64: str

    @classmethod
    def from_issued(cls, issued: IssuedVerificationToken) -> 'VerificationTokenResponse':
        token = issued.token
        return cls(
            ticket_id=token.ticket_id,
            event_id=token.event_id,
            user_id=token.user_id,
            code=token.code,
            verification_code=token.verification_code,
            timestamp=token.timestamp,
            verification_url=issued.verification_url,
            qr_code_png_base64=issued.qr_code_png_base64,
        )


class TicketVerificationResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'is_valid': True,
                'scanned_at': '2025-01-10T19:30:00Z',
                'ticket_id': 't1',
                'event_id': 'e1',
                'user_id': 'u1',
                'code': 'ABC',
                'ticket': None,
                'error': None,
            }
        }
    )

    is_valid: bool
    scanned_at: datetime
    ticket_id: Optional[str] = None
    event_id: Optional[str] = None
    user_id: Optional[str] = None
    code: Optional[str] = None
    ticket: Optional[TicketResponse] = None
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: TicketVerificationResult) -> 'TicketVerificationResponse':
        token = result.token
        return cls(
            is_valid=result.is_valid,
            scanned_at=result.scanned_at,
            ticket_id=token.ticket_id if token else None,
            event_id=token.event_id if token else None,
            user_id=token.user_id if token else None,
            code=token.code if token else None,
            ticket=TicketResponse.from_entity(result.ticket) if result.ticket else None,
            error=result.error,
        )
