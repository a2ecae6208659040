"""Ticketing Domain Value Objects"""

from src.service.ticketing.domain.value_object.bank import Bank, BankRegistry
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo
from src.service.ticketing.domain.value_object.payout_destination import PayoutDestination
from src.service.ticketing.domain.value_object.purchase_request import (
    PurchaseOutcome,
    PurchaseRequest,
)
from src.service.ticketing.domain.value_object.resale_listing_request import ResaleListingRequest
from src.service.ticketing.domain.value_object.verification_token import VerificationToken

__all__ = [
    'Bank',
    'BankRegistry',
    'CurrentUserInfo',
    'PayoutDestination',
    'PurchaseOutcome',
    'PurchaseRequest',
    'ResaleListingRequest',
    'VerificationToken',
]
