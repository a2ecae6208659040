from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidPayoutDestination
from src.service.ticketing.domain.value_object.bank import BankRegistry


ACCOUNT_NUMBER_LENGTH = 10


def is_valid_account_number(account_number: str) -> bool:
    # str.isdigit() accepts other unicode digits; payout rails only take ASCII
    return (
        len(account_number) == ACCOUNT_NUMBER_LENGTH
        and account_number.isascii()
        and account_number.isdigit()
    )


@attrs.define(frozen=True)
class PayoutDestination:
    bank_code: str
    account_number: str = attrs.field(repr=False)
    narration: Optional[str] = None

    @classmethod
    def create(
        cls,
        *,
        bank_code: str,
        account_number: str,
        registry: BankRegistry,
        narration: Optional[str] = None,
    ) -> 'PayoutDestination':
        bank_code = (bank_code or '').strip()
        account_number = (account_number or '').strip()

        if not bank_code:
            raise InvalidPayoutDestination('Please select a bank')
        if bank_code not in registry:
            raise InvalidPayoutDestination(f'Unknown bank code: {bank_code}')
        if not is_valid_account_number(account_number):
            raise InvalidPayoutDestination(
                f'Account number must be exactly {ACCOUNT_NUMBER_LENGTH} digits'
            )

        return cls(
            bank_code=bank_code,
            account_number=account_number,
            narration=(narration or '').strip() or None,
        )
