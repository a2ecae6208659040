from typing import Any

import httpx
import orjson

from src.platform.exception.exceptions import NetworkOrServerError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_bank_registry import IBankRegistry
from src.service.ticketing.domain.value_object.bank import Bank, BankRegistry
from src.service.ticketing.driven_adapter.backend.backend_error_translator import (
    translate_transport_error,
)


def _parse_banks(body: Any) -> list[Bank]:
    # Paystack-style directories wrap the list in `data`
    items = body.get('data') if isinstance(body, dict) else body
    if not isinstance(items, list):
        raise NetworkOrServerError('Bank directory returned an unexpected response')

    banks = []
    for item in items:
        if not isinstance(item, dict) or not item.get('code'):
            continue
        banks.append(Bank(code=str(item['code']), name=str(item.get('name') or item['code'])))
    return banks


class HttpBankRegistry(IBankRegistry):
    def __init__(self, *, client: httpx.AsyncClient, bank_codes_url: str) -> None:
        self.client = client
        self.bank_codes_url = bank_codes_url

    @Logger.io(truncate_content=True)
    async def get_registry(self) -> BankRegistry:
        try:
            response = await self.client.get(self.bank_codes_url)
        except httpx.HTTPError as e:
            raise translate_transport_error(e) from e

        if response.is_error:
            raise NetworkOrServerError('Failed to fetch bank codes')

        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise NetworkOrServerError('Failed to fetch bank codes') from e

        registry = BankRegistry.from_banks(_parse_banks(body))
        Logger.base.debug(f'[BANKS] Loaded {len(registry)} bank codes')
        return registry
