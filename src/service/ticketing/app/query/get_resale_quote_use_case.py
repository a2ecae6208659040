from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.domain.resale_fee_policy import (
    Amount,
    ResaleQuote,
    validate_resale_price,
)


class GetResaleQuoteUseCase:
    def __init__(self, *, settings: Settings) -> None:
        self.settings = settings

    @classmethod
    @inject
    def depends(
        cls,
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(settings=settings)

    @Logger.io
    def quote(self, *, resale_price: Amount) -> ResaleQuote:
        """Seller payout and buyer total for a prospective list price."""
        price = validate_resale_price(resale_price, max_price=self.settings.MAX_RESALE_PRICE)
        return ResaleQuote.for_price(price)
