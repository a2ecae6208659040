from abc import ABC, abstractmethod

from src.service.ticketing.domain.value_object.bank import BankRegistry


class IBankRegistry(ABC):
    """Port to the bank-code directory used to validate payout destinations."""

    @abstractmethod
    async def get_registry(self) -> BankRegistry:
        """
        Raises:
            NetworkOrServerError: directory unreachable or malformed
        """
        pass
