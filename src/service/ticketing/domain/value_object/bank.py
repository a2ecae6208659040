from typing import Iterable, Optional

import attrs


@attrs.define(frozen=True)
class Bank:
    code: str
    name: str


@attrs.define(frozen=True)
class BankRegistry:
    """Snapshot of the bank codes a seller may pick as payout destination."""

    banks: tuple[Bank, ...] = attrs.field(converter=tuple, factory=tuple)

    @classmethod
    def from_banks(cls, banks: Iterable[Bank]) -> 'BankRegistry':
        return cls(banks=tuple(banks))

    def find(self, code: str) -> Optional[Bank]:
        for bank in self.banks:
            if bank.code == code:
                return bank
        return None

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.find(code) is not None

    def __len__(self) -> int:
        return len(self.banks)
