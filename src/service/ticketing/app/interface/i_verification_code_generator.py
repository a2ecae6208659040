"""
Verification Code Generator Interface

The verification code embedded in a ticket's QR payload. Two schemes sit
behind this port:
- legacy: reversible display code derived from public fields (low assurance)
- hmac: keyed digest over the same fields, only the server can produce it
"""

from abc import ABC, abstractmethod

from src.service.ticketing.domain.value_object.verification_token import VerificationToken


class IVerificationCodeGenerator(ABC):
    scheme: str

    @abstractmethod
    def generate(self, *, code: str, event_id: str, user_id: str, timestamp: int) -> str:
        pass

    @abstractmethod
    def matches(self, token: VerificationToken) -> bool:
        """Recompute the code for the token's fields and compare."""
        pass
