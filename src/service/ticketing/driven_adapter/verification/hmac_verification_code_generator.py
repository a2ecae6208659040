import hashlib
import hmac

from pydantic import SecretStr

from src.service.ticketing.app.interface.i_verification_code_generator import (
    IVerificationCodeGenerator,
)
from src.service.ticketing.domain.value_object.verification_token import VerificationToken


HMAC_CODE_LENGTH = 16  # hex chars, short enough for a dense QR code


class HmacVerificationCodeGenerator(IVerificationCodeGenerator):
    """HMAC-SHA256 over ticket code, event, owner and issuance time with a server-held key."""

    scheme = 'hmac'

    def __init__(self, *, secret: SecretStr) -> None:
        secret_value = secret.get_secret_value()
        if not secret_value:
            raise ValueError('VERIFICATION_CODE_SECRET must be set for the hmac scheme')
        self._key = secret_value.encode('utf-8')

    def generate(self, *, code: str, event_id: str, user_id: str, timestamp: int) -> str:
        # Newline-separated so field boundaries cannot be shifted
        message = '\n'.join((code, event_id, user_id, str(timestamp)))
        digest = hmac.new(self._key, message.encode('utf-8'), hashlib.sha256).hexdigest()
        return digest[:HMAC_CODE_LENGTH].upper()

    def matches(self, token: VerificationToken) -> bool:
        expected = self.generate(
            code=token.code,
            event_id=token.event_id,
            user_id=token.user_id,
            timestamp=token.timestamp,
        )
        return hmac.compare_digest(
            expected.encode(), token.verification_code.upper().encode('utf-8')
        )
