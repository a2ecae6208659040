import base64
import hmac
import re

from src.service.ticketing.app.interface.i_verification_code_generator import (
    IVerificationCodeGenerator,
)
from src.service.ticketing.domain.value_object.verification_token import VerificationToken


VERIFICATION_CODE_LENGTH = 12
_NON_ALPHANUMERIC = re.compile(r'[^a-zA-Z0-9]')


class LegacyVerificationCodeGenerator(IVerificationCodeGenerator):
    """
    Display code: base64 of "code-eventId-userId-timestamp", alphanumerics
    only, first 12 characters, upper-cased.

    Anyone holding the public fields can recompute it. Use it as a
    human-readable check code, not as a credential.
    """

    scheme = 'legacy'

    def generate(self, *, code: str, event_id: str, user_id: str, timestamp: int) -> str:
        combined = f'{code}-{event_id}-{user_id}-{timestamp}'
        encoded = base64.b64encode(combined.encode('utf-8')).decode('ascii')
        return _NON_ALPHANUMERIC.sub('', encoded)[:VERIFICATION_CODE_LENGTH].upper()

    def matches(self, token: VerificationToken) -> bool:
        expected = self.generate(
            code=token.code,
            event_id=token.event_id,
            user_id=token.user_id,
            timestamp=token.timestamp,
        )
        return hmac.compare_digest(expected.encode(), token.verification_code.encode('utf-8'))
