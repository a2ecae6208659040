import attrs

from src.service.ticketing.domain.value_object.verification_token import VerificationToken


@attrs.define(frozen=True)
class IssuedVerificationToken:
    token: VerificationToken
    verification_url: str
    qr_code_png_base64: str = attrs.field(repr=False)
