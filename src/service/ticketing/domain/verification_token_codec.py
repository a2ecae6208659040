"""
Verification Token Codec

Builds the URL a ticket's QR code points to and parses it back at the door.

    <app-origin>/verify-ticket?data=<percent-encoded compact JSON>

Decoding is a well-formedness filter only. It never raises: anything that is
not a JSON object carrying ticketId, eventId, userId and verificationCode
decodes to None. Authenticity is decided by the backend (and, when enabled,
by the HMAC verification code), never by this module.
"""

from typing import Any, Optional
from urllib.parse import parse_qs, quote, unquote, urlsplit

import orjson

from src.service.ticketing.domain.value_object.verification_token import (
    REQUIRED_TOKEN_FIELDS,
    VerificationToken,
)


VERIFY_TICKET_PATH = '/verify-ticket'
DATA_PARAM = 'data'

# Characters encodeURIComponent leaves alone besides alphanumerics and -_.~
_URI_COMPONENT_SAFE = "!*'()"


def encode_token(token: VerificationToken) -> str:
    return orjson.dumps(token.to_wire()).decode()


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_verification_url(token: VerificationToken, origin: str) -> str:
    data = encode_uri_component(encode_token(token))
    return f'{origin.rstrip("/")}{VERIFY_TICKET_PATH}?{DATA_PARAM}={data}'


def _as_identifier(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    return None


def _as_timestamp(value: Any) -> Optional[int]:
    if value is None:
        return 0
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return None
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    return None


def decode_verification_data(data: Optional[str]) -> Optional[VerificationToken]:
    """
    Parse the `data` query value of a verification URL.

    Accepts the value either still percent-encoded or already decoded once
    by the web framework.

    Returns:
        The token, or None when the value is malformed or incomplete
    """
    if not data or not isinstance(data, str):
        return None

    try:
        text = data if data.lstrip().startswith('{') else unquote(data, errors='strict')
        payload = orjson.loads(text)
    except ValueError:
        # UnicodeDecodeError and orjson.JSONDecodeError both derive from ValueError
        return None

    if not isinstance(payload, dict):
        return None

    fields = {name: _as_identifier(payload.get(name)) for name in REQUIRED_TOKEN_FIELDS}
    if not all(fields.values()):
        return None

    timestamp = _as_timestamp(payload.get('timestamp'))
    if timestamp is None:
        return None

    return VerificationToken(
        ticket_id=fields['ticketId'] or '',
        event_id=fields['eventId'] or '',
        user_id=fields['userId'] or '',
        code=_as_identifier(payload.get('code')) or '',
        verification_code=fields['verificationCode'] or '',
        timestamp=timestamp,
    )


def parse_verification_url(url: str) -> Optional[VerificationToken]:
    """Decode the token carried by a full verification URL (e.g. a scanned QR code)."""
    try:
        query = urlsplit(url).query
    except ValueError:
        return None
    values = parse_qs(query).get(DATA_PARAM)
    if not values:
        return None
    return decode_verification_data(values[0])
