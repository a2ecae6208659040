"""
Translate remote API failures into the domain error taxonomy.

The backend's human-readable `message` is surfaced verbatim when present;
otherwise a generic fallback is used.
"""

from typing import Any

import httpx
import orjson

from src.platform.exception.exceptions import (
    AuthenticationError,
    CustomBaseError,
    DomainError,
    ForbiddenError,
    NetworkOrServerError,
    NotFoundError,
    SoldOut,
    TicketStateConflict,
)


GENERIC_FAILURE_MESSAGE = 'Request failed, please try again'
_SOLD_OUT_MARKERS = ('sold out', 'sold-out', 'soldout', 'no tickets available')


def extract_message(response: httpx.Response) -> str:
    try:
        body: Any = orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return ''

    if not isinstance(body, dict):
        return ''
    message = body.get('message') or body.get('detail') or body.get('error') or ''
    # NestJS validation errors arrive as a list of strings
    if isinstance(message, list):
        return ', '.join(str(item) for item in message)
    return str(message)


def translate_error_response(response: httpx.Response) -> CustomBaseError:
    status_code = response.status_code
    message = extract_message(response)

    if status_code >= 500:
        return NetworkOrServerError(message or NetworkOrServerError().message)
    if any(marker in message.lower() for marker in _SOLD_OUT_MARKERS):
        return SoldOut(message)
    if status_code == 409:
        return TicketStateConflict(message or TicketStateConflict().message)
    if status_code == 401:
        return AuthenticationError(message or 'Please log in to continue')
    if status_code == 403:
        return ForbiddenError(message or "You don't have permission to perform this action")
    if status_code == 404:
        return NotFoundError(message or 'Not found')
    return DomainError(message or GENERIC_FAILURE_MESSAGE, status_code)


def translate_transport_error(exc: httpx.HTTPError) -> NetworkOrServerError:
    if isinstance(exc, httpx.TimeoutException):
        return NetworkOrServerError('Ticketing service timed out, please try again')
    return NetworkOrServerError()
