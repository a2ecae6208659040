"""
Caller identity for HTTP requests.

Tokens are issued and checked by the remote backend; this service only
forwards the bearer token and trusts the identity the backend returns.
"""

from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Header
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.exception.exceptions import AuthenticationError
from src.service.ticketing.app.interface.i_ticketing_backend import ITicketingBackend
from src.service.ticketing.domain.value_object.current_user_info import CurrentUserInfo


BEARER_PREFIX = 'bearer '


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        raise AuthenticationError('Not authenticated')
    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise AuthenticationError('Not authenticated')
    return token


@inject
async def get_current_user(
    authorization: Optional[str] = Header(None),
    backend: ITicketingBackend = Depends(Provide[Container.ticketing_backend]),
) -> CurrentUserInfo:
    token = extract_bearer_token(authorization)

    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span('auth.get_current_user'):
        return await backend.get_current_user(access_token=token)
