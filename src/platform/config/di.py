"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers
import httpx

from src.platform.config.core_setting import Settings
from src.service.ticketing.driven_adapter.backend.http_bank_registry import HttpBankRegistry
from src.service.ticketing.driven_adapter.backend.http_ticketing_backend import (
    HttpTicketingBackend,
)
from src.service.ticketing.driven_adapter.qr.qr_code_renderer_impl import QrCodeRendererImpl
from src.service.ticketing.driven_adapter.verification.hmac_verification_code_generator import (
    HmacVerificationCodeGenerator,
)
from src.service.ticketing.driven_adapter.verification.legacy_verification_code_generator import (
    LegacyVerificationCodeGenerator,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # One pooled HTTP client per process, closed in the app lifespan
    http_client = providers.Singleton(
        httpx.AsyncClient,
        base_url=config_service.provided.BACKEND_API_URL,
        timeout=config_service.provided.BACKEND_TIMEOUT_SECONDS,
        headers={'Accept': 'application/json'},
    )

    # Remote backend gateways
    ticketing_backend = providers.Singleton(HttpTicketingBackend, client=http_client)
    bank_registry = providers.Singleton(
        HttpBankRegistry,
        client=http_client,
        bank_codes_url=config_service.provided.BANK_CODES_URL,
    )

    # Verification code scheme, chosen by VERIFICATION_CODE_SCHEME
    verification_code_generator = providers.Selector(
        config_service.provided.VERIFICATION_CODE_SCHEME,
        legacy=providers.Singleton(LegacyVerificationCodeGenerator),
        hmac=providers.Singleton(
            HmacVerificationCodeGenerator,
            secret=config_service.provided.VERIFICATION_CODE_SECRET,
        ),
    )

    qr_code_renderer = providers.Singleton(QrCodeRendererImpl)


container = Container()
