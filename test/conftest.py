"""
Test Configuration and Fixtures

- Environment set before any application import (settings and the log sink
  read it at import time)
- Caller, bank registry and settings fixtures shared by all unit tests
- Use case tests mock the backend ports with AsyncMock; gateway tests run the
  real adapter over httpx.MockTransport
"""

# =============================================================================
# Environment setup MUST happen before any application import
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('APP_ORIGIN', 'https://tickets.example.com')
    os.environ.setdefault('BACKEND_API_URL', 'https://backend.example.com/api')
    os.environ.setdefault('BANK_CODES_URL', 'https://backend.example.com/api/banks')
    os.environ.setdefault('VERIFICATION_CODE_SCHEME', 'legacy')


_early_setup_test_environment()

import pytest  # noqa: E402

from src.platform.config.core_setting import Settings  # noqa: E402
from src.service.ticketing.domain.value_object.bank import Bank, BankRegistry  # noqa: E402
from src.service.ticketing.domain.value_object.current_user_info import (  # noqa: E402
    CurrentUserInfo,
)
from test.constants import BUYER_ID, SELLER_ID, TEST_BANKS  # noqa: E402


@pytest.fixture
def seller() -> CurrentUserInfo:
    return CurrentUserInfo(user_id=SELLER_ID, access_token='seller-token')


@pytest.fixture
def buyer() -> CurrentUserInfo:
    return CurrentUserInfo(user_id=BUYER_ID, access_token='buyer-token')


@pytest.fixture
def bank_registry() -> BankRegistry:
    return BankRegistry.from_banks(Bank(code=code, name=name) for code, name in TEST_BANKS)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        APP_ORIGIN='https://tickets.example.com',
        MAX_RESALE_PRICE=10_000_000,
        VERIFICATION_CODE_SCHEME='legacy',
    )
