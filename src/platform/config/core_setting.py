from pathlib import Path
from typing import Annotated, List, Literal

import orjson
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Ticket Resale Service'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    SERVICE_NAME: str = 'ticket-resale'

    # Origin of this application; verification URLs resolve back here
    APP_ORIGIN: str = 'http://localhost:3000'

    # Remote ticketing API (source of truth for tickets, events, payments)
    BACKEND_API_URL: str = 'http://localhost:8000/api'
    BACKEND_TIMEOUT_SECONDS: float = 10.0

    # Bank registry used to validate payout destinations
    BANK_CODES_URL: str = 'http://localhost:8000/api/banks'

    # Resale
    MAX_RESALE_PRICE: int = 10_000_000

    # Verification code scheme: 'legacy' (display code) or 'hmac' (server secret)
    VERIFICATION_CODE_SCHEME: Literal['legacy', 'hmac'] = 'legacy'
    VERIFICATION_CODE_SECRET: SecretStr = SecretStr('test_verification_code_secret')

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []  # comma-separated frontend URLs

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.startswith('['):
            return [str(i) for i in orjson.loads(v)]
        elif isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    @field_validator('APP_ORIGIN', 'BACKEND_API_URL', mode='after')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')


settings = Settings()  # type: ignore
