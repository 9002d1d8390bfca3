from decimal import Decimal
from pathlib import Path
from typing import Annotated, List

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

    PROJECT_NAME: str = 'CineMaster'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    SITE_URL: str = 'http://localhost:8000'

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'cinemaster'

    # Connection pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15  # idle session timeout
    REMEMBER_ME_DAYS: int = 30
    COOKIE_SECURE: bool = False  # Set to True behind HTTPS

    # Login lockout (per client IP)
    MAX_LOGIN_ATTEMPTS: int = 7
    LOCKOUT_SECONDS: int = 1800

    # Account tokens
    VERIFICATION_TOKEN_EXPIRE_HOURS: int = 24
    RESET_PASSWORD_TOKEN_EXPIRE_HOURS: int = 1

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Booking rules
    BOOKING_FEE: Decimal = Decimal('1.50')
    PRICE_TOLERANCE: Decimal = Decimal('0.01')
    SHOWTIME_BUFFER_MINUTES: int = 20
    BOOKING_REFERENCE_PREFIX: str = 'CM'

    # Simulated payment provider
    PAYMENT_CURRENCY: str = 'usd'
    PAYMENT_DECLINE_TOKENS: Annotated[List[str], NoDecode] = ['tok_chargeDeclined']

    @field_validator('PAYMENT_DECLINE_TOKENS', mode='before')
    @classmethod
    def assemble_decline_tokens(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Simulated outbound mail
    EMAIL_LOG_FILE: str = str(_PROJECT_ROOT / 'logs' / 'email_log.txt')
    SITE_EMAIL: str = 'noreply@cinemaster.com'

    # Admin listings
    AUDIT_LOG_LIST_LIMIT: int = 500


settings = Settings()  # type: ignore
