from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXEMPT_OPERATIONS = [
    "admin.localLogin",
    "admin.localRegister",
    "admin.requestPasswordReset",
    "admin.resetPassword",
    "auth.logout",
    "public.submitInquiry",
    "public.submitProperty",
    "public.submitPropertyRequest",
]


class Settings(BaseSettings):
    environment: str = Field(default="development", alias="ENVIRONMENT")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Double-submit cookie pair
    csrf_cookie_name: str = Field(default="__csrf_token", alias="CSRF_COOKIE_NAME")
    csrf_readable_cookie_name: str = Field(default="csrf_token", alias="CSRF_READABLE_COOKIE_NAME")
    csrf_header_name: str = Field(default="x-csrf-token", alias="CSRF_HEADER_NAME")
    csrf_cookie_max_age: int = Field(default=24 * 60 * 60, alias="CSRF_COOKIE_MAX_AGE")

    # Routing collaborators
    csrf_token_path: str = Field(default="/api/csrf-token", alias="CSRF_TOKEN_PATH")
    csrf_guarded_prefix: str = Field(default="/api/trpc", alias="CSRF_GUARDED_PREFIX")
    csrf_exempt_operations: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXEMPT_OPERATIONS),
        alias="CSRF_EXEMPT_OPERATIONS",
    )

    # Set to false when the app is reachable without a TLS-terminating proxy in front
    trust_forwarded_proto: bool = Field(default=True, alias="TRUST_FORWARDED_PROTO")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
