"""Optional typed configuration using pydantic-settings.

The client itself takes credentials as plain arguments.  Applications that
prefer environment-driven setup can load a ``Settings`` instance (reading
``SCW_*`` variables and an optional ``.env`` file) and pass it to
``TransactionalClient.from_settings``.  Nothing here runs on import.

IMPORTANT: This module only imports from ``transactional_mail.domain`` to
keep ``client`` free to import it lazily.
"""

from __future__ import annotations

from functools import lru_cache

import structlog
from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from transactional_mail.domain.errors import ConfigurationError
from transactional_mail.domain.types import DEFAULT_ENDPOINT_BASE, DEFAULT_REGION

logger = structlog.get_logger()


class Settings(BaseSettings):
    """Client settings loaded from ``SCW_``-prefixed environment variables.

    ``SecretStr`` keeps the secret key out of reprs and log output.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -- Credentials -----------------------------------------------------------
    access_key: str = ""
    secret_key: SecretStr = SecretStr("")
    default_project_id: str = ""

    # -- Endpoint --------------------------------------------------------------
    default_region: str = DEFAULT_REGION.value
    tem_api_url: str = DEFAULT_ENDPOINT_BASE
    tem_domain_id: str = ""
    http_timeout: float | None = None

    # -- General ---------------------------------------------------------------
    production: bool = False


@lru_cache
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance.

    Call ``get_settings.cache_clear()`` in tests to reset.

    Raises:
        pydantic.ValidationError: If an environment value has the wrong type.
    """
    try:
        return Settings()
    except ValidationError as exc:
        # Log only the structured errors list, never raw secret values.
        logger.error("settings_validation_failed", errors=exc.errors(include_input=False))
        raise


def validate_credentials(settings: Settings) -> None:
    """Check that the credentials needed to send are present.

    In **production** mode a missing credential raises.  In development
    mode each one is logged as a warning and loading continues.

    Args:
        settings: The loaded settings.

    Raises:
        ConfigurationError: In production mode, listing every missing value.
    """
    errors: list[str] = []

    if not settings.access_key:
        errors.append("SCW_ACCESS_KEY is empty or not set")
    if not settings.secret_key.get_secret_value():
        errors.append("SCW_SECRET_KEY is empty or not set")
    if not settings.default_project_id:
        errors.append("SCW_DEFAULT_PROJECT_ID is empty or not set")

    if not errors:
        logger.info("credential_validation_passed")
        return

    if settings.production:
        for err in errors:
            logger.error("credential_missing", detail=err)
        raise ConfigurationError("Missing required credentials: " + "; ".join(errors))

    for err in errors:
        logger.warning("credential_missing_dev", detail=err)
