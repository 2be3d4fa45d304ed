import logging
import os
from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

module_path = os.path.dirname(os.path.realpath(__file__))
_settings_instance: Optional["Settings"] = None

dont_use_env = os.getenv("WEBAUTHNKIT_NO_ENV", "false").lower() in ("true", "1", "t")


class Settings(BaseSettings):
    """
    Library configuration, loaded from environment variables (and an optional .env file).
    Nothing here is policy: the RP values only fill in defaults the caller did not pass.
    """
    APP_NAME: str = "webauthnkit"

    # Relying party defaults
    WEBAUTHN_RP_ID: Optional[str] = None  # Used by verify_rp_id_hash() and request options when no rp id is given
    WEBAUTHN_RP_NAME: Optional[str] = None
    WEBAUTHN_TIMEOUT_MS: Optional[int] = None  # Added to options only when set

    # AAGUID dataset, format of https://github.com/passkeydeveloper/passkey-authenticator-aaguids
    AAGUID_DATA_PATH: str = os.path.join(module_path, "data", "aaguid.json")

    model_config = SettingsConfigDict(env_file=None if dont_use_env else os.getenv("ENV_FILE_NAME", ".env"),
                                      env_file_encoding='utf-8', extra='ignore')


def init_settings(**kwargs: Any) -> "Settings":
    """
    Initializes or re-initializes the global settings singleton.

    Args:
        **kwargs: Keyword arguments to initialize settings with.
    """
    global _settings_instance, dont_use_env
    if _settings_instance is not None:
        logger.warning("Settings have already been initialized. Re-initializing.")
    dont_use_env = kwargs.pop("dont_use_env", True)
    _settings_instance = Settings(**kwargs)
    return _settings_instance


def get_settings() -> "Settings":
    """
    Retrieves the global settings singleton.

    If settings have not been initialized manually via `init_settings()`, this
    function will auto-initialize them, unless the `WEBAUTHNKIT_NO_ENV`
    flag is set.
    """
    global _settings_instance
    if _settings_instance is None:
        if dont_use_env:
            raise RuntimeError(
                "WEBAUTHNKIT_NO_ENV is set. Settings must be initialized manually "
                "by calling `init_settings()` at application startup."
            )
        logger.debug("Auto-initializing settings on first access.")
        _settings_instance = init_settings(dont_use_env=False)
    return _settings_instance


# Lets other modules do `from webauthnkit.core.config import settings`;
# the singleton is only built the first time an attribute is read.
class _SettingsProxy:
    def __getattr__(self, name: str) -> Any:
        return getattr(get_settings(), name)


settings = _SettingsProxy()
