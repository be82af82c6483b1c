# runtime settings, read from environment variables

import os
from dataclasses import dataclass

from utils.logger import get_logger

_logger = get_logger(__name__)

DEFAULT_DB_PATH = "data/storefront.sqlite"
DEFAULT_CHECKOUT_DELAY = 1.5
DEFAULT_BCRYPT_ROUNDS = 12


@dataclass(frozen=True)
class Settings:
    db_path: str = DEFAULT_DB_PATH
    checkout_delay: float = DEFAULT_CHECKOUT_DELAY
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    admin_name: str = "store admin"
    admin_email: str = "admin@example.com"
    admin_password: str = "admin"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        _logger.warning(f"{name}={raw!r} is not a number, using {default}.")
        return default
    if value < 0:
        _logger.warning(f"{name} cannot be negative, using {default}.")
        return default
    return value


def _env_int(name: str, default: int, minimum: int, maximum: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        _logger.warning(f"{name}={raw!r} is not an integer, using {default}.")
        return default
    if not minimum <= value <= maximum:
        _logger.warning(
            f"{name} must be within {minimum}..{maximum}, using {default}."
        )
        return default
    return value


def load_settings() -> Settings:
    """Build Settings from STOREFRONT_* environment variables."""
    defaults = Settings()
    return Settings(
        db_path=os.getenv("STOREFRONT_DB_PATH") or defaults.db_path,
        checkout_delay=_env_float(
            "STOREFRONT_CHECKOUT_DELAY", defaults.checkout_delay
        ),
        # bcrypt accepts work factors 4..31
        bcrypt_rounds=_env_int(
            "STOREFRONT_BCRYPT_ROUNDS", defaults.bcrypt_rounds, 4, 31
        ),
        admin_name=os.getenv("STOREFRONT_ADMIN_NAME") or defaults.admin_name,
        admin_email=os.getenv("STOREFRONT_ADMIN_EMAIL") or defaults.admin_email,
        admin_password=os.getenv("STOREFRONT_ADMIN_PASSWORD")
        or defaults.admin_password,
    )
