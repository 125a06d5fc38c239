"""
Application Configuration

Loads settings from .streamlit/secrets.toml, falling back to environment
variables when the file is missing or unreadable.
"""

import logging
import math
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Mapping, Optional

import toml

from enrollment_engine import DEFAULT_PAYMENT_DELAY_SECONDS
from tutor_gateway import DEFAULT_TIMEOUT_SECONDS, DEFAULT_TUTOR_MODEL
from user_profile import DEFAULT_BALANCE

logger = logging.getLogger(__name__)

DEFAULT_SECRETS_PATH = Path(".streamlit/secrets.toml")
API_KEY_NAMES = ("GOOGLE_AI_API_KEY", "API_KEY")


@dataclass(frozen=True)
class AppConfig:
    """Data class representing runtime settings"""
    google_ai_api_key: Optional[str] = None
    tutor_model: str = DEFAULT_TUTOR_MODEL
    tutor_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    payment_delay_seconds: float = DEFAULT_PAYMENT_DELAY_SECONDS
    starting_balance: Decimal = DEFAULT_BALANCE
    log_level: str = "INFO"


def _read_secrets(secrets_path: Path) -> Mapping:
    if not secrets_path.exists():
        logger.info("No secrets.toml found, using environment variables")
        return {}
    try:
        secrets = toml.load(secrets_path)
        logger.info(f"Loaded configuration from {secrets_path}")
        return secrets
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning(f"Error reading secrets.toml: {e}, falling back to environment variables")
        return {}


def _as_float(value, name: str, default: float, allow_zero: bool = True) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {name} value {value!r}; using {default}")
        return default
    if not math.isfinite(parsed) or parsed < 0 or (parsed == 0 and not allow_zero):
        logger.warning(f"{name} must be a finite {'non-negative' if allow_zero else 'positive'} number; using {default}")
        return default
    return parsed


def _as_decimal(value, name: str, default: Decimal) -> Decimal:
    try:
        parsed = Decimal(str(value))
    except InvalidOperation:
        logger.warning(f"Invalid {name} value {value!r}; using {default}")
        return default
    if not parsed.is_finite() or parsed < 0:
        logger.warning(f"{name} must be a finite non-negative amount; using {default}")
        return default
    return parsed


def load_config(
    secrets_path: Path = DEFAULT_SECRETS_PATH,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Build an ``AppConfig``; secrets.toml values win over the environment"""
    env = os.environ if environ is None else environ
    secrets = _read_secrets(secrets_path)

    def lookup(name: str):
        if name in secrets:
            return secrets[name]
        return env.get(name)

    api_key = None
    for name in API_KEY_NAMES:
        api_key = lookup(name)
        if api_key:
            break
    if not api_key:
        logger.warning("GOOGLE_AI_API_KEY is not set. Set it in .streamlit/secrets.toml or as environment variable")
        api_key = None

    defaults = AppConfig()
    timeout = lookup("TUTOR_TIMEOUT_SECONDS")
    delay = lookup("PAYMENT_DELAY_SECONDS")
    balance = lookup("STARTING_BALANCE")

    return AppConfig(
        google_ai_api_key=api_key,
        tutor_model=lookup("TUTOR_MODEL") or defaults.tutor_model,
        tutor_timeout_seconds=(
            _as_float(timeout, "TUTOR_TIMEOUT_SECONDS", defaults.tutor_timeout_seconds, allow_zero=False)
            if timeout is not None else defaults.tutor_timeout_seconds
        ),
        payment_delay_seconds=(
            _as_float(delay, "PAYMENT_DELAY_SECONDS", defaults.payment_delay_seconds)
            if delay is not None else defaults.payment_delay_seconds
        ),
        starting_balance=(
            _as_decimal(balance, "STARTING_BALANCE", defaults.starting_balance)
            if balance is not None else defaults.starting_balance
        ),
        log_level=str(lookup("LOG_LEVEL") or defaults.log_level).upper(),
    )
