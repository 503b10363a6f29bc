"""Runtime configuration read from ``STOREFRONT_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigurationError(Exception):
    """An environment variable holds a value that cannot be used."""


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    data_dir: Path = DEFAULT_DATA_DIR
    flat_surcharge: Decimal = Decimal("10")
    strict_products: bool = False
    guard_stock: bool = True
    call_timeout: float | None = 5.0
    log_level: str = "DEBUG"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        environ = os.environ if environ is None else environ
        env = _raw(environ, "STOREFRONT_ENV", "development").lower()

        return Settings(
            env=env,
            data_dir=Path(_raw(environ, "STOREFRONT_DATA_DIR", "") or DEFAULT_DATA_DIR),
            flat_surcharge=_decimal(environ, "STOREFRONT_FLAT_SURCHARGE", "10"),
            strict_products=_flag(environ, "STOREFRONT_STRICT_PRODUCTS", False),
            guard_stock=_flag(environ, "STOREFRONT_GUARD_STOCK", True),
            call_timeout=_timeout(environ, "STOREFRONT_CALL_TIMEOUT", "5"),
            log_level=_level(environ, "STOREFRONT_LOG_LEVEL", _LEVELS_BY_ENV.get(env, "INFO")),
        )


def _raw(environ: Mapping[str, str], name: str, default: str) -> str:
    """The stripped value of *name*; unset and blank both mean *default*."""
    value = environ.get(name, "").strip()
    return value or default


def _flag(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _raw(environ, name, "")
    if not raw:
        return default
    value = raw.lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _decimal(environ: Mapping[str, str], name: str, default: str) -> Decimal:
    raw = _raw(environ, name, default)
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if not value.is_finite() or value < 0:
        raise ConfigurationError(f"{name} must be a non-negative number, got {raw!r}")
    return value


def _timeout(environ: Mapping[str, str], name: str, default: str) -> float | None:
    raw = _raw(environ, name, default)
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{name} cannot be negative, got {raw!r}")
    return value or None  # 0 disables the bound


def _level(environ: Mapping[str, str], name: str, default: str) -> str:
    value = _raw(environ, name, default).upper()
    if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigurationError(f"{name} must be a logging level name, got {value!r}")
    return value
