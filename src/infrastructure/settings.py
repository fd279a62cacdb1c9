"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(
            f"Environment variable {name} must be an integer, got {raw!r}"
        ) from exc


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger database connection.

    Attributes:
        db_url: Fully qualified SQLAlchemy URL of the ledger database.
        pool_size: Number of pooled connections kept open.
        max_overflow: Extra connections allowed above ``pool_size``.
        echo: Whether SQLAlchemy logs every statement.
    """

    db_url: str
    pool_size: int = 5
    max_overflow: int = 5
    echo: bool = False

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables (and ``.env``).

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        db_url = _get_env_var("LEDGER_DB_URL")
        return cls(
            db_url=db_url,
            pool_size=_get_int("LEDGER_DB_POOL_SIZE", 5),
            max_overflow=_get_int("LEDGER_DB_MAX_OVERFLOW", 5),
            echo=_get_bool("LEDGER_DB_ECHO", False),
        )


__all__ = ["LedgerSettings"]
