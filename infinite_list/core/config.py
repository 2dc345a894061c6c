"""Environment-driven defaults for list controllers and item sources."""

import functools
from dataclasses import dataclass
from os import getenv

DEFAULT_PAGE_SIZE = 10
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_RETRY_ATTEMPTS = 3
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ListSettings:
    """Package-wide defaults.

    Attributes:
        page_size: Items requested per fetch when a controller does not set
            its own page size.
        http_timeout: Total timeout in seconds for one HTTP page request.
        retry_attempts: Retries used by ``with_retry`` wrappers built from
            these settings.
        log_level: Level name used by ``configure_logging``.
        log_json: Emit JSON log lines instead of console output.
    """

    page_size: int = DEFAULT_PAGE_SIZE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    log_level: str = DEFAULT_LOG_LEVEL
    log_json: bool = False

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be > 0, got {self.page_size}")
        if self.http_timeout <= 0:
            raise ValueError(f"http_timeout must be > 0, got {self.http_timeout}")
        if self.retry_attempts < 0:
            raise ValueError(
                f"retry_attempts must be >= 0, got {self.retry_attempts}"
            )
        object.__setattr__(self, "log_level", parse_log_level(self.log_level))

    @classmethod
    def from_env(cls) -> "ListSettings":
        """Build settings from INFINITE_LIST_* environment variables.

        Raises:
            ValueError: If a variable is set but not a valid value.
        """
        return cls(
            page_size=_int_env("INFINITE_LIST_PAGE_SIZE", DEFAULT_PAGE_SIZE),
            http_timeout=_float_env("INFINITE_LIST_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            retry_attempts=_int_env(
                "INFINITE_LIST_RETRY_ATTEMPTS", DEFAULT_RETRY_ATTEMPTS
            ),
            log_level=_level_env("INFINITE_LIST_LOG_LEVEL", DEFAULT_LOG_LEVEL),
            log_json=_bool_env("INFINITE_LIST_LOG_JSON"),
        )


def _int_env(name: str, default: int) -> int:
    raw = getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as ex:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from ex


def _float_env(name: str, default: float) -> float:
    raw = getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as ex:
        raise ValueError(f"{name} must be a number, got {raw!r}") from ex


def _level_env(name: str, default: str) -> str:
    raw = getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse_log_level(raw)
    except ValueError as ex:
        raise ValueError(f"{name}: {ex}") from ex


def _bool_env(name: str) -> bool:
    raw = (getenv(name) or "").strip().lower()
    if raw in ("", "0", "false", "no", "off"):
        return False
    if raw in ("1", "true", "yes", "on"):
        return True
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def parse_log_level(level: str) -> str:
    """Normalize a level name such as ``"debug"`` to ``"DEBUG"``.

    Raises:
        ValueError: If it is not one of the standard level names.
    """
    normalized = level.strip().upper()
    if normalized not in LOG_LEVELS:
        choices = ", ".join(LOG_LEVELS)
        raise ValueError(f"log level must be one of {choices}, got {level!r}")
    return normalized


@functools.lru_cache(maxsize=1)
def get_settings() -> ListSettings:
    """Return the process-wide settings, read from the environment once.

    Call ``get_settings.cache_clear()`` to re-read the environment.
    """
    return ListSettings.from_env()
