"""Environment-backed configuration for the storefront test suite."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urljoin

from storefront_e2e.errors import ConfigurationError

ENV_PREFIX = "STOREFRONT_"

DEFAULT_BASE_URL = "https://automationteststore.com"
DEFAULT_AXE_SCRIPT_URL = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"

BROWSERS = ("chromium", "firefox", "webkit")
SEVERITIES = ("minor", "moderate", "serious", "critical")
ARTIFACT_MODES = ("on", "off", "retain-on-failure")

_TRUTHY = {"1", "true", "yes", "y", "on"}
_FALSY = {"0", "false", "no", "n", "off"}


def _env(name: str, default: str = "") -> str:
    return os.environ.get(f"{ENV_PREFIX}{name}", default).strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name).lower()
    if not raw:
        return default
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ConfigurationError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = _env(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    raw = _env(name, default).lower()
    if raw not in choices:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be one of {choices}, got {raw!r}")
    return raw


def get_directory_from_env(env_name: str, default_path: str) -> Path:
    """Return a directory path from env, ensuring it exists."""
    configured = os.environ.get(env_name, default_path)
    directory = Path(configured)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


@dataclass(frozen=True)
class Settings:
    """Resolved run configuration. Build with :func:`load_settings`."""

    base_url: str = DEFAULT_BASE_URL
    browser: str = "chromium"
    headless: bool = True
    slow_mo: int = 0
    timeout_ms: int = 10_000
    navigation_timeout_ms: int = 30_000
    artifacts_dir: Path = Path("artifacts")
    retries: int = 1
    workers: str = "auto"
    a11y_threshold: str = "serious"
    axe_script_url: str = DEFAULT_AXE_SCRIPT_URL
    data_seed: int | None = None
    username: str = ""
    password: str = ""
    video: str = "retain-on-failure"
    trace: str = "retain-on-failure"
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def has_account(self) -> bool:
        return bool(self.username and self.password)

    @property
    def html_report(self) -> Path:
        return self.artifacts_dir / "report.html"

    @property
    def junit_report(self) -> Path:
        return self.artifacts_dir / "junit.xml"

    def url(self, path: str) -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))


def load_settings() -> Settings:
    """Read ``STOREFRONT_*`` environment variables into a :class:`Settings`."""
    workers = _env("WORKERS", "auto").lower()
    if workers != "auto" and not workers.isdigit():
        raise ConfigurationError(f"{ENV_PREFIX}WORKERS must be 'auto' or an integer, got {workers!r}")

    seed_raw = _env("DATA_SEED")
    data_seed = _env_int("DATA_SEED", 0) if seed_raw else None

    return Settings(
        base_url=_env("BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        browser=_env_choice("BROWSER", "chromium", BROWSERS),
        headless=_env_bool("HEADLESS", True),
        slow_mo=_env_int("SLOW_MO", 0),
        timeout_ms=_env_int("TIMEOUT_MS", 10_000, minimum=1),
        navigation_timeout_ms=_env_int("NAVIGATION_TIMEOUT_MS", 30_000, minimum=1),
        artifacts_dir=Path(_env("ARTIFACTS_DIR", "artifacts")),
        retries=_env_int("RETRIES", 1),
        workers=workers,
        a11y_threshold=_env_choice("A11Y_THRESHOLD", "serious", SEVERITIES),
        axe_script_url=_env("AXE_SCRIPT_URL", DEFAULT_AXE_SCRIPT_URL),
        data_seed=data_seed,
        username=_env("USERNAME"),
        password=_env("PASSWORD"),
        video=_env_choice("VIDEO", "retain-on-failure", ARTIFACT_MODES),
        trace=_env_choice("TRACE", "retain-on-failure", ARTIFACT_MODES),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        log_json=_env_bool("LOG_JSON", False),
    )
