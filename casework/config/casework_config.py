"""Casework service configuration.

Environment Variables:
- ENVIRONMENT: "production" or "development" (default: development)
- CASEWORK_UPLOAD_DIR: Directory for uploaded files (default: ./uploads)
- CASEWORK_UPLOAD_BASE_URL: Public prefix of stored file URLs (default: /files)
- CASEWORK_UPLOAD_TOKEN_TTL_SECONDS: Lifetime of upload tokens (default: 900)
- CASEWORK_MAX_UPLOAD_MB: Size limit for uploads without a requirement (default: 25)
- CASEWORK_EXPIRING_SOON_DAYS: Validity warning window (default: 30)
- CASEWORK_DEFAULT_LOCALE: "pt" or "en" (default: pt)
- CASEWORK_ACTIVITY_LOG_LIMIT: Default activity log page size (default: 100)
- CASEWORK_INITIAL_ADMIN_EMAIL: Admin profile created at startup when
  no profile has this e-mail yet (default: none)
- CASEWORK_INITIAL_ADMIN_NAME: Display name of that admin (default: Administrator)
- DATABASE_URL: Enables SQLAlchemy persistence for activity logs and
  notifications when set
"""

from __future__ import annotations

import os
from dataclasses import dataclass

SUPPORTED_LOCALES: frozenset[str] = frozenset({"pt", "en"})


def _get_int_env(key: str, default: int) -> int:
    """Read an integer environment variable, falling back on absence or garbage."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class CaseworkConfig:
    """Runtime configuration.

    Attributes:
        environment: Deployment environment; "production" switches logs to JSON.
        upload_dir: Where uploaded bytes are written.
        upload_base_url: Prefix of the URLs handed out for stored files.
        upload_token_ttl_seconds: How long an upload token accepts bytes.
        max_upload_mb: Size limit when no document requirement applies.
        expiring_soon_days: Days before a validity limit that count as "expiring soon".
        default_locale: Locale used when the request names none.
        activity_log_limit: Default page size of activity log queries.
        database_url: SQLAlchemy URL, or None for in-memory persistence.
        initial_admin_email: E-mail of the admin seeded at startup, or None.
        initial_admin_name: Display name of the seeded admin.
    """

    environment: str = "development"
    upload_dir: str = "./uploads"
    upload_base_url: str = "/files"
    upload_token_ttl_seconds: int = 900
    max_upload_mb: int = 25
    expiring_soon_days: int = 30
    default_locale: str = "pt"
    activity_log_limit: int = 100
    database_url: str | None = None
    initial_admin_email: str | None = None
    initial_admin_name: str = "Administrator"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.upload_token_ttl_seconds < 1:
            raise ValueError(
                "upload_token_ttl_seconds must be positive, "
                f"got {self.upload_token_ttl_seconds}"
            )
        if self.max_upload_mb < 1:
            raise ValueError(f"max_upload_mb must be positive, got {self.max_upload_mb}")
        if self.expiring_soon_days < 0:
            raise ValueError(
                f"expiring_soon_days must be non-negative, got {self.expiring_soon_days}"
            )
        if self.default_locale not in SUPPORTED_LOCALES:
            raise ValueError(
                f"default_locale must be one of {sorted(SUPPORTED_LOCALES)}, "
                f"got {self.default_locale!r}"
            )
        if self.activity_log_limit < 1:
            raise ValueError(
                f"activity_log_limit must be positive, got {self.activity_log_limit}"
            )
        if self.initial_admin_email is not None and "@" not in self.initial_admin_email:
            raise ValueError(
                "initial_admin_email must be an e-mail address, "
                f"got {self.initial_admin_email!r}"
            )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def uses_database(self) -> bool:
        return bool(self.database_url)

    @classmethod
    def from_environment(cls) -> CaseworkConfig:
        """Build the config from environment variables with defaults."""
        return cls(
            environment=os.environ.get("ENVIRONMENT", "development"),
            upload_dir=os.environ.get("CASEWORK_UPLOAD_DIR", "./uploads"),
            upload_base_url=os.environ.get("CASEWORK_UPLOAD_BASE_URL", "/files"),
            upload_token_ttl_seconds=_get_int_env(
                "CASEWORK_UPLOAD_TOKEN_TTL_SECONDS", 900
            ),
            max_upload_mb=_get_int_env("CASEWORK_MAX_UPLOAD_MB", 25),
            expiring_soon_days=_get_int_env("CASEWORK_EXPIRING_SOON_DAYS", 30),
            default_locale=os.environ.get("CASEWORK_DEFAULT_LOCALE", "pt"),
            activity_log_limit=_get_int_env("CASEWORK_ACTIVITY_LOG_LIMIT", 100),
            database_url=os.environ.get("DATABASE_URL") or None,
            initial_admin_email=os.environ.get("CASEWORK_INITIAL_ADMIN_EMAIL") or None,
            initial_admin_name=os.environ.get(
                "CASEWORK_INITIAL_ADMIN_NAME", "Administrator"
            ),
        )


DEFAULT_CASEWORK_CONFIG = CaseworkConfig()

# Small limits for unit tests
TEST_CASEWORK_CONFIG = CaseworkConfig(
    upload_dir="/tmp/casework-test-uploads",
    upload_token_ttl_seconds=60,
    max_upload_mb=1,
)
