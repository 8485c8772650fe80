"""Configuration management for the marina portal."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    database_url: str
    roster_path: str
    weekly_shifts_path: str
    host: str
    port: int
    debug: bool
    log_level: str
    admin_mode: bool
    current_user_is_admin: bool
    sync_on_startup: bool

    @property
    def HOST(self) -> str:
        """Alias for host."""
        return self.host

    @property
    def PORT(self) -> int:
        """Alias for port."""
        return self.port

    @property
    def DEBUG(self) -> bool:
        """Alias for debug."""
        return self.debug

    @property
    def admin_flag_set(self) -> bool:
        """True when either stored admin flag is on."""
        return self.admin_mode or self.current_user_is_admin

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        return cls(
            database_url=os.getenv(
                "DATABASE_URL",
                "sqlite+aiosqlite:///./marina_portal.db",
            ),
            roster_path=os.getenv("ROSTER_PATH", "data/employees.json"),
            weekly_shifts_path=os.getenv(
                "WEEKLY_SHIFTS_PATH", "data/weekly_shifts.json"
            ),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=_flag("DEBUG"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            admin_mode=_flag("ADMIN_MODE"),
            current_user_is_admin=_flag("CURRENT_USER_IS_ADMIN"),
            sync_on_startup=_flag("SYNC_ON_STARTUP", "true"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
