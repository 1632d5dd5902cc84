"""Configuration helpers for the cricket league data layer."""

from __future__ import annotations

from dataclasses import dataclass
import os
from dotenv import load_dotenv


@dataclass(frozen=True)
class LeagueConfig:
    admin_email: str = "admin@cnfl.com"
    admin_password: str = "password"
    admin_name: str = "Admin User"
    debug: bool = False
    log_dir: str | None = None


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str | None) -> bool:
    if raw is None:
        return False
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false).")


def load_config() -> LeagueConfig:
    load_dotenv()
    defaults = LeagueConfig()

    admin_email = (os.getenv("CNFL_ADMIN_EMAIL") or defaults.admin_email).strip()
    if "@" not in admin_email:
        raise ValueError("CNFL_ADMIN_EMAIL must be an email address.")

    admin_password = os.getenv("CNFL_ADMIN_PASSWORD")
    if admin_password is None or admin_password == "":
        admin_password = defaults.admin_password

    log_dir = os.getenv("CNFL_LOG_DIR") or None

    return LeagueConfig(
        admin_email=admin_email,
        admin_password=admin_password,
        admin_name=os.getenv("CNFL_ADMIN_NAME") or defaults.admin_name,
        debug=_parse_bool("CNFL_DEBUG", os.getenv("CNFL_DEBUG")),
        log_dir=log_dir,
    )
