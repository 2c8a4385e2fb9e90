from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SCHEDULE_URL = "https://cdn.nba.com/static/json/staticData/scheduleLeagueV2.json"
LEGACY_SCHEDULE_URL = "http://data.nba.net/prod/v2/{year}/schedule.json"
LEGACY_TEAMS_URL = "http://data.nba.net/prod/v1/{year}/teams.json"

# Seasons start in autumn; January through May belong to the previous year's season.
LAST_MONTH_OF_PREVIOUS_SEASON = 5


class ConfigError(Exception):
    pass


@dataclass
class Settings:
    config_file: str
    cache_dir: str
    schedule_url: str
    teams_url: str
    request_timeout: float
    timezone: ZoneInfo
    google_client_secrets: str
    google_token_file: str


@dataclass(frozen=True)
class SyncConfig:
    team_code: str
    calendar_id: str
    year: int


def get_timezone() -> ZoneInfo:
    tz_name = os.getenv("TIMEZONE", "UTC")
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logging.warning("Invalid TIMEZONE %s, falling back to UTC", tz_name)
        return ZoneInfo("UTC")


def default_schedule_url() -> str:
    if os.getenv("FEED", "current").lower() == "legacy":
        return LEGACY_SCHEDULE_URL
    return DEFAULT_SCHEDULE_URL


def get_settings() -> Settings:
    return Settings(
        config_file=os.getenv("CONFIG_FILE", "config.json"),
        cache_dir=os.getenv("CACHE_DIR", "."),
        schedule_url=os.getenv("SCHEDULE_URL", default_schedule_url()),
        teams_url=os.getenv("TEAMS_URL", LEGACY_TEAMS_URL),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
        timezone=get_timezone(),
        google_client_secrets=os.getenv("GOOGLE_CLIENT_SECRETS", "credentials.json"),
        google_token_file=os.getenv("GOOGLE_TOKEN_FILE", "token.json"),
    )


def fallback_year(now: Optional[datetime] = None) -> int:
    """Season label year for ``now``.

    The 2022-23 season starts in October 2022 and ends in spring 2023, and the
    feed labels all of it as 2022.
    """
    now = now or datetime.now()
    if now.month <= LAST_MONTH_OF_PREVIOUS_SEASON:
        return now.year - 1
    return now.year


def _coerce_year(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value > 0:
        return value
    return None


def validate_config(raw: Any, now: Optional[datetime] = None) -> SyncConfig:
    if not isinstance(raw, dict):
        raise ConfigError("Invalid config, expected a JSON object")

    team_code = raw.get("teamCode")
    if not team_code or not isinstance(team_code, str) or len(team_code) != 3:
        raise ConfigError("Invalid config, teamCode is required to be a 3 character string")

    calendar_id = raw.get("calendarId")
    if not calendar_id or not isinstance(calendar_id, str):
        raise ConfigError("Invalid config, calendarId is required to be a string")

    raw_year = raw.get("year")
    if not raw_year:
        year = fallback_year(now)
    else:
        year = _coerce_year(raw_year)
        if year is None:
            year = fallback_year(now)
            logging.warning("Invalid year (%r) found in config, using default year: %d", raw_year, year)

    return SyncConfig(team_code=team_code.upper(), calendar_id=calendar_id, year=year)


def read_config(path: str, now: Optional[datetime] = None) -> SyncConfig:
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file {config_path} not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Config file {config_path} could not be read: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file {config_path} is not valid JSON: {exc}") from exc
    return validate_config(raw, now=now)
