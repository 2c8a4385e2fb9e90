from __future__ import annotations

import argparse
import dataclasses
import logging
from typing import Optional, Sequence

import requests
from googleapiclient.errors import HttpError

from nba_sync.config import ConfigError, get_settings, read_config
from nba_sync.gcal import build_service, clear_events
from nba_sync.parser import ScheduleError
from nba_sync.schedule import FetchError, ScheduleCache
from nba_sync.store import FileSnapshotStore
from nba_sync.sync import sync_team

# ValueError covers unreadable JSON in snapshots and feed responses.
RUN_ERRORS = (FetchError, ScheduleError, requests.RequestException, HttpError, ValueError)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync an NBA team's schedule to Google Calendar")
    parser.add_argument("--config", type=str, default=None, help="Path to config.json")
    parser.add_argument("--year", type=int, default=None, help="Season start year, e.g. 2022 for 2022-23")
    parser.add_argument("--clear", action="store_true", help="Delete events from Sept 1 of the season year instead of inserting")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    settings = get_settings()
    try:
        config = read_config(args.config or settings.config_file)
    except ConfigError as exc:
        logging.error("%s", exc)
        return 1
    if args.year is not None:
        config = dataclasses.replace(config, year=args.year)

    service = build_service(settings.google_client_secrets, settings.google_token_file)

    try:
        if args.clear:
            report = clear_events(service, config.calendar_id, config.year)
        else:
            cache = ScheduleCache(
                store=FileSnapshotStore(settings.cache_dir),
                schedule_url=settings.schedule_url,
                teams_url=settings.teams_url,
                timeout=settings.request_timeout,
            )
            report = sync_team(config, cache, service, tz=settings.timezone)
    except RUN_ERRORS as exc:
        logging.error("%s: %s", type(exc).__name__, exc)
        return 1

    logging.info("complete %s", report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
