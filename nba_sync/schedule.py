from __future__ import annotations

import json
import logging
from typing import Optional

import requests

from .store import SnapshotStore


class FetchError(Exception):
    pass


def schedule_key(year: int) -> str:
    return f"{year}-schedule.json"


def teams_key(year: int) -> str:
    return f"{year}-teams.json"


class ScheduleCache:
    """Write-once cache of season documents.

    A snapshot is never refreshed or expired; delete it from the store to force a
    new download.
    """

    def __init__(
        self,
        store: SnapshotStore,
        schedule_url: str,
        teams_url: Optional[str] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.store = store
        self.schedule_url = schedule_url
        self.teams_url = teams_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_season(self, year: int) -> Optional[dict]:
        return self._get(schedule_key(year), self.schedule_url.format(year=year))

    def get_teams(self, year: int) -> Optional[dict]:
        if not self.teams_url:
            logging.error("No teams URL configured for season %s", year)
            return None
        return self._get(teams_key(year), self.teams_url.format(year=year))

    def _get(self, key: str, url: str) -> Optional[dict]:
        cached = self.store.read(key)
        if cached is not None:
            logging.info("Using cached snapshot %s", key)
            return json.loads(cached)
        return self._download_and_save(key, url)

    def _download_and_save(self, key: str, url: str) -> Optional[dict]:
        logging.info("Fetching %s", url)
        response = self.session.get(url, timeout=self.timeout)
        if not response.ok:
            logging.error("Non 2xx return code %s from %s", response.status_code, url)
            logging.error("%s", response.text)
            return None
        body = response.json()
        self.store.write(key, response.content)
        logging.info("Saved snapshot %s", key)
        return body
