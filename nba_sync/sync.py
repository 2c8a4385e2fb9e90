from __future__ import annotations

import logging
from datetime import timezone, tzinfo

from .config import SyncConfig
from .gcal import insert_events
from .models import FeedShape, SyncReport
from .parser import detect_feed_shape, filter_games, game_to_event
from .schedule import FetchError, ScheduleCache


def sync_team(config: SyncConfig, cache: ScheduleCache, service, tz: tzinfo = timezone.utc) -> SyncReport:
    season = cache.get_season(config.year)
    if not season:
        raise FetchError("Error fetching season")

    teams = None
    if detect_feed_shape(season) is FeedShape.LEGACY:
        teams = cache.get_teams(config.year)
        if not teams:
            raise FetchError("Error fetching teams")

    games = filter_games(season, config.team_code, teams)
    events = [game_to_event(game, config.team_code, tz) for game in games]
    logging.info("Syncing %d events for %s (%d season)", len(events), config.team_code, config.year)
    return insert_events(service, config.calendar_id, events)
