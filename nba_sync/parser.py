from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Any, Dict, List, Optional

from .models import CalendarEvent, FeedShape, GameRecord


class ScheduleError(Exception):
    pass


class UnknownTeamError(ScheduleError):
    pass


def parse_utc(value: str) -> datetime:
    # Feeds use "2022-10-18T23:30:00Z" and "2022-10-18T23:30:00.000Z".
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def detect_feed_shape(doc: Any) -> FeedShape:
    if isinstance(doc, dict):
        league_schedule = doc.get("leagueSchedule")
        if isinstance(league_schedule, dict) and isinstance(league_schedule.get("gameDates"), list):
            return FeedShape.CURRENT
        league = doc.get("league")
        if isinstance(league, dict) and isinstance(league.get("standard"), list):
            return FeedShape.LEGACY
    raise ScheduleError("Unrecognized schedule document shape")


def build_team_index(teams_doc: dict) -> Dict[str, dict]:
    """Index legacy roster entries under both their teamId and tricode."""
    index: Dict[str, dict] = {}
    for team in teams_doc.get("league", {}).get("standard", []):
        index[str(team["teamId"])] = team
        index[team["tricode"]] = team
    return index


def _parse_display_time(value: Optional[str], start: datetime) -> Optional[datetime]:
    # The display field carries only a time of day on a placeholder date.
    if not value:
        return None
    clock = parse_utc(value)
    return start.replace(hour=clock.hour, minute=clock.minute, second=clock.second, microsecond=0)


def _current_games(doc: dict) -> List[GameRecord]:
    games: List[GameRecord] = []
    for game_date in doc["leagueSchedule"]["gameDates"]:
        for game in game_date.get("games", []):
            home = game["homeTeam"]
            away = game["awayTeam"]
            start = parse_utc(game["gameDateTimeUTC"])
            games.append(
                GameRecord(
                    game_id=str(game.get("gameId", "")),
                    home_tricode=home.get("teamTricode", ""),
                    away_tricode=away.get("teamTricode", ""),
                    home_name=home.get("teamName") or home.get("teamTricode", ""),
                    away_name=away.get("teamName") or away.get("teamTricode", ""),
                    start_utc=start,
                    display_time_utc=_parse_display_time(game.get("gameTimeUTC"), start),
                )
            )
    return games


def _legacy_games(doc: dict, team_index: Dict[str, dict]) -> List[GameRecord]:
    games: List[GameRecord] = []
    for game in doc["league"]["standard"]:
        home = team_index.get(str(game["hTeam"]["teamId"]))
        away = team_index.get(str(game["vTeam"]["teamId"]))
        if not home or not away:
            # All-star and exhibition opponents are missing from the roster.
            logging.debug("Skipping game %s with unknown teams", game.get("gameId"))
            continue
        games.append(
            GameRecord(
                game_id=str(game.get("gameId", "")),
                home_tricode=home["tricode"],
                away_tricode=away["tricode"],
                home_name=home.get("nickname") or home["tricode"],
                away_name=away.get("nickname") or away["tricode"],
                start_utc=parse_utc(game["startTimeUTC"]),
            )
        )
    return games


def parse_games(doc: dict, teams_doc: Optional[dict] = None) -> List[GameRecord]:
    shape = detect_feed_shape(doc)
    if shape is FeedShape.CURRENT:
        return _current_games(doc)
    if teams_doc is None:
        raise ScheduleError("Legacy schedule feed requires a teams document")
    return _legacy_games(doc, build_team_index(teams_doc))


def filter_games(doc: dict, team_code: str, teams_doc: Optional[dict] = None) -> List[GameRecord]:
    """Games in feed order where ``team_code`` is the home or away side.

    ``team_code`` must already match the feed's tricode casing.
    """
    if detect_feed_shape(doc) is FeedShape.LEGACY and teams_doc is not None:
        if team_code not in build_team_index(teams_doc):
            raise UnknownTeamError(f"Unknown team code {team_code}")
    games = [
        game
        for game in parse_games(doc, teams_doc)
        if game.home_tricode == team_code or game.away_tricode == team_code
    ]
    logging.info("Found %d games for %s", len(games), team_code)
    return games


def format_short_time(value: datetime) -> str:
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def game_to_event(game: GameRecord, team_code: str, tz: tzinfo = timezone.utc) -> CalendarEvent:
    day = game.start_utc.astimezone(tz).strftime("%Y-%m-%d")
    start_time = format_short_time((game.display_time_utc or game.start_utc).astimezone(tz))
    if game.home_tricode == team_code:
        summary = f"{game.home_name} vs {game.away_name} {start_time}"
    else:
        summary = f"{game.away_name} @ {game.home_name} {start_time}"
    return CalendarEvent(date=day, summary=summary)
